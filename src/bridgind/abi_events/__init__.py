"""ABI event models, canonical signatures and topic0 hashing.

Fragments may be given either as ABI JSON entries or as human-readable
declarations such as::

    "event NewTrade(address indexed userAddress, uint256 index, address to, uint256 amount, address token)"
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from eth_abi.exceptions import ABITypeError, ParseError
from eth_abi.grammar import parse as parse_abi_type
from eth_utils import keccak
from pydantic import ValidationError

from bridgind.abi_events.human_readable import parse_human_readable_event
from bridgind.abi_events.models import AbiEvent, AbiInput, canonical_type
from bridgind.core.errors import SpecConfigurationError


def get_event_signature(event: AbiEvent) -> str:
    return f"{event.name}({','.join(canonical_type(event_input) for event_input in event.inputs)})"


def get_event_topic0(event: AbiEvent) -> str:
    return "0x" + keccak(text=get_event_signature(event)).hex()


def normalize_signature(signature: str) -> str:
    """Strip whitespace so hand-written signatures compare canonically."""
    return "".join(signature.split())


def _validate_types(event: AbiEvent) -> None:
    for event_input in event.inputs:
        t = canonical_type(event_input)
        try:
            parse_abi_type(t).validate()
        except (ParseError, ABITypeError) as e:
            raise SpecConfigurationError(
                f"Invalid ABI type {t!r} for {event.name}.{event_input.name}: {e}"
            ) from e


def parse_event_fragment(fragment: str | Mapping[str, Any]) -> AbiEvent:
    """Parse one event ABI fragment (human-readable string or ABI JSON entry)."""
    try:
        if isinstance(fragment, str):
            event = parse_human_readable_event(fragment)
        else:
            event = AbiEvent.model_validate(dict(fragment))
    except ValidationError as e:
        raise SpecConfigurationError(f"Invalid event ABI fragment: {e}") from e
    _validate_types(event)
    return event


__all__ = [
    "AbiEvent",
    "AbiInput",
    "canonical_type",
    "get_event_signature",
    "get_event_topic0",
    "normalize_signature",
    "parse_event_fragment",
]
