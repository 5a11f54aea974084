"""Event specification: how to find one event type and turn its logs into transfers.

An `EventSpecification` describes:
- where to look (`target` contract, `topic0` derived from `event_signature`)
- how to decode (`abi`, a one-element fragment sequence)
- how to project decoded arguments onto transfer fields (`arg_keys`,
  `fixed_values`) and log envelope fields (`log_keys`)
- the transfer `direction`, fixed at construction

All invariants are checked in `__post_init__` so a bad specification fails at
startup rather than at query time.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from eth_utils import is_hex_address

from bridgind.abi_events import (
    AbiEvent,
    AbiInput,
    get_event_signature,
    get_event_topic0,
    normalize_signature,
    parse_event_fragment,
)
from bridgind.core.errors import SpecConfigurationError
from bridgind.core.models import DEFAULT_LOG_KEYS, TRANSFER_FIELDS, Direction
from bridgind.decoding.decoder import is_hashed_when_indexed
from bridgind.decoding.paths import ArgPath

AbiFragment = str | Mapping[str, Any]


def _element_of(array_input: AbiInput) -> AbiInput:
    """Return the input describing one element of an array-typed input."""
    return array_input.model_copy(update={"type": array_input.type[: array_input.type.rfind("[")]})


def _check_path(event: AbiEvent, path: ArgPath) -> None:
    """Ensure `path` exists in the event's argument layout."""
    candidates: Sequence[AbiInput] = event.inputs
    current: AbiInput | None = None
    for depth, segment in enumerate(path.segments):
        if current is not None:
            if current.indexed and depth == 1 and is_hashed_when_indexed(current):
                raise SpecConfigurationError(
                    f"{event.name}: path {str(path)!r} descends into indexed {current.type} "
                    "whose value is only available as a topic hash"
                )
            if current.array_suffix:
                if not segment.isdigit():
                    raise SpecConfigurationError(
                        f"{event.name}: path {str(path)!r} indexes array with non-integer {segment!r}"
                    )
                current = _element_of(current)
                continue
            if not current.is_tuple:
                raise SpecConfigurationError(
                    f"{event.name}: path {str(path)!r} descends into scalar {current.type} at {segment!r}"
                )
            candidates = current.components or ()
        matches = [c for c in candidates if c.name == segment]
        if not matches:
            raise SpecConfigurationError(
                f"{event.name}: path {str(path)!r} refers to a non-existent field {segment!r}"
            )
        current = matches[0]


@dataclass(frozen=True)
class EventSpecification:
    """One event-to-transfer mapping for a single contract on a single chain."""

    target: str
    event_signature: str
    abi: Sequence[AbiFragment] = field(hash=False)
    direction: Direction
    arg_keys: Mapping[str, ArgPath | str] = field(hash=False)
    fixed_values: Mapping[str, Any] = field(default_factory=dict, hash=False)
    log_keys: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_LOG_KEYS), hash=False)
    family: str | None = None

    event: AbiEvent = field(init=False, repr=False, compare=False)
    topic0: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.target or not is_hex_address(self.target):
            raise SpecConfigurationError(f"target must be a hex address, got {self.target!r}")
        if not isinstance(self.direction, Direction):
            raise SpecConfigurationError(f"direction must be a Direction, got {self.direction!r}")

        abi = tuple(self.abi)
        if len(abi) != 1:
            raise SpecConfigurationError(f"abi must contain exactly one event fragment, got {len(abi)}")
        event = parse_event_fragment(abi[0])
        if event.anonymous:
            raise SpecConfigurationError(f"{event.name}: anonymous events have no topic0 to match")

        canonical = get_event_signature(event)
        if normalize_signature(self.event_signature) != canonical:
            raise SpecConfigurationError(
                f"event_signature {self.event_signature!r} does not match ABI fragment ({canonical})"
            )

        arg_keys = {name: ArgPath.parse(path) for name, path in self.arg_keys.items()}
        fixed_values = dict(self.fixed_values)
        overlap = arg_keys.keys() & fixed_values.keys()
        if overlap:
            raise SpecConfigurationError(
                f"{event.name}: fields {sorted(overlap)} are both mapped from args and fixed"
            )
        covered = arg_keys.keys() | fixed_values.keys()
        if covered != TRANSFER_FIELDS:
            missing = sorted(TRANSFER_FIELDS - covered)
            extra = sorted(covered - TRANSFER_FIELDS)
            raise SpecConfigurationError(
                f"{event.name}: transfer fields not covered exactly (missing={missing}, unknown={extra})"
            )
        for path in arg_keys.values():
            _check_path(event, path)

        if set(self.log_keys) != set(DEFAULT_LOG_KEYS):
            raise SpecConfigurationError(
                f"log_keys must cover exactly {sorted(DEFAULT_LOG_KEYS)}, got {sorted(self.log_keys)}"
            )

        object.__setattr__(self, "abi", abi)
        object.__setattr__(self, "arg_keys", MappingProxyType(arg_keys))
        object.__setattr__(self, "fixed_values", MappingProxyType(fixed_values))
        object.__setattr__(self, "log_keys", MappingProxyType(dict(self.log_keys)))
        object.__setattr__(self, "event", event)
        object.__setattr__(self, "topic0", get_event_topic0(event))

    @property
    def name(self) -> str:
        return self.event.name
