"""ABI decoder: raw `EventLog` -> nested argument tree.

Indexed arguments are read from topics (static types decoded, dynamic types
kept as their 32-byte hash), non-indexed arguments from the data section via
`eth_abi`. Tuples become dicts keyed by component name so argument paths can
walk into them; arrays become lists; `bytes` become 0x-hex strings.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError

from bridgind.abi_events.models import AbiEvent, AbiInput, canonical_type
from bridgind.core.errors import AbiDecodeError
from bridgind.core.models import EventLog


def is_hashed_when_indexed(abi_input: AbiInput) -> bool:
    """Dynamic, tuple and array types are stored as keccak hashes in topics."""
    return abi_input.type in ("string", "bytes") or abi_input.is_tuple or bool(abi_input.array_suffix)


def _normalize(abi_input: AbiInput, value: Any) -> Any:
    """Convert eth_abi output into the argument tree representation."""
    if abi_input.array_suffix:
        element = abi_input.model_copy(update={"type": abi_input.type[: abi_input.type.rfind("[")]})
        return [_normalize(element, v) for v in value]
    if abi_input.is_tuple:
        components = abi_input.components or ()
        return {c.name: _normalize(c, v) for c, v in zip(components, value, strict=True)}
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if abi_input.type == "address" and isinstance(value, str):
        return value.lower()
    return value


def _decode_topic(abi_input: AbiInput, topic_hex: str) -> Any:
    if is_hashed_when_indexed(abi_input):
        return topic_hex.lower()
    raw = bytes.fromhex(topic_hex[2:] if topic_hex[:2].lower() == "0x" else topic_hex)
    (value,) = abi_decode([abi_input.type], raw)
    return _normalize(abi_input, value)


def decode_log(event: AbiEvent, log: EventLog) -> dict[str, Any]:
    """Decode one log against `event`, returning `{arg name: value}`.

    Raises `AbiDecodeError` if the topic count or data layout does not match.
    """
    indexed: Sequence[AbiInput] = event.indexed_inputs
    non_indexed: Sequence[AbiInput] = event.data_inputs
    if len(log.topics) != len(indexed) + 1:
        raise AbiDecodeError(
            f"{event.name}: expected {len(indexed) + 1} topics, got {len(log.topics)} "
            f"(tx={log.tx_hash}, log_index={log.log_index})"
        )

    try:
        topic_vals = [_decode_topic(i, t) for i, t in zip(indexed, log.topics[1:])]
        data_vals = abi_decode([canonical_type(i) for i in non_indexed], log.data_bytes())
        data_vals = [_normalize(i, v) for i, v in zip(non_indexed, data_vals, strict=True)]
    except (DecodingError, ValueError, TypeError) as e:
        raise AbiDecodeError(
            f"{event.name}: cannot decode log (tx={log.tx_hash}, log_index={log.log_index}): {e}"
        ) from e

    topic_iter = iter(topic_vals)
    data_iter = iter(data_vals)
    out: dict[str, Any] = {}
    for abi_input in event.inputs:
        out[abi_input.name] = next(topic_iter) if abi_input.indexed else next(data_iter)
    return out
