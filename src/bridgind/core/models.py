"""Core data models shared by the decoding and normalization layers.

This module defines:
- `Direction`: deposit / withdraw classification of a transfer.
- `EventLog`: minimal RPC log record used by the decoder.
- `TransferRecord`: canonical, chain-tagged output of the normalization engine.

Design notes
------------
- Addresses, topics and tx hashes are lowercased at the RPC boundary.
- Amounts stay Python ints (uint256-safe).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Direction(str, Enum):
    """Whether funds enter (deposit) or leave (withdraw) the bridging system."""

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


# Logical transfer fields every event specification must cover.
TRANSFER_FIELDS: frozenset[str] = frozenset({"token", "from", "to", "amount"})

# Logical log field -> `EventLog` attribute.
DEFAULT_LOG_KEYS: dict[str, str] = {
    "blockNumber": "block_number",
    "txHash": "tx_hash",
}


# === RPC record ===


@dataclass(slots=True, frozen=True)
class EventLog:
    """Raw log as fetched from RPC, minimally normalized."""

    address: str  # lowercased 0x...
    topics: tuple[str, ...]  # lowercased 0x...
    data_hex: str  # "0x..."
    block_number: int
    tx_hash: str  # lowercased 0x...
    log_index: int
    block_timestamp: int | None = None

    @property
    def topic0(self) -> str | None:
        return self.topics[0] if self.topics else None

    def data_bytes(self) -> bytes:
        """Return the data section as raw bytes."""
        data_hex = self.data_hex[2:] if self.data_hex.lower().startswith("0x") else self.data_hex
        return bytes.fromhex(data_hex) if data_hex else b""


# === Output record ===


@dataclass(slots=True, frozen=True)
class TransferRecord:
    """One normalized bridge/swap transfer, produced per matched log."""

    chain: str
    direction: Direction
    block_number: int
    tx_hash: str
    token: Any
    from_address: Any
    to_address: Any
    amount: Any

    def as_dict(self) -> dict[str, Any]:
        """Return the record keyed by logical field names."""
        return {
            "chain": self.chain,
            "direction": self.direction.value,
            "blockNumber": self.block_number,
            "txHash": self.tx_hash,
            "token": self.token,
            "from": self.from_address,
            "to": self.to_address,
            "amount": self.amount,
        }
