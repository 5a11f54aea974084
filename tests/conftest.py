from typing import Any
from unittest.mock import AsyncMock

import pytest
from eth_abi import encode

from bridgind.abi_events.models import canonical_type
from bridgind.core.models import EventLog
from bridgind.decoding.specs import EventSpecification

USER = "0x" + "11" * 20
TOKEN = "0x" + "22" * 20
RECIPIENT = "0x" + "33" * 20
TOOL = "0x" + "44" * 20
TO_TOKEN = "0x" + "55" * 20
TX_HASH = "0x" + "ab" * 32


def make_log(
    spec: EventSpecification,
    args: dict[str, Any],
    *,
    block_number: int = 100,
    log_index: int = 0,
    tx_hash: str = TX_HASH,
) -> EventLog:
    """ABI-encode `args` into a log matching `spec`."""
    event = spec.event
    topics = [spec.topic0]
    for i in event.indexed_inputs:
        topics.append("0x" + encode([i.type], [args[i.name]]).hex())
    data = encode(
        [canonical_type(i) for i in event.data_inputs],
        [args[i.name] for i in event.data_inputs],
    )
    return EventLog(
        address=spec.target.lower(),
        topics=tuple(topics),
        data_hex="0x" + data.hex(),
        block_number=block_number,
        tx_hash=tx_hash,
        log_index=log_index,
    )


@pytest.fixture
def mock_rpc():
    rpc = AsyncMock()
    rpc.get_logs = AsyncMock(return_value=[])
    rpc.latest_block = AsyncMock(return_value=100)
    rpc.aclose = AsyncMock()
    return rpc


@pytest.fixture
def log_factory():
    return make_log


@pytest.fixture
def bridge_args() -> dict[str, Any]:
    return {"userAddress": USER, "index": 7, "to": RECIPIENT, "amount": 10**18, "token": TOKEN}


@pytest.fixture
def accept_args(bridge_args: dict[str, Any]) -> dict[str, Any]:
    return {**bridge_args, "txHash": b"\x01" * 32}


@pytest.fixture
def swap_deposit_args() -> dict[str, Any]:
    return {
        "userAddress": USER,
        "token": TOKEN,
        "trade": ("42161", 3, TOOL, TO_TOKEN, 500, 1, 1_700_000_000),
    }


@pytest.fixture
def swap_withdraw_args() -> dict[str, Any]:
    return {
        "userAddress": USER,
        "token": TOKEN,
        "tradeHash": b"\x02" * 32,
        "amount": 250,
        "data": b"\xde\xad",
    }
