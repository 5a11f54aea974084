import asyncio
from unittest.mock import AsyncMock

import pytest

from conftest import RECIPIENT, TOKEN, TOOL, USER
from bridgind.adapters.base import make_range_query
from bridgind.adapters.pheasant_network import (
    BRIDGE_ADDRESSES,
    PHEASANT_REGISTRY,
    SOURCE_NAME,
    SUPPORTED_CHAINS,
    SWAP_ADDRESSES,
    build_pheasant_adapter,
    compose_pheasant_specs,
    swap_withdraw_spec,
)
from bridgind.chains.registry import ChainRegistry
from bridgind.core.models import TRANSFER_FIELDS, Direction
from bridgind.core.use_cases.normalize import NormalizationEngine

ALL_CHAINS = sorted(set(BRIDGE_ADDRESSES) | set(SWAP_ADDRESSES) | {"ethereum", "zksync"})


@pytest.mark.parametrize("chain", sorted(BRIDGE_ADDRESSES))
def test_bridge_chains_get_deposit_then_withdraw(chain: str):
    specs = [s for s in compose_pheasant_specs(chain) if s.family == "bridge"]

    assert [s.direction for s in specs] == [Direction.DEPOSIT, Direction.WITHDRAW]
    assert [s.name for s in specs] == ["NewTrade", "Accept"]
    assert all(s.target == BRIDGE_ADDRESSES[chain] for s in specs)


@pytest.mark.parametrize("chain", sorted(SWAP_ADDRESSES))
def test_swap_chains_get_deposit_then_withdraw(chain: str):
    specs = [s for s in compose_pheasant_specs(chain) if s.family == "swap"]

    assert [s.direction for s in specs] == [Direction.DEPOSIT, Direction.WITHDRAW]
    assert [s.name for s in specs] == ["SwapNewTrade", "SwapWithdrawTrade"]


@pytest.mark.parametrize("chain", ["ethereum", "zksync", "unknown-chain", ""])
def test_chains_without_tracked_contracts_compose_to_nothing(chain: str):
    assert compose_pheasant_specs(chain) == ()


@pytest.mark.parametrize("chain", ALL_CHAINS)
def test_every_spec_covers_transfer_fields_exactly(chain: str):
    for spec in compose_pheasant_specs(chain):
        assert set(spec.arg_keys) | set(spec.fixed_values) == TRANSFER_FIELDS
        assert set(spec.arg_keys).isdisjoint(spec.fixed_values)


def test_arbitrum_composes_four_specs_in_order():
    specs = compose_pheasant_specs("arbitrum")

    assert [(s.family, s.direction) for s in specs] == [
        ("bridge", Direction.DEPOSIT),
        ("bridge", Direction.WITHDRAW),
        ("swap", Direction.DEPOSIT),
        ("swap", Direction.WITHDRAW),
    ]


def test_composition_is_deterministic():
    assert compose_pheasant_specs("taiko") == compose_pheasant_specs("taiko")


def test_swap_withdraw_sender_is_router():
    spec = swap_withdraw_spec("taiko")

    assert spec.fixed_values == {"from": SWAP_ADDRESSES["taiko"]}
    assert "from" not in spec.arg_keys
    assert str(spec.arg_keys["to"]) == "userAddress"


def test_custom_registry_with_synthetic_chain():
    registry = ChainRegistry({"bridge": {"devnet": "0x" + "0a" * 20}, "swap": {}})

    specs = compose_pheasant_specs("devnet", registry)

    assert [s.target for s in specs] == ["0x" + "0a" * 20] * 2


def test_adapter_exposes_supported_chains_only(mock_rpc):
    engine = NormalizationEngine({chain: mock_rpc for chain in SUPPORTED_CHAINS})

    adapter = build_pheasant_adapter(engine)

    assert tuple(adapter) == SUPPORTED_CHAINS
    assert "ethereum" not in adapter
    with pytest.raises(TypeError):
        adapter["ethereum"] = adapter["base"]  # type: ignore[index]


@pytest.mark.asyncio
async def test_arbitrum_end_to_end(
    mock_rpc, log_factory, bridge_args, accept_args, swap_deposit_args, swap_withdraw_args
):
    specs = compose_pheasant_specs("arbitrum")
    args = [bridge_args, accept_args, swap_deposit_args, swap_withdraw_args]
    logs_by_topic = {
        spec.topic0: [log_factory(spec, a, block_number=100 + i, log_index=i)]
        for i, (spec, a) in enumerate(zip(specs, args))
    }
    mock_rpc.get_logs.side_effect = lambda **kw: logs_by_topic[kw["topic0s"][0]]
    adapter = build_pheasant_adapter(NormalizationEngine({"arbitrum": mock_rpc}), ("arbitrum",))

    records = await adapter["arbitrum"](100, 200)

    assert [r.direction for r in records] == [
        Direction.DEPOSIT,
        Direction.WITHDRAW,
        Direction.DEPOSIT,
        Direction.WITHDRAW,
    ]
    assert {r.chain for r in records} == {"arbitrum"}
    assert [r.block_number for r in records] == [100, 101, 102, 103]

    bridge_in, bridge_out, swap_in, swap_out = records
    assert (bridge_in.token, bridge_in.from_address, bridge_in.to_address, bridge_in.amount) == (
        TOKEN, USER, RECIPIENT, 10**18,
    )
    assert bridge_out.amount == 10**18
    assert (swap_in.to_address, swap_in.amount) == (TOOL, 500)
    assert swap_out.from_address == SWAP_ADDRESSES["arbitrum"].lower()
    assert swap_out.to_address == USER
    assert swap_out.amount == 250

    for call in mock_rpc.get_logs.await_args_list:
        assert call.kwargs["from_block"] == 100
        assert call.kwargs["to_block"] == 200


@pytest.mark.asyncio
async def test_arbitrum_query_is_idempotent(mock_rpc, log_factory, bridge_args):
    spec = compose_pheasant_specs("arbitrum")[0]
    log = log_factory(spec, bridge_args)
    mock_rpc.get_logs.side_effect = lambda **kw: [log] if kw["topic0s"][0] == spec.topic0 else []
    adapter = build_pheasant_adapter(NormalizationEngine({"arbitrum": mock_rpc}), ("arbitrum",))

    first = await adapter["arbitrum"](100, 200)
    second = await adapter["arbitrum"](100, 200)

    assert first == second
    assert len(first) == 1


@pytest.mark.asyncio
async def test_ethereum_yields_nothing_without_fetching(mock_rpc):
    specs = compose_pheasant_specs("ethereum")
    engine = NormalizationEngine({"ethereum": mock_rpc})
    query = make_range_query(SOURCE_NAME, "ethereum", specs, engine)

    assert specs == ()
    assert await query(0, 10_000) == []
    mock_rpc.get_logs.assert_not_awaited()


@pytest.mark.asyncio
async def test_query_delegates_source_chain_and_specs():
    engine = AsyncMock()
    engine.fetch_and_normalize = AsyncMock(return_value=[])
    specs = compose_pheasant_specs("base")
    query = make_range_query(SOURCE_NAME, "base", specs, engine)

    await query(5, 6)

    engine.fetch_and_normalize.assert_awaited_once_with(SOURCE_NAME, "base", 5, 6, specs)


def test_registry_is_shared_constant():
    assert compose_pheasant_specs("linea") == compose_pheasant_specs("linea", PHEASANT_REGISTRY)


@pytest.mark.asyncio
async def test_cancellation_propagates(mock_rpc):
    in_flight: list[str] = []
    cancelled: list[str] = []

    async def get_logs(**kw):
        topic0 = kw["topic0s"][0]
        in_flight.append(topic0)
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            cancelled.append(topic0)
            raise

    mock_rpc.get_logs.side_effect = get_logs
    adapter = build_pheasant_adapter(NormalizationEngine({"arbitrum": mock_rpc}), ("arbitrum",))
    task = asyncio.create_task(adapter["arbitrum"](100, 200))
    while len(in_flight) < 4:
        await asyncio.sleep(0)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert sorted(cancelled) == sorted(s.topic0 for s in compose_pheasant_specs("arbitrum"))
