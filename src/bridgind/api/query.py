"""Wiring: RPC clients -> normalization engine -> bridge adapter.

`open_pheasant_adapter(config)` instantiates one `RPC` per configured chain,
the `NormalizationEngine` over them and the adapter map, and closes the RPC
clients on exit. `query_chains(...)` runs several chains concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from bridgind.adapters.base import BridgeAdapter
from bridgind.adapters.pheasant_network import SUPPORTED_CHAINS, build_pheasant_adapter
from bridgind.clients.rpc import RPC
from bridgind.core.config import AdapterConfig
from bridgind.core.interfaces import IEvmLogsProvider
from bridgind.core.models import TransferRecord
from bridgind.core.use_cases.normalize import NormalizationEngine

logger = logging.getLogger(__name__)


async def resolve_block_range(
    logs_provider: IEvmLogsProvider,
    start_block: int | str,
    end_block: int | str,
) -> tuple[int, int]:
    """Resolve start and end blocks, handling special values like 'latest'."""
    if isinstance(start_block, str) and start_block.lower() in ("earliest", "genesis"):
        start = 0
    else:
        start = int(start_block)

    if isinstance(end_block, str) and end_block.lower() == "latest":
        end = await logs_provider.latest_block()
    else:
        end = int(end_block)

    if start > end:
        raise ValueError("start_block must be <= end_block")

    return start, end


@asynccontextmanager
async def open_pheasant_adapter(config: AdapterConfig) -> AsyncIterator[BridgeAdapter]:
    """Yield the adapter for supported chains that have an RPC configured."""
    chains = tuple(c for c in SUPPORTED_CHAINS if c in config.rpc)
    skipped = sorted(set(SUPPORTED_CHAINS) - set(chains))
    if skipped:
        logger.warning("%s: no RPC configured for %s", config.source_name, ", ".join(skipped))

    rpcs = {
        chain: RPC(
            config.rpc[chain].url,
            timeout_s=config.rpc[chain].timeout_s,
            max_connections=max(config.rpc[chain].max_connections, 2 * config.engine.concurrency),
        )
        for chain in chains
    }
    try:
        engine = NormalizationEngine(rpcs, config.engine)
        yield build_pheasant_adapter(engine, engine.chains)
    finally:
        await asyncio.gather(*(rpc.aclose() for rpc in rpcs.values()))


async def query_chains(
    adapter: BridgeAdapter,
    from_block: int,
    to_block: int,
    chains: Iterable[str] | None = None,
) -> dict[str, list[TransferRecord]]:
    """Query several chains concurrently; the first failure propagates."""
    selected = list(adapter) if chains is None else list(chains)
    results = await asyncio.gather(*(adapter[chain](from_block, to_block) for chain in selected))
    return dict(zip(selected, results))
