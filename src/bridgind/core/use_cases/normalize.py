from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, List

from bridgind.core.config import EngineConfig
from bridgind.core.errors import MissingLogsProviderError
from bridgind.core.interfaces import IEvmLogsProvider
from bridgind.core.models import EventLog, TransferRecord
from bridgind.decoding.decoder import decode_log
from bridgind.decoding.paths import resolve_path
from bridgind.decoding.specs import EventSpecification
from bridgind.orchestration.utils import iter_chunks

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


@dataclass(kw_only=True)
class NormalizeStats:
    """
    Counters for one range query.

    - how many eth_getLogs calls were executed
    - how many logs were fetched
    - how many logs were skipped for carrying a foreign topic0
    - how many records were produced
    """

    executed_subranges: int = 0
    total_logs: int = 0
    skipped_logs: int = 0
    records: int = 0


# ---------------------------------------------------------------------------
# Query context
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class QueryContext:
    """Shared state for one `fetch_and_normalize` call (keeps helper signatures small)."""

    source_name: str
    chain: str
    from_block: int
    to_block: int
    provider: IEvmLogsProvider
    sem: asyncio.Semaphore
    step: int
    stats: NormalizeStats


# ---------------------------------------------------------------------------
# Log -> record
# ---------------------------------------------------------------------------


def _normalize_fixed(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("0x"):
        return value.lower()
    return value


def normalize_log(spec: EventSpecification, log: EventLog, chain: str) -> TransferRecord:
    """Turn one matched log into a `TransferRecord`.

    Decoding failures and unresolvable argument paths raise `DecodeError`.
    """
    args = decode_log(spec.event, log)
    fields: dict[str, Any] = {name: resolve_path(args, path) for name, path in spec.arg_keys.items()}
    fields.update({name: _normalize_fixed(v) for name, v in spec.fixed_values.items()})
    return TransferRecord(
        chain=chain,
        direction=spec.direction,
        block_number=getattr(log, spec.log_keys["blockNumber"]),
        tx_hash=getattr(log, spec.log_keys["txHash"]),
        token=fields["token"],
        from_address=fields["from"],
        to_address=fields["to"],
        amount=fields["amount"],
    )


async def _fetch_spec_logs(ctx: QueryContext, spec: EventSpecification) -> list[EventLog]:
    """Fetch logs for one spec, in ascending sub-ranges when a step is configured."""
    if ctx.step > 0:
        ranges = list(iter_chunks(ctx.from_block, ctx.to_block, ctx.step))
    else:
        ranges = [(ctx.from_block, ctx.to_block)]

    logs: list[EventLog] = []
    for a, b in ranges:
        async with ctx.sem:
            chunk = await ctx.provider.get_logs(
                address=spec.target,
                topic0s=[spec.topic0],
                from_block=a,
                to_block=b,
            )
        ctx.stats.executed_subranges += 1
        logs.extend(chunk)
    return logs


async def _process_spec(ctx: QueryContext, spec: EventSpecification) -> list[TransferRecord]:
    logs = await _fetch_spec_logs(ctx, spec)
    ctx.stats.total_logs += len(logs)

    records: list[TransferRecord] = []
    for log in logs:
        if log.topic0 != spec.topic0:
            ctx.stats.skipped_logs += 1
            logger.debug(
                "skipping log with foreign topic0 %s for %s on %s (tx=%s)",
                log.topic0, spec.name, ctx.chain, log.tx_hash,
            )
            continue
        records.append(normalize_log(spec, log, ctx.chain))

    logger.debug(
        "%s %s %s [%d, %d]: %d logs -> %d records",
        ctx.source_name, ctx.chain, spec.name, ctx.from_block, ctx.to_block, len(logs), len(records),
    )
    return records


# ---------------------------------------------------------------------------
# Domain service: NormalizationEngine
# ---------------------------------------------------------------------------


class NormalizationEngine:
    """
    Fetches and normalizes logs for a list of event specifications.

    It depends only on abstract log providers (one per chain). Specs are
    fetched concurrently but results are concatenated in spec order, each
    spec's records in the provider's log order. Nothing is retried and no
    partial result is returned: the first failure fails the whole query.
    """

    def __init__(
        self,
        providers: Mapping[str, IEvmLogsProvider],
        config: EngineConfig | None = None,
    ) -> None:
        self._providers = dict(providers)
        self._config = config or EngineConfig()

    @property
    def chains(self) -> tuple[str, ...]:
        return tuple(self._providers)

    def provider_for(self, chain: str) -> IEvmLogsProvider:
        try:
            return self._providers[chain]
        except KeyError:
            raise MissingLogsProviderError(f"no logs provider configured for chain {chain!r}") from None

    async def fetch_and_normalize(
        self,
        source_name: str,
        chain: str,
        from_block: int,
        to_block: int,
        specs: Sequence[EventSpecification],
    ) -> List[TransferRecord]:
        """
        Return transfer records for `specs` over the inclusive block range.

        An empty spec list yields an empty result without touching any provider.
        """
        if not specs:
            logger.debug("%s %s: no event specifications, nothing to fetch", source_name, chain)
            return []

        stats = NormalizeStats()
        ctx = QueryContext(
            source_name=source_name,
            chain=chain,
            from_block=from_block,
            to_block=to_block,
            provider=self.provider_for(chain),
            sem=asyncio.Semaphore(self._config.concurrency),
            step=self._config.step,
            stats=stats,
        )

        tasks = [asyncio.create_task(_process_spec(ctx, spec)) for spec in specs]
        try:
            per_spec = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

        records = [record for spec_records in per_spec for record in spec_records]
        stats.records = len(records)
        logger.info(
            "%s %s [%d, %d]: %d specs, %d calls, %d logs, %d skipped, %d records",
            source_name, chain, from_block, to_block, len(specs),
            stats.executed_subranges, stats.total_logs, stats.skipped_logs, stats.records,
        )
        return records
