"""Spec composition and chain adapter maps.

A bridge adapter is a read-only mapping `{chain: query}` where
`query(from_block, to_block)` is an async function returning the chain's
transfer records. Each query closes over its chain's specification list,
composed once when the adapter is built.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Mapping
from types import MappingProxyType
from typing import List

from bridgind.chains.registry import ChainRegistry
from bridgind.core.interfaces import INormalizationEngine
from bridgind.core.models import TransferRecord
from bridgind.decoding.specs import EventSpecification

SpecBuilder = Callable[[str, ChainRegistry], EventSpecification]
# family -> (deposit builder, withdraw builder)
FamilyBuilders = Mapping[str, tuple[SpecBuilder, SpecBuilder]]
RangeQuery = Callable[[int, int], Awaitable[List[TransferRecord]]]
BridgeAdapter = Mapping[str, RangeQuery]


def compose_specs(
    chain: str,
    registry: ChainRegistry,
    builders: FamilyBuilders,
) -> tuple[EventSpecification, ...]:
    """Assemble the event specifications that apply to `chain`.

    Families follow the registry's registration order; within a family the
    deposit spec precedes the withdraw spec. Families without builders and
    chains outside every family contribute nothing.
    """
    specs: list[EventSpecification] = []
    for family in registry.families(chain):
        family_builders = builders.get(family)
        if family_builders is None:
            continue
        deposit, withdraw = family_builders
        specs.extend((deposit(chain, registry), withdraw(chain, registry)))
    return tuple(specs)


def make_range_query(
    source_name: str,
    chain: str,
    specs: tuple[EventSpecification, ...],
    engine: INormalizationEngine,
) -> RangeQuery:
    """Return `query(from_block, to_block)` delegating to `engine` with `specs`."""

    async def query(from_block: int, to_block: int) -> List[TransferRecord]:
        return await engine.fetch_and_normalize(source_name, chain, from_block, to_block, specs)

    query.__name__ = f"query_{chain}"
    return query


def build_adapter(
    source_name: str,
    chains: Iterable[str],
    engine: INormalizationEngine,
    compose: Callable[[str], tuple[EventSpecification, ...]],
) -> BridgeAdapter:
    """Build the `{chain: query}` map, composing each chain's specs once."""
    return MappingProxyType(
        {chain: make_range_query(source_name, chain, compose(chain), engine) for chain in chains}
    )
