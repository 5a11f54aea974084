"""Bridge adapters: per-protocol event specifications and chain adapter maps."""

from bridgind.adapters.base import (
    BridgeAdapter,
    FamilyBuilders,
    RangeQuery,
    build_adapter,
    compose_specs,
    make_range_query,
)

__all__ = [
    "BridgeAdapter",
    "FamilyBuilders",
    "RangeQuery",
    "build_adapter",
    "compose_specs",
    "make_range_query",
]
