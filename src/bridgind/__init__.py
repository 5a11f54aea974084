from __future__ import annotations

from .adapters.base import BridgeAdapter, build_adapter, compose_specs
from .chains.registry import ChainRegistry
from .core.models import Direction, EventLog, TransferRecord
from .core.use_cases.normalize import NormalizationEngine
from .decoding.paths import ArgPath, resolve_path
from .decoding.specs import EventSpecification

__all__ = [
    "ArgPath",
    "BridgeAdapter",
    "ChainRegistry",
    "Direction",
    "EventLog",
    "EventSpecification",
    "NormalizationEngine",
    "TransferRecord",
    "build_adapter",
    "compose_specs",
    "resolve_path",
]
