"""Core data models, configuration, errors and interfaces.

This package provides:
- Data models (Direction, EventLog, TransferRecord)
- Configuration classes (AdapterConfig, EngineConfig, RpcConfig)
- Exception hierarchy (SpecConfigurationError, DecodeError, ...)
"""

from bridgind.core.config import AdapterConfig, EngineConfig, RpcConfig
from bridgind.core.models import DEFAULT_LOG_KEYS, TRANSFER_FIELDS, Direction, EventLog, TransferRecord

__all__ = [
    "AdapterConfig",
    "EngineConfig",
    "RpcConfig",
    "DEFAULT_LOG_KEYS",
    "TRANSFER_FIELDS",
    "Direction",
    "EventLog",
    "TransferRecord",
]
