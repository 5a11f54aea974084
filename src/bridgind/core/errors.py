"""Exception hierarchy.

- `SpecConfigurationError`: an event specification is invalid; raised at
  construction time so misconfiguration fails at startup.
- `DecodeError`: a matched log cannot be turned into a transfer record;
  fails the whole range query.
- `RpcError`: the node answered with a JSON-RPC error payload.
"""

from __future__ import annotations


class BridgindError(Exception):
    """Base class for all bridgind errors."""


class SpecConfigurationError(BridgindError, ValueError):
    """An event specification violates its invariants."""


class DecodeError(BridgindError):
    """A log matched target + topic0 but could not be normalized."""


class AbiDecodeError(DecodeError):
    """Topics or data do not match the ABI fragment of the specification."""


class PathResolutionError(DecodeError):
    """An argument path could not be resolved against decoded arguments."""

    def __init__(self, path: str, segment: str, message: str) -> None:
        super().__init__(f"{path!r}: {message}")
        self.path = path
        self.segment = segment


class PathSegmentNotFound(PathResolutionError):
    def __init__(self, path: str, segment: str) -> None:
        super().__init__(path, segment, f"segment {segment!r} not found")


class PathSegmentNotContainer(PathResolutionError):
    def __init__(self, path: str, segment: str) -> None:
        super().__init__(path, segment, f"cannot descend into a scalar at segment {segment!r}")


class RpcError(BridgindError, RuntimeError):
    """JSON-RPC error payload returned by the node."""

    def __init__(self, code: int | None, message: str | None) -> None:
        super().__init__(f"RPC error: {code} {message}")
        self.code = code


class MissingLogsProviderError(BridgindError, LookupError):
    """No logs provider is wired for the requested chain."""
