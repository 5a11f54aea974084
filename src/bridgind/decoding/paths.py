"""Argument paths into decoded event arguments.

An `ArgPath` is a sequence of field-name segments. A single segment names a
top-level event argument; further segments descend into tuple/struct
components (`trade.toolContract`) or, for arrays, select an element by index
(`legs.0.amount`).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from bridgind.core.errors import PathSegmentNotContainer, PathSegmentNotFound, SpecConfigurationError


@dataclass(frozen=True, slots=True)
class ArgPath:
    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments or any(not s for s in self.segments):
            raise SpecConfigurationError(f"Invalid argument path: {'.'.join(self.segments)!r}")

    @classmethod
    def parse(cls, path: str | ArgPath) -> ArgPath:
        if isinstance(path, ArgPath):
            return path
        return cls(tuple(s.strip() for s in path.split(".")))

    @property
    def root(self) -> str:
        return self.segments[0]

    def __str__(self) -> str:
        return ".".join(self.segments)


def _is_container(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _step(value: Any, segment: str, path: ArgPath) -> Any:
    if isinstance(value, Mapping):
        if segment not in value:
            raise PathSegmentNotFound(str(path), segment)
        return value[segment]
    if not _is_container(value):
        raise PathSegmentNotContainer(str(path), segment)
    # sequence: integer index
    try:
        return value[int(segment)]
    except (ValueError, IndexError):
        raise PathSegmentNotFound(str(path), segment) from None


def _walk(value: Any, remaining: tuple[str, ...], path: ArgPath) -> Any:
    if not remaining:
        return value
    head, *tail = remaining
    return _walk(_step(value, head, path), tuple(tail), path)


def resolve_path(args: Mapping[str, Any], path: ArgPath | str) -> Any:
    """Resolve `path` against a decoded argument tree.

    Raises `PathSegmentNotFound` when a segment is absent and
    `PathSegmentNotContainer` when a segment would descend into a scalar.
    """
    p = ArgPath.parse(path)
    return _walk(args, p.segments, p)
