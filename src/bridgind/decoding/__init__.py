"""Event decoding with declarative event specifications.

This package provides:
- `EventSpecification`: validated event-to-transfer mapping
- `ArgPath` / `resolve_path`: argument paths into nested decoded arguments
- `decode_log`: ABI decoder turning raw logs into argument trees
"""

from bridgind.decoding.decoder import decode_log
from bridgind.decoding.paths import ArgPath, resolve_path
from bridgind.decoding.specs import EventSpecification

__all__ = [
    "ArgPath",
    "EventSpecification",
    "decode_log",
    "resolve_path",
]
