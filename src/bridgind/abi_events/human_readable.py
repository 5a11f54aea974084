"""Parser for human-readable event declarations.

Turns a Solidity-style declaration into an `AbiEvent`, including nested
tuple components:

  "event SwapNewTrade(address indexed userAddress, address indexed token,
   tuple(string toChainId, uint16 swapToolIndex, address toolContract) trade)"
"""

from __future__ import annotations

import re
from typing import Any

from bridgind.abi_events.models import AbiEvent
from bridgind.core.errors import SpecConfigurationError

_INT_ALIASES = {"uint": "uint256", "int": "int256"}
_ARRAY_SUFFIX = re.compile(r"^((?:\[\d*\])*)\s*(.*)$")


def _split_params(params_str: str) -> list[str]:
    """Split the parameter list by commas while respecting nested tuple types."""
    items: list[str] = []
    depth = 0
    buf: list[str] = []
    for ch in params_str:
        if ch == "(":
            depth += 1
            buf.append(ch)
        elif ch == ")":
            depth -= 1
            buf.append(ch)
        elif ch == "," and depth == 0:
            items.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if depth != 0:
        raise SpecConfigurationError(f"Unbalanced parentheses in parameters: {params_str!r}")
    if buf:
        items.append("".join(buf).strip())
    return [i for i in items if i]


def _matching_paren(s: str, open_idx: int) -> int:
    depth = 0
    for i in range(open_idx, len(s)):
        if s[i] == "(":
            depth += 1
        elif s[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    raise SpecConfigurationError(f"Unbalanced parentheses in {s!r}")


def _canonical_scalar(abi_type: str) -> str:
    base, sep, dims = abi_type.partition("[")
    return _INT_ALIASES.get(base, base) + (sep + dims if sep else "")


def _parse_param(p: str, *, allow_indexed: bool) -> dict[str, Any]:
    """Parse one parameter fragment into an ABI JSON input entry."""
    s = " ".join(p.split())
    components: list[dict[str, Any]] | None = None

    if s.startswith("tuple(") or s.startswith("("):
        open_idx = s.index("(")
        close_idx = _matching_paren(s, open_idx)
        components = [_parse_param(c, allow_indexed=False) for c in _split_params(s[open_idx + 1 : close_idx])]
        m = _ARRAY_SUFFIX.match(s[close_idx + 1 :])
        assert m is not None
        abi_type = "tuple" + m.group(1)
        tokens = m.group(2).split()
    else:
        tokens = s.split()
        abi_type = _canonical_scalar(tokens[0])
        tokens = tokens[1:]

    indexed = False
    if tokens and tokens[0] == "indexed":
        if not allow_indexed:
            raise SpecConfigurationError(f"'indexed' is only valid on event parameters: {p!r}")
        indexed = True
        tokens = tokens[1:]
    if len(tokens) > 1:
        raise SpecConfigurationError(f"Cannot parse event parameter: {p!r}")

    entry: dict[str, Any] = {
        "name": tokens[0] if tokens else "",
        "type": abi_type,
        "indexed": indexed,
    }
    if components is not None:
        entry["components"] = components
    return entry


def parse_human_readable_event(declaration: str) -> AbiEvent:
    """Build an `AbiEvent` from a human-readable event declaration."""
    sig = " ".join(declaration.split())
    anonymous = False
    if sig.startswith("event "):
        sig = sig[len("event ") :]
    if sig.endswith(" anonymous"):
        anonymous = True
        sig = sig[: -len(" anonymous")]

    open_paren = sig.find("(")
    close_paren = sig.rfind(")")
    if open_paren <= 0 or close_paren == -1 or close_paren < open_paren:
        raise SpecConfigurationError(f"Invalid event declaration: {declaration!r}")
    if sig[close_paren + 1 :].strip():
        raise SpecConfigurationError(f"Trailing text after event parameters: {declaration!r}")

    name = sig[:open_paren].strip()
    inputs = [_parse_param(part, allow_indexed=True) for part in _split_params(sig[open_paren + 1 : close_paren])]
    return AbiEvent.model_validate(
        {"type": "event", "name": name, "anonymous": anonymous, "inputs": inputs}
    )
