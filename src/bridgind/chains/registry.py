"""Chain registry: per contract family, the deployed address on each chain.

A chain's capability set (the families it participates in) is computed once
at construction, in family registration order, so composers never scatter
membership tests across call sites.

Example
-------
>>> reg = ChainRegistry({"bridge": {"base": "0x..."}, "swap": {"base": "0x..."}})
>>> reg.families("base")
('bridge', 'swap')
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType


class ChainRegistry:
    """Immutable `{family: {chain: address}}` lookup."""

    def __init__(self, families: Mapping[str, Mapping[str, str]]) -> None:
        self._tables: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {family: MappingProxyType(dict(table)) for family, table in families.items()}
        )
        capabilities: dict[str, list[str]] = {}
        for family, table in self._tables.items():
            for chain in table:
                capabilities.setdefault(chain, []).append(family)
        self._capabilities: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {chain: tuple(fams) for chain, fams in capabilities.items()}
        )

    def address(self, family: str, chain: str) -> str:
        """Return the address of `family` on `chain`.

        Raises KeyError when the chain does not participate in the family;
        callers are expected to check `participates` (or `families`) first.
        """
        table = self._tables.get(family)
        if table is None:
            raise KeyError(f"unknown contract family {family!r}")
        try:
            return table[chain]
        except KeyError:
            raise KeyError(f"chain {chain!r} has no {family!r} contract") from None

    def families(self, chain: str) -> tuple[str, ...]:
        """Capability set of `chain`; empty for chains outside every family."""
        return self._capabilities.get(chain, ())

    def chains(self, family: str) -> tuple[str, ...]:
        return tuple(self._tables.get(family, ()))

    def participates(self, chain: str, family: str) -> bool:
        return family in self.families(chain)

    def table(self, family: str) -> Mapping[str, str]:
        return self._tables[family]

    @property
    def family_names(self) -> tuple[str, ...]:
        return tuple(self._tables)

    def __contains__(self, chain: object) -> bool:
        return chain in self._capabilities

    def __iter__(self) -> Iterator[str]:
        return iter(self._capabilities)

    def __repr__(self) -> str:
        return f"ChainRegistry(families={list(self._tables)})"
