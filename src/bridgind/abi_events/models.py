"""Pydantic models for ABI event entries.

Unnamed inputs and tuple components are named `arg{i}` after their position
among their siblings, so decoded trees and argument paths agree on one name.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, model_validator


def _with_positional_names(inputs: Sequence[AbiInput]) -> list[AbiInput]:
    return [i if i.name else i.model_copy(update={"name": f"arg{n}"}) for n, i in enumerate(inputs)]


class AbiInput(BaseModel):
    name: str = ""
    type: str
    indexed: bool = False
    internalType: str | None = None
    components: Sequence[AbiInput] | None = None

    @model_validator(mode="after")
    def _name_components(self) -> AbiInput:
        if self.components:
            self.components = _with_positional_names(self.components)
        return self

    @property
    def is_tuple(self) -> bool:
        return self.type.startswith("tuple")

    @property
    def array_suffix(self) -> str:
        """Trailing `[]` / `[N]` dimensions of the type, if any."""
        i = self.type.find("[")
        return self.type[i:] if i != -1 else ""


AbiInput.model_rebuild()


class AbiEvent(BaseModel):
    anonymous: bool = False
    inputs: Sequence[AbiInput]
    name: str
    type: Literal["event"] = "event"

    @model_validator(mode="after")
    def _name_inputs(self) -> AbiEvent:
        self.inputs = _with_positional_names(self.inputs)
        return self

    @property
    def indexed_inputs(self) -> list[AbiInput]:
        return [i for i in self.inputs if i.indexed]

    @property
    def data_inputs(self) -> list[AbiInput]:
        return [i for i in self.inputs if not i.indexed]


def canonical_type(abi_input: AbiInput) -> str:
    """Return the canonical ABI type, rendering tuples as `(t1,t2,...)`."""
    if abi_input.is_tuple:
        inner = ",".join(canonical_type(c) for c in abi_input.components or ())
        return f"({inner}){abi_input.array_suffix}"
    return abi_input.type
