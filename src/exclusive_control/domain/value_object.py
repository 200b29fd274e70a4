"""Immutable Value Object base class."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


def _freeze(value: Any) -> Any:
    if isinstance(value, dict):
        return tuple((k, _freeze(value[k])) for k in sorted(value))
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


class ValueObject(BaseModel):
    """Base class for Value Objects.

    Value objects are immutable and defined by their attributes.
    Equality is structural (all fields compared). Nested mappings are
    frozen into key-sorted tuples for hashing.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(_freeze(self.model_dump()))
