"""LockingContext — identity of a row under exclusive control."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import Field, model_validator

from .value_object import ValueObject

if TYPE_CHECKING:
    from collections.abc import Mapping


class LockingContext(ValueObject):
    """
    Addresses one row of a version-controlled table.

    ``primary_key_values`` is keyed by column name and always follows the
    order of ``primary_key_columns``. A mapping naming the declared columns
    in another order is re-ordered; missing or unknown columns are rejected.

    Instances are usually produced by a :class:`LockingContextFactory`:

        ```python
        UserPk = define_context("USER_MST", "VERSION", "USER_ID", "PK2", "PK3")
        ctx = UserPk("uid001", "pk2001", "pk3001")
        ```
    """

    table_name: str = Field(min_length=1)
    version_column_name: str = Field(min_length=1)
    primary_key_columns: tuple[str, ...] = Field(min_length=1)
    primary_key_values: dict[str, Any]

    @model_validator(mode="before")
    @classmethod
    def _align_primary_key_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        columns = tuple(data.get("primary_key_columns") or ())
        values = dict(data.get("primary_key_values") or {})
        if len(set(columns)) != len(columns):
            raise ValueError(f"Duplicate primary key columns: {list(columns)}")

        missing = [c for c in columns if c not in values]
        unknown = [k for k in values if k not in columns]
        if missing or unknown:
            raise ValueError(
                "Primary key values must match the declared columns "
                f"{list(columns)} (missing={missing}, unknown={unknown})"
            )
        return {
            **data,
            "primary_key_columns": columns,
            "primary_key_values": {c: values[c] for c in columns},
        }

    def condition(self) -> dict[str, Any]:
        """Return a fresh copy of the primary key values."""
        return dict(self.primary_key_values)


@dataclass(frozen=True)
class LockingContextFactory:
    """Builds :class:`LockingContext` instances for one table shape."""

    table_name: str
    version_column_name: str
    primary_key_columns: tuple[str, ...]

    def __call__(self, *values: Any, **named: Any) -> LockingContext:
        if values and named:
            raise TypeError("Pass primary key values positionally or by name, not both")
        if values:
            if len(values) != len(self.primary_key_columns):
                raise TypeError(
                    f"{self.table_name} expects {len(self.primary_key_columns)} "
                    f"primary key value(s), got {len(values)}"
                )
            return self.from_mapping(dict(zip(self.primary_key_columns, values)))
        return self.from_mapping(named)

    def from_mapping(self, values: Mapping[str, Any]) -> LockingContext:
        """Build a context from a column-name keyed mapping."""
        return LockingContext(
            table_name=self.table_name,
            version_column_name=self.version_column_name,
            primary_key_columns=self.primary_key_columns,
            primary_key_values=dict(values),
        )


def define_context(
    table_name: str,
    version_column_name: str,
    *primary_key_columns: str,
) -> LockingContextFactory:
    """Declare the locking context shape of a table."""
    if not primary_key_columns:
        raise ValueError(f"{table_name} needs at least one primary key column")
    return LockingContextFactory(
        table_name=table_name,
        version_column_name=version_column_name,
        primary_key_columns=tuple(primary_key_columns),
    )
