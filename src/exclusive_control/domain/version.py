"""Version — a row identity plus the version value observed or asserted."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pydantic import Field, field_validator

from .value_object import ValueObject

if TYPE_CHECKING:
    from .context import LockingContext


class Version(ValueObject):
    """Snapshot of a row's version.

    ``version`` is kept in its textual form whatever the column type;
    integers passed in are converted to text on construction.
    """

    table_name: str = Field(min_length=1)
    version_column_name: str = Field(min_length=1)
    primary_key_values: dict[str, Any] = Field(min_length=1)
    version: str

    @field_validator("version", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("version must be text or an integer, not bool")
        if isinstance(value, (int, Decimal)):
            return str(value)
        return value

    @classmethod
    def of(cls, context: LockingContext, version: str | int) -> Version:
        """Build a Version for the row addressed by *context*."""
        return cls(
            table_name=context.table_name,
            version_column_name=context.version_column_name,
            primary_key_values=context.condition(),
            version=version,  # type: ignore[arg-type]
        )

    @property
    def primary_key_columns(self) -> tuple[str, ...]:
        return tuple(self.primary_key_values)

    def condition(self) -> dict[str, Any]:
        """Return a fresh copy of the primary key values."""
        return dict(self.primary_key_values)

    def __str__(self) -> str:
        return (
            f"tableName = [{self.table_name}], version = [{self.version}], "
            f"primaryKeyCondition = [{self.primary_key_values}]"
        )
