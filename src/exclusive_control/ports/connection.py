"""IConnection — the statement execution surface exclusive control relies on.

Exclusive control never opens, commits or rolls back transactions. An
implementation executes against whatever transaction the caller has open.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


@runtime_checkable
class IRow(Protocol):
    """One result row."""

    def get_string(self, column_name: str) -> str | None:
        """Return the column value as text, or ``None`` for SQL NULL."""
        ...


@runtime_checkable
class IPreparedStatement(Protocol):
    """A statement with ``:name`` placeholders, ready to execute."""

    def query_rows(self, parameters: Mapping[str, Any]) -> Sequence[IRow]:
        """Run the statement as a query and return all rows in order."""
        ...

    def execute_update(self, parameters: Mapping[str, Any]) -> int:
        """Run the statement as DML and return the affected row count."""
        ...


@runtime_checkable
class IConnection(Protocol):
    """
    Connection bound to the caller's current transaction.

    Example:
        ```python
        stmt = connection.prepare(
            "SELECT VERSION FROM T WHERE ID = :id", {"id": "x"}
        )
        rows = stmt.query_rows({"id": "x"})
        ```
    """

    def prepare(self, sql: str, parameters: Mapping[str, Any]) -> IPreparedStatement:
        """Prepare *sql*. *parameters* are the values it will be run with."""
        ...
