"""SQLAlchemy implementation of the IConnection port."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ...ports.connection import IConnection, IPreparedStatement, IRow
from ...primitives.exceptions import DuplicateStatementError, StatementExecutionError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy.engine import Connection, CursorResult, RowMapping
    from sqlalchemy.orm import Session
    from sqlalchemy.sql.elements import TextClause

logger = logging.getLogger("exclusive_control.sqlalchemy")


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return str(value)


class SQLAlchemyRow(IRow):
    """Wraps a ``RowMapping``; column lookup falls back to case-insensitive."""

    def __init__(self, mapping: RowMapping) -> None:
        self._mapping = mapping

    def get_string(self, column_name: str) -> str | None:
        if column_name in self._mapping:
            return _as_text(self._mapping[column_name])
        wanted = column_name.lower()
        for key, value in self._mapping.items():
            if str(key).lower() == wanted:
                return _as_text(value)
        raise KeyError(f"Column {column_name!r} not in result row {list(self._mapping)}")


class SQLAlchemyPreparedStatement(IPreparedStatement):
    """A ``text()`` clause executed against a bound Connection or Session."""

    def __init__(self, bind: Connection | Session, sql: str) -> None:
        self._bind = bind
        self.sql = sql
        self._clause: TextClause = text(sql)

    def _execute(self, parameters: Mapping[str, Any]) -> CursorResult[Any]:
        try:
            result = self._bind.execute(self._clause, dict(parameters))
        except IntegrityError as e:
            raise DuplicateStatementError(self.sql, str(e.orig)) from e
        except SQLAlchemyError as e:
            raise StatementExecutionError(self.sql, str(e)) from e
        return cast("CursorResult[Any]", result)

    def query_rows(self, parameters: Mapping[str, Any]) -> Sequence[IRow]:
        result = self._execute(parameters)
        return [SQLAlchemyRow(m) for m in result.mappings().all()]

    def execute_update(self, parameters: Mapping[str, Any]) -> int:
        count = self._execute(parameters).rowcount
        logger.debug("%d row(s) affected by [%s]", count, self.sql)
        return count


class SQLAlchemyConnection(IConnection):
    """
    IConnection over a synchronous SQLAlchemy ``Connection`` or ``Session``.

    The wrapped object's current transaction is used as is; this adapter
    never begins, commits or rolls back.

        ```python
        with engine.begin() as conn:
            manager = ExclusiveControlManager(connection=SQLAlchemyConnection(conn))
            manager.update_version(UserPk("u1"))
        ```
    """

    def __init__(self, bind: Connection | Session) -> None:
        self.bind = bind

    def prepare(
        self, sql: str, parameters: Mapping[str, Any]  # noqa: ARG002
    ) -> IPreparedStatement:
        return SQLAlchemyPreparedStatement(self.bind, sql)
