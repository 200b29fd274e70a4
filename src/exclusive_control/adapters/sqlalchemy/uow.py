"""
SQLAlchemy implementation of the Unit of Work pattern.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

from ...connection_context import use_connection
from ...ports.unit_of_work import UnitOfWork
from ...primitives.exceptions import ConfigurationError, TransactionError
from .connection import SQLAlchemyConnection

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Connection, Engine


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Transaction scope over a synchronous SQLAlchemy ``Connection``.

    While the block runs, the connection is bound with
    :func:`~exclusive_control.use_connection`, so managers created without
    an explicit connection pick it up.

    Supports two usage patterns:

    1. **Caller-Managed Connections**:
       ```python
       with engine.connect() as conn:
           with SQLAlchemyUnitOfWork(connection=conn):
               manager.update_version(ctx)
       ```
       The connection lifecycle stays with the caller.

    2. **Self-Managed Connections**:
       ```python
       with SQLAlchemyUnitOfWork(engine=engine):
           manager.update_version(ctx)
       ```
       The UoW opens and closes the connection.

    **Important:** Exactly one of `connection` or `engine` must be provided.
    """

    def __init__(
        self,
        connection: Connection | None = None,
        engine: Engine | None = None,
    ) -> None:
        if connection is not None and engine is not None:
            raise ConfigurationError(
                "Cannot provide both 'connection' and 'engine'. "
                "Use either caller-managed (connection) or self-managed "
                "(engine) pattern."
            )
        if connection is None and engine is None:
            raise ConfigurationError(
                "Must provide either 'connection' or 'engine'."
            )
        self._connection: Connection | None = connection
        self._engine = engine
        self._owns_connection = engine is not None
        self._scope: contextlib.ExitStack | None = None

    @property
    def connection(self) -> Connection:
        """Get the active connection. Raises if not yet opened."""
        if self._connection is None:
            raise TransactionError("Connection not yet opened. Ensure __enter__ was called.")
        return self._connection

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        if self._owns_connection and self._engine is not None:
            try:
                self._connection = self._engine.connect()
            except Exception as e:  # noqa: BLE001
                raise TransactionError(f"Failed to open connection: {e}") from e

        try:
            if not self.connection.in_transaction():
                self.connection.begin()

            self._scope = contextlib.ExitStack()
            self._scope.enter_context(use_connection(SQLAlchemyConnection(self.connection)))
        except Exception as e:  # noqa: BLE001
            self._scope = None
            if self._owns_connection and self._connection is not None:
                with contextlib.suppress(Exception):
                    self._connection.close()
                self._connection = None
            if isinstance(e, TransactionError):
                raise
            raise TransactionError(f"Failed to begin transaction: {e}") from e
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            super().__exit__(exc_type, exc_val, exc_tb)
        finally:
            if self._scope is not None:
                self._scope.close()
                self._scope = None
            if self._owns_connection and self._connection is not None:
                try:
                    self._connection.close()
                except Exception as e:  # noqa: BLE001
                    raise TransactionError(f"Failed to close connection: {e}") from e
                finally:
                    self._connection = None

    def commit(self) -> None:
        """Commit the current transaction."""
        try:
            self.connection.commit()
        except Exception as e:  # noqa: BLE001
            with contextlib.suppress(Exception):
                self.rollback()
            raise TransactionError(f"Failed to commit transaction: {e}") from e

    def rollback(self) -> None:
        """Rollback the current transaction."""
        try:
            if self.connection.in_transaction():
                self.connection.rollback()
        except Exception as e:  # noqa: BLE001
            raise TransactionError(f"Failed to rollback transaction: {e}") from e
