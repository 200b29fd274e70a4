"""Ambient connection scope — the connection of the caller's current transaction."""

from __future__ import annotations

import contextlib
from contextvars import ContextVar
from typing import TYPE_CHECKING

from .primitives.exceptions import ConnectionNotAvailableError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .ports.connection import IConnection

#: ContextVar holding the connection bound by the innermost ``use_connection``.
_current_connection: ContextVar[IConnection | None] = ContextVar(
    "exclusive_control_connection", default=None
)


def get_current_connection() -> IConnection:
    """Return the bound connection or raise if none is bound."""
    connection = _current_connection.get()
    if connection is None:
        raise ConnectionNotAvailableError(
            "No connection bound to the current context. "
            "Wrap the call in use_connection(...) or a unit of work."
        )
    return connection


def has_current_connection() -> bool:
    return _current_connection.get() is not None


@contextlib.contextmanager
def use_connection(connection: IConnection) -> Iterator[IConnection]:
    """Bind *connection* for the duration of the block. Scopes nest."""
    token = _current_connection.set(connection)
    try:
        yield connection
    finally:
        _current_connection.reset(token)
