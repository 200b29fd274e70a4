"""SQLAlchemy adapters."""

from __future__ import annotations

from .connection import (
    SQLAlchemyConnection,
    SQLAlchemyPreparedStatement,
    SQLAlchemyRow,
)
from .uow import SQLAlchemyUnitOfWork

__all__ = [
    "SQLAlchemyConnection",
    "SQLAlchemyPreparedStatement",
    "SQLAlchemyRow",
    "SQLAlchemyUnitOfWork",
]
