"""Primitives: exceptions, placeholder naming."""

from __future__ import annotations

from .exceptions import (
    ConcurrencyError,
    ConfigurationError,
    ConnectionNotAvailableError,
    DuplicateStatementError,
    ExclusiveControlError,
    InvalidStateError,
    OptimisticLockError,
    PersistenceError,
    StatementExecutionError,
    TemplateError,
    TransactionError,
)
from .naming import PlaceholderNaming, to_placeholder_name

__all__ = [
    "ConcurrencyError",
    "ConfigurationError",
    "ConnectionNotAvailableError",
    "DuplicateStatementError",
    "ExclusiveControlError",
    "InvalidStateError",
    "OptimisticLockError",
    "PersistenceError",
    "PlaceholderNaming",
    "StatementExecutionError",
    "TemplateError",
    "TransactionError",
    "to_placeholder_name",
]
