"""exclusive-control — version-column based row locking for relational tables.

Generates the statements a table needs from its name, primary key and
version column, caches them per table, and runs optimistic (check) and
pessimistic (increment) locking inside the caller's transaction.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryMessageResolver
from .adapters.sqlalchemy import SQLAlchemyConnection, SQLAlchemyUnitOfWork

# ── Configuration & context ──────────────────────────────────────
from .config import ExclusiveControlConfig
from .connection_context import (
    get_current_connection,
    has_current_connection,
    use_connection,
)

# ── Domain ───────────────────────────────────────────────────────
from .domain import LockingContext, LockingContextFactory, Version, define_context

# ── Manager ──────────────────────────────────────────────────────
from .manager import ExclusiveControlManager

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    IConnection,
    IExclusiveControlManager,
    IMessageResolver,
    IPreparedStatement,
    IRow,
    UnitOfWork,
)

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
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
    to_placeholder_name,
)

# ── SQL ──────────────────────────────────────────────────────────
from .sql import (
    SqlTemplateBuilder,
    SqlTemplates,
    TableDescriptor,
    TableDescriptorCache,
    build_table_descriptor,
    get_default_cache,
)

__all__ = [
    # Manager
    "ExclusiveControlManager",
    "ExclusiveControlConfig",
    # Domain
    "LockingContext",
    "LockingContextFactory",
    "Version",
    "define_context",
    # SQL
    "SqlTemplateBuilder",
    "SqlTemplates",
    "TableDescriptor",
    "TableDescriptorCache",
    "build_table_descriptor",
    "get_default_cache",
    "to_placeholder_name",
    # Context
    "get_current_connection",
    "has_current_connection",
    "use_connection",
    # Ports
    "IConnection",
    "IExclusiveControlManager",
    "IMessageResolver",
    "IPreparedStatement",
    "IRow",
    "UnitOfWork",
    # Adapters
    "InMemoryMessageResolver",
    "SQLAlchemyConnection",
    "SQLAlchemyUnitOfWork",
    # Exceptions
    "ConcurrencyError",
    "ConfigurationError",
    "ConnectionNotAvailableError",
    "DuplicateStatementError",
    "ExclusiveControlError",
    "InvalidStateError",
    "OptimisticLockError",
    "PersistenceError",
    "StatementExecutionError",
    "TemplateError",
    "TransactionError",
]
