"""Exceptions raised by exclusive-control."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ..domain.version import Version


class ExclusiveControlError(Exception):
    """Root exception for the exclusive-control package."""


class ConcurrencyError(ExclusiveControlError):
    """Base class for version conflicts detected against stored rows."""


class OptimisticLockError(ConcurrencyError):
    """Raised when one or more rows no longer match the asserted version.

    Carries every failing :class:`Version` in the order it was submitted,
    plus the resolved user-facing messages (empty when no message id is
    configured).
    """

    def __init__(
        self,
        versions: Iterable[Version],
        messages: Iterable[str] | None = None,
    ) -> None:
        self.versions: list[Version] = list(versions)
        self.messages: list[str] = list(messages or [])
        if not self.versions:
            raise ValueError("OptimisticLockError requires at least one version")

        msg = f"Optimistic lock conflict on {len(self.versions)} row(s): " + ", ".join(
            str(v) for v in self.versions
        )
        if self.messages:
            msg = f"{self.messages[0]} ({msg})"
        super().__init__(msg)

    @property
    def message(self) -> str | None:
        """First resolved message, or ``None``."""
        return self.messages[0] if self.messages else None


class InvalidStateError(ExclusiveControlError, ValueError):
    """Raised when a pessimistic update or a removal finds no target row.

    Keeps the attempted statement and bound values for diagnosis.
    """

    def __init__(
        self,
        sql: str,
        data: Mapping[str, Any],
        *,
        data_label: str = "data",
    ) -> None:
        self.sql = sql
        self.data = dict(data)
        super().__init__(
            f"version was not found. sql = [{sql}], {data_label} = [{self.data}]"
        )


class ConfigurationError(ExclusiveControlError):
    """Base class for misconfiguration of the manager or its collaborators."""


class TemplateError(ConfigurationError):
    """Raised when an SQL template references an unknown field."""

    def __init__(self, template_name: str, field: str) -> None:
        self.template_name = template_name
        self.field = field
        super().__init__(
            f"SQL template {template_name!r} references unknown field {{{field}}}"
        )


class ConnectionNotAvailableError(ConfigurationError):
    """Raised when no connection is bound to the current context."""


class PersistenceError(ExclusiveControlError):
    """Base class for failures reported by the connection collaborator."""


class StatementExecutionError(PersistenceError):
    """Raised when a statement fails to execute."""

    def __init__(self, sql: str, reason: str) -> None:
        self.sql = sql
        super().__init__(f"Failed to execute [{sql}]: {reason}")


class DuplicateStatementError(StatementExecutionError):
    """Raised when an insert collides with an existing primary key."""


class TransactionError(PersistenceError):
    """Raised when a unit of work fails to commit, roll back or close."""
