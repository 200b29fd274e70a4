"""IExclusiveControlManager — public surface of exclusive control."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.context import LockingContext
    from ..domain.version import Version


@runtime_checkable
class IExclusiveControlManager(Protocol):
    """
    Version-column based exclusive control over arbitrary tables.

    Optimistic locking: read a :class:`Version` with :meth:`get_version`,
    keep it with the user's work, then assert it with
    :meth:`check_versions` or :meth:`update_versions_with_check`.

    Pessimistic locking: call :meth:`update_version` before touching the
    row; concurrent writers serialize on the version row until commit.

    All methods run inside the caller's transaction.
    """

    def get_version(self, context: LockingContext) -> Version | None:
        """Return the current version of the row, or ``None`` if absent."""
        ...

    def check_versions(self, versions: Sequence[Version]) -> None:
        """Verify every version without changing any row.

        Raises:
            OptimisticLockError: With all stale versions, in input order.
        """
        ...

    def update_versions_with_check(self, versions: Sequence[Version]) -> None:
        """Verify and increment every version.

        Raises:
            OptimisticLockError: With all stale versions, in input order.
        """
        ...

    def update_version(self, context: LockingContext) -> None:
        """Increment the version unconditionally.

        Raises:
            InvalidStateError: If the row does not exist.
        """
        ...

    def add_version(self, context: LockingContext) -> None:
        """Insert the version row with the initial version."""
        ...

    def remove_version(self, context: LockingContext) -> None:
        """Delete the version row.

        Raises:
            InvalidStateError: If the row does not exist.
        """
        ...
