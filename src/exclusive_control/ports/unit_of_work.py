"""UnitOfWork — Abstract base class for the caller-owned transaction scope."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger("exclusive_control.uow")


class UnitOfWork(ABC):
    """
    Abstract base class for transaction scopes.

    Exclusive control itself never commits; a unit of work is how the
    surrounding application owns the transaction its calls run in.

    Example:
        ```python
        class MyUnitOfWork(UnitOfWork):
            def commit(self):
                self._conn.commit()

            def rollback(self):
                self._conn.rollback()
        ```
    """

    @abstractmethod
    def commit(self) -> None:
        """Commit the transaction. Must be implemented by subclasses."""
        ...

    @abstractmethod
    def rollback(self) -> None:
        """Rollback the transaction. Must be implemented by subclasses."""
        ...

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Commit on success, rollback when the block raised."""
        if exc_type is None:
            self.commit()
        else:
            logger.debug("Rolling back after %s", exc_type.__name__)
            self.rollback()
