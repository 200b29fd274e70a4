"""IMessageResolver — lookup of user-facing (localized) message text."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IMessageResolver(Protocol):
    def resolve(self, message_id: str) -> str:
        """Return the text for *message_id*.

        Raises:
            KeyError: If the id is unknown.
        """
        ...
