"""InMemoryMessageResolver — dict backed IMessageResolver."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...ports.messages import IMessageResolver

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("exclusive_control.messages")


class InMemoryMessageResolver(IMessageResolver):
    """
    Resolves message ids from per-language tables.

    Useful for tests and for applications that keep their messages in code.

        ```python
        resolver = InMemoryMessageResolver(
            {"en": {"MSG00025": "Data was updated by another user."}},
            language="en",
        )
        ```
    """

    def __init__(
        self,
        messages: Mapping[str, Mapping[str, str]],
        *,
        language: str,
        fallback_language: str | None = None,
    ) -> None:
        self._messages = {lang: dict(table) for lang, table in messages.items()}
        self.language = language
        self.fallback_language = fallback_language

    def resolve(self, message_id: str) -> str:
        text = self._messages.get(self.language, {}).get(message_id)
        if text is not None:
            return text
        if self.fallback_language is not None:
            text = self._messages.get(self.fallback_language, {}).get(message_id)
            if text is not None:
                logger.debug(
                    "Message %s missing for %s, using %s",
                    message_id,
                    self.language,
                    self.fallback_language,
                )
                return text
        raise KeyError(f"Unknown message id {message_id!r} for language {self.language!r}")
