"""Configuration for :class:`~exclusive_control.manager.ExclusiveControlManager`."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .primitives.naming import to_placeholder_name
from .sql.templates import SqlTemplates


class ExclusiveControlConfig(BaseModel):
    """
    Policy values of an exclusive control manager.

    - ``templates``: the six statement templates.
    - ``initial_version``: version written by ``add_version``.
    - ``optimistic_lock_error_message_id``: message id resolved into the
      text carried by :class:`~exclusive_control.OptimisticLockError`.
    - ``placeholder_naming``: column name to bind name conversion.
    - ``version_parameter``: converts the textual version into the value
      bound against the version column. ``int`` suits numeric counters;
      use ``str`` for text or timestamp version domains.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    templates: SqlTemplates = Field(default_factory=SqlTemplates)
    initial_version: str = Field(default="1", min_length=1)
    optimistic_lock_error_message_id: str | None = None
    placeholder_naming: Callable[[str], str] = to_placeholder_name
    version_parameter: Callable[[str], Any] = int
