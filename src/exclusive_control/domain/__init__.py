"""Domain value objects: locking contexts and versions."""

from __future__ import annotations

from .context import LockingContext, LockingContextFactory, define_context
from .value_object import ValueObject
from .version import Version

__all__ = [
    "LockingContext",
    "LockingContextFactory",
    "ValueObject",
    "Version",
    "define_context",
]
