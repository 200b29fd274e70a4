"""TableDescriptorCache — process-wide, lazily populated statement cache."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .descriptor import TableDescriptor

    DescriptorBuilder = Callable[[str, str, Sequence[str]], TableDescriptor]

logger = logging.getLogger("exclusive_control.cache")


class TableDescriptorCache:
    """
    Maps table names to their :class:`TableDescriptor`.

    Lookups go through an unsynchronized fast path. A miss enters a single
    critical section, re-checks, and only then builds and publishes the
    descriptor, so each table name is built at most once and readers never
    see a partially built entry.

    Entries are keyed by table name alone and never evicted: the number of
    tables is bounded by the schema, not by traffic.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, TableDescriptor] = {}
        self._lock = threading.Lock()

    def get_or_create(
        self,
        table_name: str,
        version_column_name: str,
        primary_key_columns: Sequence[str],
        builder: DescriptorBuilder,
    ) -> TableDescriptor:
        descriptor = self._descriptors.get(table_name)
        if descriptor is not None:
            return descriptor

        with self._lock:
            descriptor = self._descriptors.get(table_name)
            if descriptor is None:
                descriptor = builder(table_name, version_column_name, primary_key_columns)
                self._descriptors[table_name] = descriptor
                logger.info(
                    "Cached exclusive control statements for table %s", table_name
                )
        return descriptor

    def get(self, table_name: str) -> TableDescriptor | None:
        return self._descriptors.get(table_name)

    def __contains__(self, table_name: object) -> bool:
        return table_name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)


_default_cache = TableDescriptorCache()


def get_default_cache() -> TableDescriptorCache:
    """Return the cache shared by every manager without an explicit one."""
    return _default_cache
