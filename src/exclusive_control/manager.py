"""ExclusiveControlManager — version-column based optimistic and pessimistic locking."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .config import ExclusiveControlConfig
from .connection_context import get_current_connection
from .domain.version import Version
from .ports.exclusive_control import IExclusiveControlManager
from .primitives.exceptions import (
    ConfigurationError,
    InvalidStateError,
    OptimisticLockError,
)
from .primitives.naming import to_placeholder_name
from .sql.cache import TableDescriptorCache, get_default_cache
from .sql.templates import SqlTemplateBuilder, SqlTemplates

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .domain.context import LockingContext
    from .ports.connection import IConnection, IRow
    from .ports.messages import IMessageResolver
    from .sql.descriptor import TableDescriptor

logger = logging.getLogger("exclusive_control.manager")


class ExclusiveControlManager(IExclusiveControlManager):
    """
    Default implementation of :class:`IExclusiveControlManager`.

    Statements are generated from the table name, the primary key columns
    and the version column, then cached per table name (see
    :class:`~exclusive_control.sql.TableDescriptorCache`). Each call binds
    fresh parameters, so operations may be used in any order.

    Without an explicit ``cache`` the process-wide cache is used, unless
    the config overrides the templates or the placeholder naming; such a
    manager gets a private cache so its statements never mix with the
    defaults.

    The connection is the one passed to the constructor, or else the one
    bound to the current context with
    :func:`~exclusive_control.use_connection`.

    Usage:
        ```python
        UserPk = define_context("USER_MST", "VERSION", "USER_ID")
        manager = ExclusiveControlManager()

        with SQLAlchemyUnitOfWork(engine=engine):
            version = manager.get_version(UserPk("u1"))

        # ... later, in another request
        with SQLAlchemyUnitOfWork(engine=engine):
            manager.update_versions_with_check([version])
            update_user(...)
        ```
    """

    def __init__(
        self,
        config: ExclusiveControlConfig | None = None,
        *,
        connection: IConnection | None = None,
        message_resolver: IMessageResolver | None = None,
        cache: TableDescriptorCache | None = None,
    ) -> None:
        self.config = config or ExclusiveControlConfig()
        if self.config.optimistic_lock_error_message_id and message_resolver is None:
            raise ConfigurationError(
                "optimistic_lock_error_message_id is set but no message_resolver "
                "was provided."
            )
        self._connection = connection
        self._message_resolver = message_resolver
        self._cache = cache if cache is not None else self._default_cache_for(self.config)
        self._builder = SqlTemplateBuilder(
            self.config.templates, self.config.placeholder_naming
        )

    # -- public operations ---------------------------------------------------

    def get_version(self, context: LockingContext) -> Version | None:
        descriptor = self._descriptor_for_context(context)
        params = self._bind_primary_key(context.primary_key_values)

        rows = self._query(descriptor.select_sql, params)
        if not rows:
            return None

        value = rows[0].get_string(context.version_column_name)
        if value is None:
            logger.warning("NULL version in %s", context.table_name)
            raise InvalidStateError(descriptor.select_sql, params)
        return Version.of(context, value)

    def check_versions(self, versions: Sequence[Version]) -> None:
        failures: list[Version] = []
        for version in versions:
            descriptor = self._descriptor_for_version(version)
            params = self._bind_with_version(version, descriptor)
            if not self._query(descriptor.select_and_check_sql, params):
                failures.append(version)

        self._raise_on_conflict(failures, len(versions))

    def update_versions_with_check(self, versions: Sequence[Version]) -> None:
        failures: list[Version] = []
        for version in versions:
            descriptor = self._descriptor_for_version(version)
            params = self._bind_with_version(version, descriptor)
            if self._update(descriptor.update_and_check_sql, params) < 1:
                failures.append(version)

        self._raise_on_conflict(failures, len(versions))

    def update_version(self, context: LockingContext) -> None:
        descriptor = self._descriptor_for_context(context)
        params = self._bind_primary_key(context.primary_key_values)

        if self._update(descriptor.update_sql, params) != 1:
            logger.warning("No version row to update in %s", context.table_name)
            raise InvalidStateError(descriptor.update_sql, params)

    def add_version(self, context: LockingContext) -> None:
        descriptor = self._descriptor_for_context(context)
        params = self._bind_primary_key(context.primary_key_values)
        params[self._placeholder(descriptor.version_column_name)] = (
            self.config.version_parameter(self.config.initial_version)
        )
        self._update(descriptor.insert_sql, params)

    def remove_version(self, context: LockingContext) -> None:
        descriptor = self._descriptor_for_context(context)
        params = self._bind_primary_key(context.primary_key_values)

        if self._update(descriptor.delete_sql, params) != 1:
            logger.warning("No version row to remove in %s", context.table_name)
            raise InvalidStateError(descriptor.delete_sql, params, data_label="condition")

    # -- descriptors ---------------------------------------------------------

    @staticmethod
    def _default_cache_for(config: ExclusiveControlConfig) -> TableDescriptorCache:
        # The shared cache only ever holds statements built from the defaults.
        if (
            config.templates == SqlTemplates()
            and config.placeholder_naming is to_placeholder_name
        ):
            return get_default_cache()
        return TableDescriptorCache()

    def _descriptor_for_context(self, context: LockingContext) -> TableDescriptor:
        return self._cache.get_or_create(
            context.table_name,
            context.version_column_name,
            context.primary_key_columns,
            self._builder.build,
        )

    def _descriptor_for_version(self, version: Version) -> TableDescriptor:
        return self._cache.get_or_create(
            version.table_name,
            version.version_column_name,
            version.primary_key_columns,
            self._builder.build,
        )

    # -- binding -------------------------------------------------------------

    def _placeholder(self, column_name: str) -> str:
        return self.config.placeholder_naming(column_name)

    def _bind_primary_key(self, values: Mapping[str, Any]) -> dict[str, Any]:
        return {self._placeholder(column): value for column, value in values.items()}

    def _bind_with_version(
        self, version: Version, descriptor: TableDescriptor
    ) -> dict[str, Any]:
        params = self._bind_primary_key(version.primary_key_values)
        params[self._placeholder(descriptor.version_column_name)] = (
            self.config.version_parameter(version.version)
        )
        return params

    # -- execution -----------------------------------------------------------

    def _get_connection(self) -> IConnection:
        if self._connection is not None:
            return self._connection
        return get_current_connection()

    def _query(self, sql: str, params: dict[str, Any]) -> Sequence[IRow]:
        logger.debug("Querying [%s] with %s", sql, params)
        return self._get_connection().prepare(sql, params).query_rows(params)

    def _update(self, sql: str, params: dict[str, Any]) -> int:
        logger.debug("Executing [%s] with %s", sql, params)
        return self._get_connection().prepare(sql, params).execute_update(params)

    # -- conflicts -----------------------------------------------------------

    def _conflict_messages(self) -> list[str]:
        message_id = self.config.optimistic_lock_error_message_id
        if not message_id or self._message_resolver is None:
            return []
        return [self._message_resolver.resolve(message_id)]

    def _raise_on_conflict(self, failures: list[Version], total: int) -> None:
        if not failures:
            return
        logger.warning(
            "Optimistic lock conflict on %d of %d version(s)", len(failures), total
        )
        raise OptimisticLockError(failures, self._conflict_messages())
