"""TableDescriptor — generated statements for one version-controlled table."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TableDescriptor:
    """
    The six statements exclusive control runs against a table.

    Built once per table name by :class:`~exclusive_control.sql.SqlTemplateBuilder`
    and shared through :class:`~exclusive_control.sql.TableDescriptorCache`.
    """

    version_column_name: str
    select_sql: str
    select_and_check_sql: str
    insert_sql: str
    update_sql: str
    update_and_check_sql: str
    delete_sql: str
