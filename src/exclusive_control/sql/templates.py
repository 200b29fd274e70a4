"""SQL templates and the builder that turns them into a TableDescriptor."""

from __future__ import annotations

import logging
import string
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ..primitives.exceptions import TemplateError
from ..primitives.naming import to_placeholder_name
from .descriptor import TableDescriptor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..primitives.naming import PlaceholderNaming

logger = logging.getLogger("exclusive_control.sql")

#: Fields every template may reference with ``{field}`` syntax.
TEMPLATE_FIELDS: frozenset[str] = frozenset(
    {
        "table_name",
        "version_column",
        "primary_key_condition",
        "version_condition",
        "insert_columns",
        "insert_values",
    }
)


class SqlTemplates(BaseModel):
    """
    The six statement templates, each replaceable on its own.

    Templates use ``str.format`` fields:

    - ``{table_name}``: the controlled table.
    - ``{version_column}``: the version column name.
    - ``{primary_key_condition}``: e.g. ``PK1 = :pk1 AND PK2 = :pk2``.
    - ``{version_condition}``: e.g. ``VERSION = :version``.
    - ``{insert_columns}``: e.g. ``PK1, PK2, VERSION``.
    - ``{insert_values}``: e.g. ``:pk1, :pk2, :version``.

    Example:
        ```python
        templates = SqlTemplates(
            update=(
                "UPDATE {table_name} SET {version_column} = {version_column} + 1, "
                "UPDATED_AT = CURRENT_TIMESTAMP WHERE {primary_key_condition}"
            )
        )
        ```
    """

    model_config = ConfigDict(frozen=True)

    select: str = "SELECT {version_column} FROM {table_name} WHERE {primary_key_condition}"
    select_and_check: str = (
        "SELECT {version_column} FROM {table_name} "
        "WHERE {primary_key_condition} AND {version_condition}"
    )
    insert: str = "INSERT INTO {table_name} ({insert_columns}) VALUES ({insert_values})"
    update: str = (
        "UPDATE {table_name} SET {version_column} = ({version_column} + 1) "
        "WHERE {primary_key_condition}"
    )
    update_and_check: str = (
        "UPDATE {table_name} SET {version_column} = ({version_column} + 1) "
        "WHERE {primary_key_condition} AND {version_condition}"
    )
    delete: str = "DELETE FROM {table_name} WHERE {primary_key_condition}"

    def render(self, name: str, values: dict[str, str]) -> str:
        """Substitute *values* into the template called *name*."""
        template: str = getattr(self, name)
        for _, field, _, _ in string.Formatter().parse(template):
            if field is not None and field not in TEMPLATE_FIELDS:
                raise TemplateError(name, field)
        return template.format_map(values)


class SqlTemplateBuilder:
    """Builds :class:`TableDescriptor` objects from :class:`SqlTemplates`.

    Pure string construction; no I/O.
    """

    def __init__(
        self,
        templates: SqlTemplates | None = None,
        naming: PlaceholderNaming = to_placeholder_name,
    ) -> None:
        self.templates = templates or SqlTemplates()
        self.naming = naming

    def predicate(self, column_name: str) -> str:
        return f"{column_name} = :{self.naming(column_name)}"

    def build(
        self,
        table_name: str,
        version_column_name: str,
        primary_key_columns: Sequence[str],
    ) -> TableDescriptor:
        columns = list(primary_key_columns)
        if not columns:
            raise ValueError(f"{table_name} needs at least one primary key column")

        values = {
            "table_name": table_name,
            "version_column": version_column_name,
            "primary_key_condition": " AND ".join(self.predicate(c) for c in columns),
            "version_condition": self.predicate(version_column_name),
            "insert_columns": ", ".join([*columns, version_column_name]),
            "insert_values": ", ".join(
                f":{self.naming(c)}" for c in [*columns, version_column_name]
            ),
        }
        descriptor = TableDescriptor(
            version_column_name=version_column_name,
            select_sql=self.templates.render("select", values),
            select_and_check_sql=self.templates.render("select_and_check", values),
            insert_sql=self.templates.render("insert", values),
            update_sql=self.templates.render("update", values),
            update_and_check_sql=self.templates.render("update_and_check", values),
            delete_sql=self.templates.render("delete", values),
        )
        logger.debug("Built statements for %s: %s", table_name, descriptor)
        return descriptor


def build_table_descriptor(
    table_name: str,
    version_column_name: str,
    primary_key_columns: Sequence[str],
    *,
    templates: SqlTemplates | None = None,
    naming: PlaceholderNaming = to_placeholder_name,
) -> TableDescriptor:
    """Build a descriptor with the given (or default) templates."""
    return SqlTemplateBuilder(templates, naming).build(
        table_name, version_column_name, primary_key_columns
    )
