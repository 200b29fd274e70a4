"""Tests for statement generation."""

from __future__ import annotations

import pytest

from exclusive_control import (
    SqlTemplateBuilder,
    SqlTemplates,
    TableDescriptor,
    TemplateError,
    build_table_descriptor,
    to_placeholder_name,
)

# ── Placeholder naming ───────────────────────────────────────────────


@pytest.mark.parametrize(
    ("column", "expected"),
    [
        ("USER_ID", "user_id"),
        ("PK2", "pk2"),
        ("Pk-2", "pk_2"),
        ("__VERSION__", "version"),
        ("ORDER  NO", "order_no"),
        ("1ST_KEY", "_1st_key"),
    ],
)
def test_placeholder_name(column: str, expected: str) -> None:
    assert to_placeholder_name(column) == expected


def test_placeholder_name_rejects_empty_result() -> None:
    with pytest.raises(ValueError, match="placeholder name"):
        to_placeholder_name("--")


# ── Default templates ────────────────────────────────────────────────


class TestDefaultStatements:
    """Statements generated for USER_MST(USER_ID, PK2, PK3) / VERSION."""

    @pytest.fixture()
    def descriptor(self) -> TableDescriptor:
        return build_table_descriptor("USER_MST", "VERSION", ["USER_ID", "PK2", "PK3"])

    def test_select(self, descriptor: TableDescriptor) -> None:
        assert descriptor.select_sql == (
            "SELECT VERSION FROM USER_MST "
            "WHERE USER_ID = :user_id AND PK2 = :pk2 AND PK3 = :pk3"
        )

    def test_select_and_check(self, descriptor: TableDescriptor) -> None:
        assert descriptor.select_and_check_sql == (
            "SELECT VERSION FROM USER_MST "
            "WHERE USER_ID = :user_id AND PK2 = :pk2 AND PK3 = :pk3 "
            "AND VERSION = :version"
        )

    def test_insert(self, descriptor: TableDescriptor) -> None:
        assert descriptor.insert_sql == (
            "INSERT INTO USER_MST (USER_ID, PK2, PK3, VERSION) "
            "VALUES (:user_id, :pk2, :pk3, :version)"
        )

    def test_update(self, descriptor: TableDescriptor) -> None:
        assert descriptor.update_sql == (
            "UPDATE USER_MST SET VERSION = (VERSION + 1) "
            "WHERE USER_ID = :user_id AND PK2 = :pk2 AND PK3 = :pk3"
        )

    def test_update_and_check(self, descriptor: TableDescriptor) -> None:
        assert descriptor.update_and_check_sql == (
            "UPDATE USER_MST SET VERSION = (VERSION + 1) "
            "WHERE USER_ID = :user_id AND PK2 = :pk2 AND PK3 = :pk3 "
            "AND VERSION = :version"
        )

    def test_delete(self, descriptor: TableDescriptor) -> None:
        assert descriptor.delete_sql == (
            "DELETE FROM USER_MST "
            "WHERE USER_ID = :user_id AND PK2 = :pk2 AND PK3 = :pk3"
        )

    def test_keeps_version_column_name(self, descriptor: TableDescriptor) -> None:
        assert descriptor.version_column_name == "VERSION"


def test_single_column_key() -> None:
    descriptor = build_table_descriptor("COMP_MST", "VERSION", ("COMP_ID",))

    assert descriptor.select_sql == (
        "SELECT VERSION FROM COMP_MST WHERE COMP_ID = :comp_id"
    )
    assert descriptor.insert_sql == (
        "INSERT INTO COMP_MST (COMP_ID, VERSION) VALUES (:comp_id, :version)"
    )


def test_empty_primary_key_is_rejected() -> None:
    with pytest.raises(ValueError, match="at least one primary key column"):
        build_table_descriptor("COMP_MST", "VERSION", [])


# ── Overrides ────────────────────────────────────────────────────────


def test_single_template_can_be_overridden() -> None:
    templates = SqlTemplates(
        update=(
            "UPDATE {table_name} SET {version_column} = {version_column} + 1, "
            "UPDATED_AT = CURRENT_TIMESTAMP WHERE {primary_key_condition}"
        )
    )
    descriptor = build_table_descriptor(
        "COMP_MST", "VERSION", ["COMP_ID"], templates=templates
    )

    assert descriptor.update_sql == (
        "UPDATE COMP_MST SET VERSION = VERSION + 1, "
        "UPDATED_AT = CURRENT_TIMESTAMP WHERE COMP_ID = :comp_id"
    )
    # Others keep their defaults.
    assert descriptor.delete_sql == "DELETE FROM COMP_MST WHERE COMP_ID = :comp_id"


def test_unknown_template_field_is_rejected() -> None:
    templates = SqlTemplates(delete="DELETE FROM {schema}.{table_name}")

    with pytest.raises(TemplateError) as exc_info:
        build_table_descriptor("COMP_MST", "VERSION", ["COMP_ID"], templates=templates)

    assert exc_info.value.template_name == "delete"
    assert exc_info.value.field == "schema"


def test_templates_are_immutable() -> None:
    templates = SqlTemplates()
    with pytest.raises(ValueError):
        templates.delete = "DELETE FROM x"  # type: ignore[misc]


def test_custom_placeholder_naming() -> None:
    builder = SqlTemplateBuilder(naming=lambda column: f"p_{column.lower()}")

    descriptor = builder.build("COMP_MST", "VERSION", ["COMP_ID"])

    assert builder.predicate("COMP_ID") == "COMP_ID = :p_comp_id"
    assert descriptor.select_and_check_sql == (
        "SELECT VERSION FROM COMP_MST "
        "WHERE COMP_ID = :p_comp_id AND VERSION = :p_version"
    )
