from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from sqlalchemy import Column, Engine, Integer, String, Table, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from exclusive_control import (
    ExclusiveControlManager,
    SQLAlchemyUnitOfWork,
    TableDescriptorCache,
)


class Base(DeclarativeBase):
    pass


class ExclusiveUserMst(Base):
    __tablename__ = "EXCLUSIVE_USER_MST"

    user_id: Mapped[str] = mapped_column("USER_ID", String(6), primary_key=True)
    pk2: Mapped[str] = mapped_column("PK2", String(6), primary_key=True)
    pk3: Mapped[str] = mapped_column("PK3", String(6), primary_key=True)
    version: Mapped[int] = mapped_column("VERSION", Integer, nullable=False)


class ExclusiveCompMst(Base):
    __tablename__ = "EXCLUSIVE_COMP_MST"

    comp_id: Mapped[str] = mapped_column("COMP_ID", String(6), primary_key=True)
    version: Mapped[int] = mapped_column("VERSION", Integer, nullable=False)


class ExclusiveDummyMst(Base):
    __tablename__ = "EXCLUSIVE_DUMMY_MST"

    pk1: Mapped[str] = mapped_column("PK1", String(6), primary_key=True)
    version: Mapped[int] = mapped_column("VERSION", Integer, nullable=False)


class UserMst(Base):
    """Business table carrying its own version column."""

    __tablename__ = "USER_MST"

    user_id: Mapped[str] = mapped_column("USER_ID", String(6), primary_key=True)
    pk2: Mapped[str] = mapped_column("PK2", String(6), primary_key=True)
    pk3: Mapped[str] = mapped_column("PK3", String(6), primary_key=True)
    name: Mapped[str] = mapped_column("NAME", String(50))
    version: Mapped[int] = mapped_column("VERSION", Integer, nullable=False)


def _column(table: Table, name: str) -> Column[Any]:
    return next(c for c in table.columns if c.name == name)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def cache() -> TableDescriptorCache:
    return TableDescriptorCache()


@pytest.fixture()
def manager(cache: TableDescriptorCache) -> ExclusiveControlManager:
    return ExclusiveControlManager(cache=cache)


@pytest.fixture()
def stored_versions(engine: Engine) -> Callable[[str], dict[tuple[str, ...], int]]:
    """Read ``{primary key tuple: version}`` for a table."""

    def _read(table_name: str) -> dict[tuple[str, ...], int]:
        table = Base.metadata.tables[table_name]
        pk_columns = list(table.primary_key.columns)
        version_column = _column(table, "VERSION")
        with engine.connect() as conn:
            rows = conn.execute(select(table)).all()
        return {
            tuple(row._mapping[c] for c in pk_columns): row._mapping[version_column]
            for row in rows
        }

    return _read


@pytest.fixture()
def seed(engine: Engine) -> Callable[..., None]:
    """Insert rows directly, bypassing the manager."""

    def _seed(table_name: str, **values: Any) -> None:
        with SQLAlchemyUnitOfWork(engine=engine) as uow:
            table = Base.metadata.tables[table_name]
            uow.connection.execute(
                table.insert().values({_column(table, k): v for k, v in values.items()})
            )

    return _seed
