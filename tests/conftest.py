"""
Shared pytest fixtures and configuration for all tests.
"""

from collections.abc import Generator
from datetime import date, datetime
from enum import Enum
from typing import Any
from uuid import UUID

import pytest
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Uuid,
    create_engine,
)
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from simple_filter import FieldSpec, FieldType, FilterMixin


class Status(Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class Base(DeclarativeBase):
    pass


class Users(FilterMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str | None] = mapped_column(String(100))
    age: Mapped[int | None] = mapped_column(Integer)
    email: Mapped[str | None] = mapped_column(String(255))
    score: Mapped[float | None] = mapped_column(Float)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    status: Mapped[Status] = mapped_column(SAEnum(Status), default=Status.ACTIVE)
    external_id: Mapped[UUID | None] = mapped_column(Uuid)
    birthday: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime | None] = mapped_column(DateTime)
    profile: Mapped[dict[str, Any] | None] = mapped_column(JSON)


class Accounts(FilterMixin, Base):
    """Model restricting its filterable fields explicitly."""

    __tablename__ = "accounts"
    __filter_fields__ = [
        FieldSpec.of("id", "id"),
        FieldSpec.of("owner_name", "string"),
    ]

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    owner_name: Mapped[str] = mapped_column(String(100))
    balance: Mapped[float] = mapped_column(Float, default=0.0)


events_metadata = MetaData()

events = Table(
    "events",
    events_metadata,
    Column("id", Integer, primary_key=True),
    Column("kind", String(50)),
    Column("happened_at", DateTime),
)


@pytest.fixture
def users_model() -> type[Users]:
    return Users


@pytest.fixture
def accounts_model() -> type[Accounts]:
    return Accounts


@pytest.fixture
def events_table() -> Table:
    return events


@pytest.fixture
def status_enum() -> type[Status]:
    return Status


@pytest.fixture
def user_fields() -> list[FieldSpec]:
    """The id/age/email field list used across the examples."""
    return [
        FieldSpec(name="id", type=FieldType.ID),
        FieldSpec(name="age", type=FieldType.INTEGER),
        FieldSpec(name="email", type=FieldType.STRING),
    ]


@pytest.fixture
def engine():
    """In-memory SQLite engine with all test tables created."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    events_metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    """Session over a small set of users."""
    with Session(engine) as session:
        session.add_all(
            [
                Users(
                    id=1,
                    first_name="Ada",
                    age=36,
                    email="ada@example.com",
                    score=9.5,
                    active=True,
                    status=Status.ACTIVE,
                    external_id=UUID("6f1c2a4e-8b3d-4f8e-9a65-0c1d2e3f4a5b"),
                    birthday=date(1815, 12, 10),
                    created_at=datetime(2024, 1, 15, 10, 30, 0),
                    profile={"lang": "en"},
                ),
                Users(
                    id=2,
                    first_name="Grace",
                    age=21,
                    email=None,
                    score=7.25,
                    active=False,
                    status=Status.SUSPENDED,
                    created_at=datetime(2024, 3, 1, 8, 0, 0),
                ),
                Users(
                    id=3,
                    first_name="Linus",
                    age=17,
                    email="linus@example.com",
                    score=None,
                    active=True,
                    status=Status.ACTIVE,
                    created_at=None,
                ),
            ]
        )
        session.commit()
        yield session


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
