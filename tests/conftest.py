"""
Cash Card Service — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, so every test starts clean):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── password_service: bcrypt at the minimum cost factor
    ├── user_directory: the three demo users (Bob, Joe, John)
    ├── db_engine: in-memory SQLite seeded with the fixture cards
    └── test_client: HTTPX AsyncClient wired to the app, the seeded
                     database and the fast user directory

Fixture data:
    id   amount   owner
    99   123.45   Bob
    100    1.00   Bob
    101  150.00   Bob
    102   25.00   Joe
    103    5.00   Joe
"""

import os

# Must happen before any cashcard import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("USERS", None)
os.environ.pop("PUBLIC_BASE_URL", None)

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from cashcard.config import UserEntry
from cashcard.database import Base, get_db_session
from cashcard.dependencies import get_user_directory
from cashcard.models.cashcard import CashCardRecord
from cashcard.services.password_service import BcryptPasswordService
from cashcard.services.user_directory import InMemoryUserDirectory

FIXTURE_CARDS = [
    {"id": 99, "amount": 123.45, "owner": "Bob"},
    {"id": 100, "amount": 1.00, "owner": "Bob"},
    {"id": 101, "amount": 150.00, "owner": "Bob"},
    {"id": 102, "amount": 25.00, "owner": "Joe"},
    {"id": 103, "amount": 5.00, "owner": "Joe"},
]

BOB = ("Bob", "abc123")
JOE = ("Joe", "123abc")
JOHN = ("john", "xyz321")


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_find(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = record
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def password_service():
    return BcryptPasswordService(cost_factor=4)


@pytest.fixture
def user_directory(password_service):
    return InMemoryUserDirectory(
        [
            UserEntry(username="Bob", password="abc123", role="CARD-OWNER"),
            UserEntry(username="Joe", password="123abc", role="CARD-OWNER"),
            UserEntry(username="John", password="xyz321", role="NON-OWNER"),
        ],
        password_service,
    )


@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory database with the cash_card table and fixture rows.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all([CashCardRecord(**card) for card in FIXTURE_CARDS])
        await session.commit()

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory, user_directory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_find(test_client):
            response = await test_client.get("/cashcards/99", auth=BOB)
    """
    from cashcard.main import app

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_user_directory] = lambda: user_directory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
