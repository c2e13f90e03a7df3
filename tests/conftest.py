"""
Pytest fixtures - in-memory DB, session store, HTTP clients, users.
Each test gets a fresh SQLite database and an empty in-memory session store.
"""

import os

# Before any app import: cheap hashing and no Redis in tests
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_BACKEND", "memory")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from todo_app.config import get_settings
from todo_app.core.security import hash_password
from todo_app.core.sessions import MemorySessionStore, get_session_store
from todo_app.db.base import Base
from todo_app.db.models import User
from todo_app.db.session import get_db
from todo_app.main import app

# In-memory SQLite shared by every connection of the test engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


class FakeClock:
    """Manually advanced monotonic clock for session expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as s:
        yield s


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_store(clock) -> MemorySessionStore:
    return MemorySessionStore(get_settings().session_ttl_seconds, clock=clock)


@pytest_asyncio.fixture
async def make_client(session: AsyncSession, session_store: MemorySessionStore):
    """Factory for independent browsers: each client has its own cookie jar."""

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: session_store
    clients: list[AsyncClient] = []

    def _make(raise_app_exceptions: bool = True) -> AsyncClient:
        ac = AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions),
            base_url="http://test",
        )
        clients.append(ac)
        return ac

    yield _make
    for ac in clients:
        await ac.aclose()
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(make_client) -> AsyncClient:
    return make_client()


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    user = User(
        email="test@example.com",
        hashed_password=hash_password("password123"),
        name="Test User",
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def google_user(session: AsyncSession) -> User:
    user = User(google_id="google-sub-1", email="g@example.com", name="Goo Gle")
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


async def register(client: AsyncClient, email: str, password: str = "pw123456", name: str = "Ann"):
    return await client.post(
        "/auth/register", json={"email": email, "password": password, "name": name}
    )


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient) -> AsyncClient:
    """A browser logged in as a freshly registered user."""
    r = await register(client, "ann@example.com")
    assert r.status_code == 200
    return client
