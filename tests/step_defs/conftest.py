"""
BDD fixtures and shared steps (pytest-bdd).
Steps are synchronous, so the app runs under Starlette's TestClient; the
test database is created on the client's own event loop.
"""

import pytest
from fastapi.testclient import TestClient
from pytest_bdd import given, parsers, then, when
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from todo_app.config import get_settings
from todo_app.core.sessions import MemorySessionStore, get_session_store
from todo_app.db.base import Base
from todo_app.db.session import get_db
from todo_app.main import app
from tests.conftest import TEST_DATABASE_URL


@pytest.fixture
def api():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    store = MemorySessionStore(get_settings().session_ttl_seconds)

    async def override_get_db():
        async with maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as client:
        client.portal.call(create_tables)
        yield client
        client.portal.call(engine.dispose)
    app.dependency_overrides.clear()


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


def _record(response, r):
    response["status"] = r.status_code
    response["body"] = r.json()


@given(parsers.parse('a registered user "{email}" with password "{password}"'))
def registered_user(api, response, email, password):
    r = api.post("/auth/register", json={"email": email, "password": password, "name": email})
    assert r.status_code == 200
    _record(response, r)


@given(parsers.parse('I request "{method}" "{path}"'))
@when(parsers.parse('I request "{method}" "{path}"'))
def request_path(api, response, method, path):
    _record(response, api.request(method, path))


@then(parsers.parse("the response status should be {status:d}"))
def status_is(response, status):
    assert response["status"] == status


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_has(response, key, value):
    assert response["body"].get(key) == value
