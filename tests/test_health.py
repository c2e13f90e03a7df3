"""
Health endpoint tests - fast feedback on API availability.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from todo_app.db.session import get_db
from todo_app.main import app


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """GET /api/health returns 200 and status ok."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


@pytest.mark.asyncio
async def test_ready(client: AsyncClient):
    """GET /api/health/ready pings the database."""
    response = await client.get("/api/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_metrics_exposed(client: AsyncClient):
    response = await client.get("/metrics/")
    assert response.status_code == 200
    assert "python_info" in response.text


@pytest.mark.asyncio
async def test_unknown_route_uses_message_body(client: AsyncClient):
    response = await client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}


@pytest.mark.asyncio
async def test_root_serves_single_page_client(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "/static/app.js" in response.text


class _UnreachableDatabase:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))


@pytest.mark.asyncio
async def test_ready_reports_unavailable_database(client: AsyncClient):
    async def override_get_db():
        yield _UnreachableDatabase()

    app.dependency_overrides[get_db] = override_get_db
    response = await client.get("/api/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "unavailable"}
