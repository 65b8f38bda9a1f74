"""HTTP tests for service endpoints and error mapping."""

from unittest.mock import AsyncMock

import pytest

from api.application import status_for
from domain.shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)


@pytest.mark.asyncio
async def test_root_reports_running(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.text == "BiteLog Server is running"


@pytest.mark.asyncio
async def test_health_and_version(client):
    health = await client.get("/health")
    version = await client.get("/version")

    assert health.json() == {"status": "ok", "backend": "inmemory"}
    assert "version" in version.json()


@pytest.mark.asyncio
async def test_store_failure_hides_details(client, repositories):
    repositories.meals.search = AsyncMock(side_effect=StoreError("find_many failed on meals"))

    response = await client.get("/meals")

    assert response.status_code == 500
    assert response.json() == {"error": "internal_error", "message": "Internal server error"}


@pytest.mark.asyncio
async def test_unknown_route(client):
    response = await client.get("/nowhere")

    assert response.status_code == 404


@pytest.mark.parametrize(
    "error, status",
    [
        (ValidationError("bad"), 400),
        (AuthenticationError(), 401),
        (AuthorizationError(), 403),
        (NotFoundError("Meal"), 404),
        (ConflictError("again"), 409),
        (StoreError("down"), 500),
    ],
)
def test_status_mapping(error, status):
    assert status_for(error) == status
