"""Tests for health, info and config endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test that health endpoint returns ok status."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "version" in data


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    """Test that root endpoint returns API info."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Maze Escape"
    assert "version" in data
    assert "docs" in data


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    """Test that the logging middleware tags responses with a request ID."""
    response = await client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 8


@pytest.mark.asyncio
async def test_config_endpoint(client: AsyncClient):
    """Test that config lists difficulties for the start screen."""
    response = await client.get("/config")
    assert response.status_code == 200
    data = response.json()
    assert data["difficulties"] == ["easy", "medium", "hard"]
    assert data["default_difficulty"] == "medium"
    assert data["tick_interval_ms"] >= 1
