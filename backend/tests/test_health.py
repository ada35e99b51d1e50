"""
Bookshelf API - Liveness & Health Endpoint Tests
================================================
"""

from unittest.mock import patch

import pytest

from bookshelf import __version__


@pytest.mark.asyncio
async def test_root_reports_running(test_client):
    response = await test_client.get("/")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "API is running!"}


@pytest.mark.asyncio
async def test_health_with_reachable_database(test_client, db_engine):
    with patch("bookshelf.database.engine", db_engine):
        response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["version"] == __version__
    assert body["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_with_unreachable_database(test_client):
    from bookshelf.database import build_engine

    broken = build_engine("sqlite+aiosqlite:////nonexistent-dir/never/books.db")
    with patch("bookshelf.database.engine", broken):
        response = await test_client.get("/health")
    await broken.dispose()

    assert response.status_code == 503
    assert response.json()["database"] == "disconnected"
