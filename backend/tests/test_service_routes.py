"""
Product Catalog Backend: Service Route Tests
============================================

What:  Tests for the greeting and health endpoints.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app import __version__
from app.config import Settings
from app.main import create_app


async def _get(app_settings, path):
    transport = ASGITransport(app=create_app(app_settings))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.get(path)


class TestGreeting:

    @pytest.mark.asyncio
    async def test_default_name(self):
        response = await _get(Settings(name="World"), "/")

        assert response.status_code == 200
        assert response.text == "Hello World!"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_configured_name(self):
        response = await _get(Settings(name="Chiang Mai"), "/")
        assert response.text == "Hello Chiang Mai!"


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, database):
        response = await _get(Settings(upload_mode="url_only"), "/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__
        assert body["upload_mode"] == "url_only"
        assert body["uptime_seconds"] >= 0
