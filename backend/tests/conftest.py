"""
Product Catalog Backend: Test Configuration (conftest.py)
=========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── temp_uploads: Temporary upload directory
    ├── sample_image_bytes: Minimal JPEG bytes for upload tests
    ├── sample_product_data: A complete product body
    ├── database: Creates the products table, drops it afterwards
    ├── client: HTTPX AsyncClient against a multipart-mode app
    ├── url_only_client: HTTPX AsyncClient against a url_only-mode app
    └── strict_client: multipart mode with the name/image_url presence check
"""

import os
import tempfile
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

# Point the app at throwaway storage BEFORE any app imports; the engine and
# the settings singleton read the environment at import time
_TEST_ROOT = tempfile.mkdtemp(prefix="catalog_test_")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(_TEST_ROOT, "test.sqlite")
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.database import Base, engine, init_models
from app.main import create_app


@asynccontextmanager
async def _client_for(app_settings: Settings):
    app = create_app(app_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_product(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = product
            result = await SqlProductStore(mock_db_session).get_product(1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def temp_uploads(tmp_path):
    """A fresh upload directory for each test."""
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    return str(upload_dir)


@pytest.fixture
def sample_image_bytes():
    """
    Minimal JPEG bytes: Start of Image (FFD8) + JFIF marker + End of Image (FFD9).
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_product_data():
    """A product body with every writable field set."""
    return {
        "name": "Mango",
        "season": "Summer",
        "image_url": "https://cdn.example.com/mango.jpg",
        "eng_description": "Sweet yellow mango",
        "thai_description": "มะม่วงน้ำดอกไม้",
        "short_description": "Mango",
        "price": 2.5,
        "caution": "Contains latex in the peel",
        "source": "Chachoengsao",
    }


@pytest_asyncio.fixture
async def database():
    """Creates the products table for one test and drops it afterwards."""
    await init_models()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client(database):
    """HTTPX client for an app in multipart mode without the presence check."""
    async with _client_for(Settings(upload_mode="multipart")) as c:
        yield c


@pytest_asyncio.fixture
async def url_only_client(database):
    """HTTPX client for an app that only accepts image URLs."""
    async with _client_for(Settings(upload_mode="url_only")) as c:
        yield c


@pytest_asyncio.fixture
async def strict_client(database):
    """HTTPX client for an app that requires name and image_url."""
    async with _client_for(
        Settings(upload_mode="multipart", require_product_fields=True)
    ) as c:
        yield c
