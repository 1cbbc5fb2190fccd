"""
Product Catalog Backend: Database Session Management
====================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine for the SQLite file, provides a session
       dependency that rolls back on error and always closes the session.
Who:   Used by the record store dependency and the app lifespan.
When:  Engine is created at module import; sessions are created per-request.

Connection Strategy:
    SQLite connections are opened per session (NullPool). Every store
    operation is a single statement followed by its own commit, so no
    connection outlives the request that opened it.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.config import settings

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    # Echo SQL statements only in DEBUG mode
    echo=settings.log_level == "DEBUG",
)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so a
# created Product can be serialized without another SELECT
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Models registered here are created by `init_models()` at startup.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the record store (which commits each statement)
        3. On error: rolls back anything left uncommitted
        4. Always: closes the session

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db_session)):
            result = await db.execute(select(Product))
            return result.scalars().all()
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models() -> None:
    """
    What:  Creates the products table if it does not exist yet.
    When:  Called during application startup (lifespan handler).
    How:   `create_all` issues CREATE TABLE only for missing tables, so it is
           safe to run on every start. There are no migrations.
    """
    # Register models on Base.metadata before create_all
    from app.models import product  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready at %s", engine.url.render_as_string(hide_password=True))


async def dispose_engine() -> None:
    """
    What:  Gracefully closes the engine.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
