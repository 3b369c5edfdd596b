"""Async database engine, session factory, and lifespan management.

Uses SQLAlchemy 2.0 async with asyncpg driver for PostgreSQL. The engine and
session factory are built once at startup and stored on ``app.state``; no
module-level connection objects exist.
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hub.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async PostgreSQL engine from settings."""
    return create_async_engine(
        settings.db.database_url,
        echo=settings.log_level == "DEBUG",
        pool_size=settings.db.pool_size,
        max_overflow=settings.db.max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory shared by the API dependency and the state containers."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@contextlib.asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """One unit of work: commit on success, rollback and re-raise on error."""
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI — yields an async DB session.

    Usage:
        @router.get("/example")
        async def handler(db: AsyncSession = Depends(get_session)):
            ...
    """
    async with session_scope(request.app.state.session_factory) as session:
        yield session


# ── Lifespan helpers ─────────────────────────────────────────────────


async def init_db(engine: AsyncEngine, settings: Settings) -> None:
    """Verify connectivity and, outside production, create missing tables.

    In production, tables are created via Alembic migrations.
    """
    async with engine.begin() as conn:
        # Import here to ensure all models are registered with Base.metadata
        from hub.models import Base

        if not settings.is_production:
            await conn.run_sync(Base.metadata.create_all)


@contextlib.asynccontextmanager
async def db_lifespan(
    settings: Settings,
) -> AsyncGenerator[tuple[AsyncEngine, async_sessionmaker[AsyncSession]], None]:
    """Context manager for database lifecycle.

    Usage in FastAPI lifespan:
        async with db_lifespan(settings) as (engine, session_factory):
            yield
    """
    engine = build_engine(settings)
    await init_db(engine, settings)
    try:
        yield engine, build_session_factory(engine)
    finally:
        await engine.dispose()
