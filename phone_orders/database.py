"""
Database Connection Module
Handles the SQLite order store using the SQLAlchemy async engine (aiosqlite).
"""

import logging
from functools import lru_cache
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from phone_orders.core.config import get_settings

logger = logging.getLogger(__name__)


# Base class for all our models
class Base(DeclarativeBase):
    pass


@lru_cache()
def get_engine() -> AsyncEngine:
    """
    Create the async engine for the configured DATABASE_URL.

    SQLite connections are opened per session (NullPool); the file itself
    serializes writers.
    """
    settings = get_settings()
    return create_async_engine(
        settings.database_url,
        echo=False,
        poolclass=NullPool,
    )


@lru_cache()
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the cached engine."""
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False  # Objects remain accessible after commit
    )


def reset_engine() -> None:
    """
    Forget the cached engine and session factory.

    Used by tests after pointing DATABASE_URL at a new file.
    """
    get_session_maker.cache_clear()
    get_engine.cache_clear()


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency injection for FastAPI routes.
    Yields a database session and ensures cleanup.
    """
    async with get_session_maker()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db() -> None:
    """
    Create all tables in database.
    Called once at application startup.
    """
    # Register models on Base.metadata
    from phone_orders import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")


async def dispose_engine() -> None:
    """Release engine resources at shutdown."""
    await get_engine().dispose()
