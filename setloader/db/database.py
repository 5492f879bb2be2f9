"""
Database engine and session management.

Provides the async SQLAlchemy engine and session factory used by the uploader.
Engines are built on demand so that importing this module never requires
database credentials; dry runs don't touch the store at all.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from setloader.config import Settings, require_database_url, settings
from setloader.models.db import Base


def create_engine_from_settings(config: Settings | None = None) -> AsyncEngine:
    """
    Create an async engine for the configured store.

    Raises:
        ConfigurationError: If DATABASE_URL is not set
    """
    config = config or settings
    return create_async_engine(
        require_database_url(config),
        echo=config.debug,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to ``engine``."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    Creates all tables defined in the ORM models. Existing tables are left as-is.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db(engine: AsyncEngine) -> None:
    """
    Drop all database tables.

    WARNING: Destroys all data. Use only for testing.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
