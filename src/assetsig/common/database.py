"""Async SQLAlchemy database access.

The ``Database`` handle owns the engine and session factory. It is built
once at application startup and handed to whoever needs it; there is no
module-level engine.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from assetsig.common.config import DatabaseSettings
from assetsig.common.logging import get_logger
from assetsig.models.base import Base

logger = get_logger(__name__)


def create_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Create async SQLAlchemy engine for the configured URL.

    Args:
        settings: Database settings.

    Returns:
        Configured async engine instance.
    """
    engine_kwargs: dict = {"echo": settings.echo}

    if not settings.is_sqlite:
        engine_kwargs["pool_size"] = settings.pool_size
        engine_kwargs["max_overflow"] = settings.max_overflow
        engine_kwargs["pool_timeout"] = settings.pool_timeout
        engine_kwargs["pool_recycle"] = settings.pool_recycle
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(settings.url, **engine_kwargs)

    if settings.is_sqlite:
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragmas(dbapi_connection, connection_record) -> None:
            """Enforce foreign keys so IPs and ports follow their asset."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class Database:
    """Data-access handle wrapping an engine and its session factory."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: DatabaseSettings) -> "Database":
        """Build a handle from database settings."""
        return cls(create_engine(settings))

    @property
    def dialect(self) -> str:
        """Name of the SQL dialect in use, e.g. ``sqlite`` or ``postgresql``."""
        return self.engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session that is rolled back on error.

        Example:
            async with database.session() as session:
                result = await session.execute(query)
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_schema(self) -> None:
        """Create all tables known to the model metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def check_connection(self) -> bool:
        """Check if database connection is healthy.

        Returns:
            True if connection successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database connection check failed", error=str(e))
            return False

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.engine.dispose()
