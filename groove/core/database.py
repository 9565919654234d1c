"""
Database configuration and session management
"""

from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, AsyncAdaptedQueuePool
import logging
from contextlib import asynccontextmanager

from groove.config import settings
from groove.core.exceptions import GrooveException

logger = logging.getLogger(__name__)

# Create async engine
if settings.is_testing:
    # NullPool doesn't accept pool parameters
    engine: AsyncEngine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        poolclass=NullPool,
    )
else:
    engine: AsyncEngine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        poolclass=AsyncAdaptedQueuePool,
    )

# Create async session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base
Base = declarative_base()


async def init_db():
    """
    Initialize database connections and create missing tables
    """
    # Register every mapped table on Base.metadata
    import groove.models  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


async def close_db():
    """
    Close database connections
    """
    await engine.dispose()
    logger.info("Database connections closed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get database session.
    Services commit explicitly; anything left open is rolled back on error.
    """
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


class DatabaseManager:
    """
    Transaction helpers shared by the service layer
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def transaction(self, session: AsyncSession):
        """
        Commit on clean exit, roll back and re-raise on error.

        Works whether or not the session already has an implicit transaction
        open (autobegin after a read), which is the common case in endpoints.
        """
        try:
            yield session
            await session.commit()
        except GrooveException as e:
            await session.rollback()
            self.logger.info(f"Transaction rolled back: {e.code}")
            raise
        except Exception as e:
            await session.rollback()
            self.logger.error(f"Transaction rolled back: {type(e).__name__}: {e}")
            raise


# Create global database manager
db_manager = DatabaseManager()
