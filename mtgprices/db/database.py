"""
Database engine and session management.

Provides the async SQLAlchemy engine and session factory for the jobs.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mtgprices.config import settings
from mtgprices.models.db import Base

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a session that commits on success and rolls back on error.

    Usage:
        async for session in get_session():
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Initialize database tables.

    Creates the card_prices table if it doesn't exist yet.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def set_sql_trace(enabled: bool) -> None:
    """Log every SQL statement through the sqlalchemy.engine logger."""
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if enabled else logging.WARNING)
