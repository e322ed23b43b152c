import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event, func, select, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from ..models.base import Base

logger = logging.getLogger(__name__)

# Global variables for database connection
_engine = None
_session_factory = None


def get_database_url() -> str:
    """Get database URL from settings"""
    from .config import get_settings

    return get_settings().database_url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Cascade deletes only hold in SQLite with foreign keys switched on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine, wiring the SQLite pragma when needed."""
    is_sqlite = database_url.startswith("sqlite")
    kwargs = {"echo": echo}
    if is_sqlite and ":memory:" in database_url:
        # One shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    elif is_sqlite:
        kwargs["poolclass"] = NullPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_async_engine(database_url, **kwargs)
    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_database() -> None:
    """Initialize database connection and create tables"""
    global _engine, _session_factory

    database_url = get_database_url()
    logger.info(f"Initializing database: {database_url}")

    if database_url.startswith("sqlite") and ":memory:" not in database_url:
        from pathlib import Path

        db_path = database_url.split("///", 1)[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    _engine = build_engine(database_url)
    _session_factory = build_session_factory(_engine)

    await create_tables(_engine)
    logger.info("Database tables created/verified")


async def close_database() -> None:
    """Close database connection"""
    global _engine, _session_factory
    if _engine:
        await _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database connection closed")


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session context manager"""
    if not _session_factory:
        await init_database()

    async with _session_factory() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {e}")
            raise


async def get_db_session_dependency() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database session"""
    async with get_db_session() as session:
        yield session


async def health_check() -> bool:
    """Check if database is accessible"""
    try:
        async with get_db_session() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return False


async def get_table_counts() -> dict:
    """Row counts for the tables this service owns"""
    from ..models import WeeklyRecap, WeeklyTheme

    try:
        async with get_db_session() as session:
            themes = await session.execute(select(func.count(WeeklyTheme.id)))
            recaps = await session.execute(select(func.count(WeeklyRecap.id)))
            return {
                "weekly_themes": themes.scalar() or 0,
                "weekly_recaps": recaps.scalar() or 0,
            }
    except Exception as e:
        logger.error(f"Error getting table counts: {e}")
        return {}
