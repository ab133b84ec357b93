"""Database Lifecycle Management - Async Version"""

from typing import Any, Dict, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.data.models import Base
from core.infrastructure.logging import get_logger
from core.settings.modules.database_settings import DatabaseSettings


logger = get_logger(__name__)

_async_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless asked, per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_settings(settings: DatabaseSettings) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    SQLite URLs (tests, local runs) share one connection through StaticPool,
    so pool sizing settings only apply to server databases.
    """
    logger.info(f"Creating database engine: {settings.database_url.split('@')[-1]}")

    options: Dict[str, Any] = {"echo": settings.echo_sql}
    if settings.is_sqlite:
        options.update(
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        options.update(
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_recycle=settings.pool_recycle,
            pool_pre_ping=True,  # Test connections before using
        )

    engine = create_async_engine(settings.database_url, **options)
    if settings.is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory handed to the Unit of Work."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_database(settings: DatabaseSettings) -> None:
    """Initialize async database engine and session factory, then create tables."""
    global _async_engine, _async_session_factory

    if _async_engine is not None:
        return

    logger.info("Initializing database...")

    _async_engine = create_engine_from_settings(settings)
    _async_session_factory = create_session_factory(_async_engine)

    await create_schema(_async_engine)

    logger.info("✅ Database initialized successfully")


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get async session factory."""
    if _async_session_factory is None:
        raise RuntimeError(
            "Database not initialized. Call init_database() first."
        )
    return _async_session_factory


async def close_database() -> None:
    """Close async database engine."""
    global _async_engine, _async_session_factory

    if _async_engine is not None:
        logger.info("Closing database connections...")
        await _async_engine.dispose()
        logger.info("✅ Database connections closed")

    _async_engine = None
    _async_session_factory = None
