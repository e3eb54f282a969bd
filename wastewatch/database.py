"""
Async database engine and session management
"""
import logging
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from wastewatch.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models"""


_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create an async engine for the configured database"""
    settings = settings or get_settings()
    
    if settings.is_sqlite:
        # Make sure the directory for a file-backed SQLite database exists
        db_path = settings.database_url.split(":///", 1)[-1]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(
            settings.database_url, echo=settings.debug, poolclass=NullPool
        )
    
    return create_async_engine(
        settings.database_url, echo=settings.debug, pool_pre_ping=True
    )


def get_engine() -> AsyncEngine:
    """Get the process-wide engine, creating it on first use"""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the process-wide session factory"""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a database session"""
    async with get_session_factory()() as session:
        yield session


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Create tables that do not exist yet"""
    # Import models so they register with Base.metadata
    from wastewatch.models import KeyValueEntry  # noqa: F401
    
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def close_db() -> None:
    """Dispose of the engine and its connections"""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database connections closed")
    _engine = None
    _session_factory = None
