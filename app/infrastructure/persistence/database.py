"""SQLAlchemy async engine and sessions for the account store.

PostgreSQL (asyncpg) in deployment, with the schema owned by Alembic.
Tests point DATABASE_URL at in-memory SQLite (aiosqlite) and build the
tables from Base.metadata. Nothing connects until the first get_engine()
or get_session_factory() call, so importing this module never reads
settings.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 20
DEFAULT_MAX_OVERFLOW = 30
DEFAULT_COMMAND_TIMEOUT = 60

_engine: AsyncEngine | None = None
_sessions: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Declarative base of every account table."""


def engine_options(settings: Settings) -> dict[str, Any]:
    """Keyword arguments for create_async_engine under settings."""
    if settings.is_sqlite:
        # A single shared connection keeps an in-memory database alive between sessions.
        return {
            "echo": settings.database_echo,
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    options: dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "pool_size": settings.db_pool_size or DEFAULT_POOL_SIZE,
        "max_overflow": settings.db_max_overflow or DEFAULT_MAX_OVERFLOW,
    }
    if settings.database_url.startswith("postgresql+asyncpg"):
        options["connect_args"] = {
            "command_timeout": settings.db_command_timeout or DEFAULT_COMMAND_TIMEOUT
        }
    return options


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the process-wide engine (built on first call)."""
    global _engine, _sessions
    if _sessions is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **engine_options(settings))
        # expire_on_commit=False: results mapped after commit must stay readable.
        _sessions = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)
        logger.debug("Database engine created (sqlite=%s)", settings.is_sqlite)
    return _sessions


def get_engine() -> AsyncEngine:
    get_session_factory()
    assert _engine is not None
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine; the next call builds a new one."""
    global _engine, _sessions
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessions = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request-scoped session. Commits happen in repository.transaction(), never here."""
    async with get_session_factory()() as session:
        yield session
