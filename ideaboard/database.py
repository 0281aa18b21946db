"""
Ideaboard – Async SQLAlchemy engine, session factory, and declarative base.

SQLite (aiosqlite) is the default backend; PostgreSQL (asyncpg) is used
when DATABASE_URL points at it.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ideaboard.config import settings

# Seconds a SQLite writer waits on a locked database before failing
SQLITE_BUSY_TIMEOUT = 30


def engine_options(database_url: str) -> Dict[str, Any]:
    """Driver-specific keyword arguments for ``create_async_engine``."""
    backend = make_url(database_url).get_backend_name()
    options: Dict[str, Any] = {"echo": settings.DEBUG and not settings.is_production}

    if backend == "sqlite":
        # Concurrent vote updates queue on the file lock instead of erroring
        options["connect_args"] = {"timeout": SQLITE_BUSY_TIMEOUT}
    elif backend == "postgresql":
        # PgBouncer in transaction mode does not support prepared statement caching.
        options["connect_args"] = {"statement_cache_size": 0}
    return options


# ── Engine ──
engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# ── Session factory ──
async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ideaboard ORM models."""


# ── Dependency for FastAPI routes ──
async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield a session per request; commit when the handler succeeds, roll back otherwise."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
