"""Database dependency injection for FastAPI.

Provides the request-scoped async session with connection pooling. Services
own transaction boundaries via ``async with session.begin()``.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_write_engine
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import get_database_settings

_probe = DefaultConnectionProbe()

_write_engine: AsyncEngine | None = None
_write_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_write_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine and sessionmaker on first call using double-check
    locking, and caches both for subsequent calls.
    """
    global _write_engine, _write_sessionmaker
    if _write_engine is None:
        with _engine_lock:
            if _write_engine is None:
                settings = get_database_settings()
                _write_engine = create_write_engine(settings)
                _write_sessionmaker = async_sessionmaker(
                    _write_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.pool_initialized(
                    host=settings.host,
                    database=settings.database,
                    max_conn=settings.pool_max_connections,
                )
    return _write_engine


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    The session does NOT auto-commit. Callers must explicitly manage
    transactions using ``async with session.begin()``.

    Yields:
        AsyncSession for database operations
    """
    get_write_engine()
    assert _write_sessionmaker is not None

    async with _write_sessionmaker() as session:
        yield session


async def ping_database() -> bool:
    """Run a trivial statement to verify the database is reachable."""
    engine = get_write_engine()
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except Exception as e:
        settings = get_database_settings()
        _probe.connection_failed(
            host=settings.host, database=settings.database, error=e
        )
        return False
    return True


async def close_database_connections() -> None:
    """Dispose the engine on application shutdown.

    Also resets the sessionmaker to allow reinitialization.
    """
    global _write_engine, _write_sessionmaker

    if _write_engine is not None:
        await _write_engine.dispose()
        _probe.pool_closed()
        _write_engine = None
        _write_sessionmaker = None
