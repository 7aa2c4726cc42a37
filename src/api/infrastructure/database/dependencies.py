"""Database dependency injection for FastAPI.

Provides async session factories for read and write operations with
lazily created, process-wide engines.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine, create_write_engine
from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability import DefaultConnectionProbe
from infrastructure.settings import DatabaseSettings, get_database_settings

_probe = DefaultConnectionProbe()

# Created on first use
_write_engine: AsyncEngine | None = None
_read_engine: AsyncEngine | None = None

_write_sessionmaker: async_sessionmaker[AsyncSession] | None = None
_read_sessionmaker: async_sessionmaker[AsyncSession] | None = None

_engine_lock = threading.Lock()


def _create_engine(
    role: str, factory: Callable[[DatabaseSettings], AsyncEngine]
) -> AsyncEngine:
    settings = get_database_settings()
    try:
        engine = factory(settings)
    except SQLAlchemyError as e:
        _probe.engine_creation_failed(role=role, error=e)
        raise DatabaseConnectionError(
            f"Failed to create {role} engine", operation="create_engine"
        ) from e

    _probe.engine_created(
        role=role,
        host=settings.host,
        database=settings.database,
        pool_size=settings.pool_max_connections,
    )
    return engine


def get_write_engine() -> AsyncEngine:
    """Get the write database engine (singleton).

    Uses double-check locking for thread-safe initialization and caches
    the sessionmaker alongside the engine.
    """
    global _write_engine, _write_sessionmaker
    if _write_engine is None:
        with _engine_lock:
            if _write_engine is None:
                _write_engine = _create_engine("write", create_write_engine)
                _write_sessionmaker = async_sessionmaker(
                    _write_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
    return _write_engine


def get_read_engine() -> AsyncEngine:
    """Get the read database engine (singleton)."""
    global _read_engine, _read_sessionmaker
    if _read_engine is None:
        with _engine_lock:
            if _read_engine is None:
                _read_engine = _create_engine("read", create_read_engine)
                _read_sessionmaker = async_sessionmaker(
                    _read_engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
    return _read_engine


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a write session for mutations (FastAPI dependency).

    The session does NOT auto-commit. Callers commit explicitly once the
    unit of work succeeds.

    Yields:
        AsyncSession for database operations
    """
    get_write_engine()
    assert _write_sessionmaker is not None

    async with _write_sessionmaker() as session:
        yield session


async def get_read_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a read-only session for queries (FastAPI dependency).

    Yields:
        AsyncSession for read-only database operations
    """
    get_read_engine()
    assert _read_sessionmaker is not None

    async with _read_sessionmaker() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose all engines.

    Called on application shutdown. Resets the sessionmakers so the
    engines can be recreated.
    """
    global _write_engine, _read_engine, _write_sessionmaker, _read_sessionmaker

    if _write_engine is not None:
        await _write_engine.dispose()
        _probe.pool_closed(role="write")
        _write_engine = None
        _write_sessionmaker = None

    if _read_engine is not None:
        await _read_engine.dispose()
        _probe.pool_closed(role="read")
        _read_engine = None
        _read_sessionmaker = None
