"""Async SQLAlchemy engines for the access control store.

Every lookup the request pipeline makes (keys, auth records, applications,
permission grants) runs on the read engine. The write engine only serves
the token refresh. Both bound every statement with a client-side command
timeout and a server-side ``statement_timeout`` so that a hung query fails
the request instead of holding its pooled connection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "APPLICATION_NAME",
    "build_async_url",
    "build_connect_args",
    "create_read_engine",
    "create_write_engine",
]

APPLICATION_NAME = "marquee-api"


def build_async_url(settings: DatabaseSettings) -> URL:
    """Build the asyncpg URL; credentials are escaped by ``URL.create``."""
    return URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )


def build_connect_args(
    settings: DatabaseSettings, role: str, read_only: bool = False
) -> dict[str, Any]:
    """asyncpg ``connect()`` arguments for one engine role.

    ``command_timeout`` makes asyncpg abandon a statement client-side a
    little after the server's ``statement_timeout`` should have fired.
    Read engines also start every transaction read-only on the server.
    """
    server_settings = {
        "application_name": f"{APPLICATION_NAME}:{role}",
        "statement_timeout": str(settings.statement_timeout_ms),
    }
    if read_only:
        server_settings["default_transaction_read_only"] = "on"

    return {
        "timeout": settings.connect_timeout_seconds,
        "command_timeout": settings.statement_timeout_ms / 1000 + 1,
        "server_settings": server_settings,
    }


def _create_engine(
    settings: DatabaseSettings, role: str, read_only: bool
) -> AsyncEngine:
    return create_async_engine(
        build_async_url(settings),
        connect_args=build_connect_args(settings, role, read_only=read_only),
        pool_size=settings.pool_max_connections,
        max_overflow=0,
        pool_timeout=settings.pool_timeout_seconds,
        pool_pre_ping=True,
        echo=False,
    )


def create_write_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Engine for the auth token refresh, the only write the service makes."""
    return _create_engine(settings, role="write", read_only=False)


def create_read_engine(settings: DatabaseSettings) -> AsyncEngine:
    """Engine for key, auth, tenancy and permission lookups.

    Sessions on this engine cannot write: the server rejects any INSERT or
    UPDATE with ``read_only_sql_transaction``. In production the host may
    point at a replica.
    """
    return _create_engine(settings, role="read", read_only=True)
