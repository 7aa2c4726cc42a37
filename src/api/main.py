"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from iam.presentation import register_exception_handlers
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_security_settings, get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def marquee_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Startup checks on security settings
    - Database engine disposal on shutdown (engines are created lazily)
    """
    configure_logging()
    probe = DefaultStartupProbe()
    security = get_security_settings()
    probe.application_starting(version=__version__, realm=security.realm)
    if not security.encryption_key.get_secret_value():
        probe.encryption_key_missing()

    yield

    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-tenant API authentication and authorization",
    version=__version__,
    lifespan=marquee_lifespan,
)

register_exception_handlers(app, realm=get_security_settings().realm)

# Include IAM bounded context routes
app.include_router(iam_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
