"""HTTP mapping of IAM failures.

Authentication failures become 401 with a ``WWW-Authenticate`` challenge
and authorization failures become 403. Both responses carry an empty body
so a caller cannot learn which check rejected it.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from iam.ports.exceptions import (
    CryptoError,
    DomainValidationError,
    UnauthenticatedError,
    UnauthorizedError,
)
from infrastructure.database.exceptions import DatabaseError

logger = structlog.get_logger()


def challenge_header(realm: str) -> str:
    """Build the ``WWW-Authenticate`` value for ``realm``."""
    return f'Bearer realm="{realm}"'


def register_exception_handlers(app: FastAPI, realm: str) -> None:
    """Install the IAM exception handlers on ``app``.

    Args:
        app: The FastAPI application
        realm: Default realm, used when an error does not carry its own
    """

    @app.exception_handler(UnauthenticatedError)
    async def unauthenticated_handler(
        request: Request, exc: UnauthenticatedError
    ) -> Response:
        return Response(
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": challenge_header(exc.realm or realm)},
        )

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> Response:
        return Response(status_code=status.HTTP_403_FORBIDDEN)

    @app.exception_handler(DomainValidationError)
    async def validation_handler(
        request: Request, exc: DomainValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
        logger.error(
            "request_failed_database_error",
            path=request.url.path,
            operation=exc.operation,
            error=str(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.exception_handler(CryptoError)
    async def crypto_error_handler(request: Request, exc: CryptoError) -> JSONResponse:
        logger.error(
            "request_failed_crypto_error",
            path=request.url.path,
            error=str(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
