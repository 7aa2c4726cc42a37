"""Protocols and structlog implementations for IAM repository observability.

Repository probes record lookups and storage failures. Tokens and key
material are never passed to a probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ApplicationRepositoryProbe(Protocol):
    """Domain probe for application and API key lookups."""

    def api_keys_loaded(self, app_external_id: str, count: int) -> None:
        """Record how many stored keys were found for an application."""
        ...

    def application_not_found_by_client_id(self, provider: str, client_id: str) -> None:
        """Record that no application is registered for an OAuth2 client id."""
        ...

    def query_failed(self, operation: str, error: str) -> None:
        """Record that a query failed."""
        ...

    def with_context(self, context: ObservationContext) -> ApplicationRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class AuthRepositoryProbe(Protocol):
    """Domain probe for Auth record persistence."""

    def auth_not_found(self, lookup: str) -> None:
        """Record that no Auth record matched a lookup."""
        ...

    def auth_token_updated(self, auth_id: str) -> None:
        """Record that an Auth record's token fields were written."""
        ...

    def query_failed(self, operation: str, error: str) -> None:
        """Record that a query failed."""
        ...

    def with_context(self, context: ObservationContext) -> AuthRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class AuthorizationRepositoryProbe(Protocol):
    """Domain probe for permission queries."""

    def query_failed(self, operation: str, error: str) -> None:
        """Record that a query failed."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> AuthorizationRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class _StructlogRepositoryProbe:
    """Shared structlog plumbing for the repository probes."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> Any:
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)

    def query_failed(self, operation: str, error: str) -> None:
        self._logger.error(
            "repository_query_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )


class DefaultApplicationRepositoryProbe(_StructlogRepositoryProbe):
    """Default implementation of ApplicationRepositoryProbe using structlog."""

    def api_keys_loaded(self, app_external_id: str, count: int) -> None:
        self._logger.debug(
            "api_keys_loaded",
            app_external_id=app_external_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def application_not_found_by_client_id(self, provider: str, client_id: str) -> None:
        self._logger.debug(
            "application_not_found_by_client_id",
            provider=provider,
            client_id=client_id,
            **self._get_context_kwargs(),
        )


class DefaultAuthRepositoryProbe(_StructlogRepositoryProbe):
    """Default implementation of AuthRepositoryProbe using structlog."""

    def auth_not_found(self, lookup: str) -> None:
        self._logger.debug(
            "auth_not_found",
            lookup=lookup,
            **self._get_context_kwargs(),
        )

    def auth_token_updated(self, auth_id: str) -> None:
        self._logger.debug(
            "auth_token_updated",
            auth_id=auth_id,
            **self._get_context_kwargs(),
        )


class DefaultAuthorizationRepositoryProbe(_StructlogRepositoryProbe):
    """Default implementation of AuthorizationRepositoryProbe using structlog."""
