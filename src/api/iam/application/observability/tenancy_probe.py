"""Protocol for application context (tenancy) resolution observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class TenancyProbe(Protocol):
    """Domain probe for binding an application to a request."""

    def app_context_retained(self, app_external_id: str) -> None:
        """Record that the key-authenticated application was kept."""
        ...

    def app_context_resolved(
        self, app_external_id: str, provider: str, client_id: str
    ) -> None:
        """Record that the application was found by OAuth2 client id."""
        ...

    def app_context_unresolved(self, provider: str, client_id: str) -> None:
        """Record that no application could be bound."""
        ...

    def with_context(self, context: ObservationContext) -> TenancyProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenancyProbe:
    """Default implementation of TenancyProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenancyProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenancyProbe(logger=self._logger, context=context)

    def app_context_retained(self, app_external_id: str) -> None:
        self._logger.debug(
            "app_context_retained",
            app_external_id=app_external_id,
            **self._get_context_kwargs(),
        )

    def app_context_resolved(
        self, app_external_id: str, provider: str, client_id: str
    ) -> None:
        self._logger.info(
            "app_context_resolved",
            app_external_id=app_external_id,
            provider=provider,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def app_context_unresolved(self, provider: str, client_id: str) -> None:
        self._logger.warning(
            "app_context_unresolved",
            provider=provider,
            client_id=client_id,
            **self._get_context_kwargs(),
        )
