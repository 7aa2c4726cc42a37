"""Protocol for application (API key) authentication observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class AppAuthenticationProbe(Protocol):
    """Domain probe for authenticating applications by API key."""

    def api_key_matched(self, app_external_id: str, org_id: str) -> None:
        """Record that a presented key matched a valid key of the application."""
        ...

    def api_key_authentication_failed(self, app_external_id: str, reason: str) -> None:
        """Record that application authentication failed."""
        ...

    def with_context(self, context: ObservationContext) -> AppAuthenticationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAppAuthenticationProbe:
    """Default implementation of AppAuthenticationProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultAppAuthenticationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAppAuthenticationProbe(logger=self._logger, context=context)

    def api_key_matched(self, app_external_id: str, org_id: str) -> None:
        self._logger.info(
            "api_key_matched",
            app_external_id=app_external_id,
            org_id=org_id,
            **self._get_context_kwargs(),
        )

    def api_key_authentication_failed(self, app_external_id: str, reason: str) -> None:
        self._logger.warning(
            "api_key_authentication_failed",
            app_external_id=app_external_id,
            reason=reason,
            **self._get_context_kwargs(),
        )
