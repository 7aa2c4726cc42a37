"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_starting(self, version: str, realm: str) -> None:
        """Record that the application is starting."""
        ...

    def encryption_key_missing(self) -> None:
        """Record that no application-key encryption key is configured."""
        ...

    def application_stopped(self) -> None:
        """Record that shutdown finished and connections were released."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_starting(self, version: str, realm: str) -> None:
        """Record that the application is starting."""
        self._logger.info(
            "application_starting",
            version=version,
            realm=realm,
            **self._get_context_kwargs(),
        )

    def encryption_key_missing(self) -> None:
        """Record that no application-key encryption key is configured.

        Application-key authentication fails closed until one is set.
        """
        self._logger.warning(
            "encryption_key_missing",
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that shutdown finished and connections were released."""
        self._logger.info(
            "application_stopped",
            **self._get_context_kwargs(),
        )
