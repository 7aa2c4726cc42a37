"""Protocol for API key manager observability.

Defines the interface for domain probes that capture application-level
domain events for API key generation and decryption.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class APIKeyServiceProbe(Protocol):
    """Domain probe for API key manager operations."""

    def api_key_generated(self, deactivation: datetime) -> None:
        """Record that a new API key was generated and encrypted."""
        ...

    def api_key_decryption_failed(self, reason: str) -> None:
        """Record that a stored key could not be decrypted."""
        ...

    def with_context(self, context: ObservationContext) -> APIKeyServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAPIKeyServiceProbe:
    """Default implementation of APIKeyServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAPIKeyServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAPIKeyServiceProbe(logger=self._logger, context=context)

    def api_key_generated(self, deactivation: datetime) -> None:
        """Record that a new API key was generated and encrypted."""
        self._logger.info(
            "api_key_generated",
            deactivation=deactivation.isoformat(),
            **self._get_context_kwargs(),
        )

    def api_key_decryption_failed(self, reason: str) -> None:
        """Record that a stored key could not be decrypted.

        Either the row was tampered with or it was sealed under another key.
        """
        self._logger.warning(
            "api_key_decryption_failed",
            reason=reason,
            **self._get_context_kwargs(),
        )
