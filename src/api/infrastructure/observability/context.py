"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events. Values are identifiers only; credentials and
    tokens never belong in a context.

    Attributes:
        request_id: Unique identifier for the current request.
        user_id: Identifier of the resolved user (if any).
        org_id: Identifier of the resolved organization (if any).
        app_id: Public external id of the calling application (if any).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", app_id="kX9...")
        probe = DefaultAccessControlProbe().with_context(context)
    """

    request_id: str | None = None
    user_id: str | None = None
    org_id: str | None = None
    app_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.org_id is not None:
            result["org_id"] = self.org_id
        if self.app_id is not None:
            result["app_id"] = self.app_id
        result.update(self.extra)
        return result

    def with_user(self, user_id: str, org_id: str | None = None) -> ObservationContext:
        """Create a new context with the resolved user (and org) set."""
        return ObservationContext(
            request_id=self.request_id,
            user_id=user_id,
            org_id=org_id if org_id is not None else self.org_id,
            app_id=self.app_id,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            user_id=self.user_id,
            org_id=self.org_id,
            app_id=self.app_id,
            extra=new_extra,
        )
