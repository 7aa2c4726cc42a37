"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
the credentials a request presents and the identity accumulated while it
passes through the access control stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from iam.domain.aggregates import Application, Auth, User
from iam.domain.value_objects import Provider


@dataclass(frozen=True)
class AppCredentials:
    """Application external id and plaintext key from ``X-APP-ID``/``X-API-KEY``."""

    app_external_id: str
    api_key: str = field(repr=False)


@dataclass(frozen=True)
class BearerCredentials:
    """OAuth2 bearer token and the provider that issued it."""

    provider: Provider
    access_token: str = field(repr=False)


class AuthStage(StrEnum):
    """Progress of a request through access control.

    Stages advance strictly in declaration order. ``AUTHORIZED`` and
    ``REJECTED`` are terminal.
    """

    UNAUTHENTICATED = "unauthenticated"
    APP_KEY_CHECKED = "app_key_checked"
    USER_IDENTIFIED = "user_identified"
    APP_CONTEXT_BOUND = "app_context_bound"
    AUTHORIZED = "authorized"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Audit:
    """The resolved (application, user, moment) of a request.

    Stamped onto state-changing operations for provenance. Never persisted
    directly.
    """

    app: Application
    user: User
    moment: datetime


@dataclass
class RequestIdentity:
    """Accumulates what each access control stage establishes.

    Threaded explicitly through every stage so a later stage can only read
    what an earlier stage wrote.
    """

    stage: AuthStage = AuthStage.UNAUTHENTICATED
    app: Application | None = None
    auth: Auth | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def user(self) -> User | None:
        """The identified user, once the identity stage has run."""
        return self.auth.user if self.auth is not None else None

    def advance(self, stage: AuthStage) -> None:
        """Move to ``stage``.

        Raises:
            ValueError: If the request is already in a terminal stage
        """
        if self.stage in (AuthStage.AUTHORIZED, AuthStage.REJECTED):
            raise ValueError(f"Cannot leave terminal stage {self.stage}")
        self.stage = stage

    def to_audit(self) -> Audit:
        """Build the audit value once an application and user are bound.

        Raises:
            RuntimeError: If a stage that binds the app or user was skipped
        """
        if self.app is None or self.auth is None:
            raise RuntimeError(
                f"Audit requires a bound application and user (stage={self.stage})"
            )
        return Audit(app=self.app, user=self.auth.user, moment=self.started_at)
