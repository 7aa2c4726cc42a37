"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import base64
import binascii
import secrets
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Self

from ulid import ULID

EXTERNAL_ID_BYTE_LENGTH = 12


@dataclass(frozen=True)
class _ULIDIdentifier:
    """Base for internal aggregate identifiers.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from a string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class OrganizationId(_ULIDIdentifier):
    """Identifier for an Organization aggregate."""


@dataclass(frozen=True)
class ApplicationId(_ULIDIdentifier):
    """Identifier for an Application aggregate."""


@dataclass(frozen=True)
class UserId(_ULIDIdentifier):
    """Identifier for a User aggregate."""


@dataclass(frozen=True)
class AuthId(_ULIDIdentifier):
    """Identifier for an Auth record."""


@dataclass(frozen=True)
class PermissionId(_ULIDIdentifier):
    """Identifier for a Permission."""


@dataclass(frozen=True)
class RoleId(_ULIDIdentifier):
    """Identifier for a Role."""


@dataclass(frozen=True)
class ExternalId:
    """Public identifier handed to outside callers.

    Twelve random bytes rendered as URL-safe base64. Internal ULIDs never
    leave the service; clients (for example via ``X-APP-ID``) only ever see
    external ids.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> ExternalId:
        """Generate a new random external id."""
        raw = secrets.token_bytes(EXTERNAL_ID_BYTE_LENGTH)
        return cls(value=base64.urlsafe_b64encode(raw).decode("ascii"))

    @classmethod
    def from_string(cls, value: str) -> ExternalId:
        """Create an ExternalId from its string form.

        Raises:
            ValueError: If value is empty or not URL-safe base64
        """
        if not value:
            raise ValueError("ExternalId cannot be empty")
        try:
            base64.b64decode(value.encode("ascii"), altchars=b"-_", validate=True)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise ValueError(f"Invalid ExternalId: {value}") from e

        return cls(value=value)


class OrgKind(StrEnum):
    """Classification of an organization."""

    GENESIS = "genesis"
    TEST = "test"
    STANDARD = "standard"


class Provider(StrEnum):
    """OAuth2 identity provider.

    Only Google is supported today; adding a provider means adding a member
    here and registering a token exchanger for it.
    """

    GOOGLE = "google"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> Provider:
        """Parse a provider name case-insensitively.

        Unrecognized or missing names map to ``UNKNOWN`` rather than raising,
        so the caller decides how to reject them.
        """
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ProviderTokenInfo:
    """What a provider reports about an access token.

    Attributes:
        expiration: Estimated time of expiry. Some providers send an
            absolute time, others seconds-until-expiry, so this is not exact.
        client_id: The OAuth2 client that obtained the token.
        scope: Space separated scopes granted to the token.
    """

    expiration: datetime | None
    client_id: str
    scope: str = ""


@dataclass(frozen=True)
class ProviderUserInfo:
    """Profile fields common to OAuth2 providers."""

    external_id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    full_name: str = ""
    hosted_domain: str = ""
    profile_link: str = ""
    locale: str = ""
    picture: str = ""


@dataclass(frozen=True)
class ProviderInfo:
    """Result of exchanging a bearer token with a provider."""

    provider: Provider
    token_info: ProviderTokenInfo
    user_info: ProviderUserInfo
