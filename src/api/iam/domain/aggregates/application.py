"""Application aggregate for IAM context."""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from datetime import datetime

from iam.domain.aggregates.api_key import APIKey
from iam.domain.aggregates.organization import Organization
from iam.domain.value_objects import ApplicationId, ExternalId, Provider


@dataclass
class Application:
    """An application calling the API on behalf of an organization.

    An application authenticates with its external id plus one of its API
    keys, or is implied by the OAuth2 client id a user authenticated with.

    Business rules:
    - An application never holds a key that is already invalid when added
    - Key matching and key validity are separate checks, but both fail with
      the same error so callers cannot learn which one failed
    """

    id: ApplicationId
    external_id: ExternalId
    org: Organization
    name: str
    description: str = ""
    provider: Provider = Provider.UNKNOWN
    provider_client_id: str | None = None
    api_keys: list[APIKey] = field(default_factory=list, repr=False)

    def add_key(self, key: APIKey, now: datetime | None = None) -> None:
        """Validate and attach an API key.

        Raises:
            DomainValidationError: If the key is expired or has no ciphertext
        """
        key.validate(now)
        self.api_keys.append(key)

    def validate_key(
        self, realm: str, candidate: str, now: datetime | None = None
    ) -> APIKey:
        """Find the key matching ``candidate`` and check that it is usable.

        Args:
            realm: Realm for the authentication challenge
            candidate: Plaintext key presented by the caller
            now: Reference time for the validity check

        Returns:
            The matching, valid key

        Raises:
            InvalidAPIKeyError: If no key matches or the match is not valid
        """
        from iam.ports.exceptions import DomainValidationError, InvalidAPIKeyError

        key = self._match_key(realm, candidate)
        try:
            key.validate(now)
        except DomainValidationError as e:
            raise InvalidAPIKeyError(
                "API key is not valid for the application", realm=realm
            ) from e
        return key

    def _match_key(self, realm: str, candidate: str) -> APIKey:
        from iam.ports.exceptions import InvalidAPIKeyError

        presented = candidate.encode()
        for api_key in self.api_keys:
            if hmac.compare_digest(api_key.key.encode(), presented):
                return api_key

        raise InvalidAPIKeyError(
            "API key does not match any key for the application", realm=realm
        )
