"""Parsing of the credential headers a request presents.

Headers consumed:
    X-APP-ID / X-API-KEY: application external id and plaintext key,
        always sent together or not at all
    X-AUTH-PROVIDER: OAuth2 provider name (case-insensitive)
    Authorization: ``Bearer <token>``

Every header may be sent at most once and must not be blank.
"""

from __future__ import annotations

from starlette.datastructures import Headers

from iam.application.value_objects import AppCredentials, BearerCredentials
from iam.domain.value_objects import Provider
from iam.ports.exceptions import MissingCredentialsError

APP_ID_HEADER = "X-APP-ID"
API_KEY_HEADER = "X-API-KEY"
AUTH_PROVIDER_HEADER = "X-AUTH-PROVIDER"
AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


def parse_single_header(headers: Headers, name: str, realm: str) -> str | None:
    """Return the trimmed value of a header sent at most once.

    Returns:
        The value, or None if the header is absent

    Raises:
        MissingCredentialsError: If the header is repeated or blank
    """
    values = headers.getlist(name)
    if not values:
        return None
    if len(values) > 1:
        raise MissingCredentialsError(
            f"Header {name} must be sent only once", realm=realm
        )

    value = values[0].strip()
    if not value:
        raise MissingCredentialsError(f"Header {name} is blank", realm=realm)
    return value


def parse_app_credentials(headers: Headers, realm: str) -> AppCredentials | None:
    """Parse the optional application key headers.

    Returns:
        The credentials, or None when neither header was sent

    Raises:
        MissingCredentialsError: If only one of the two headers was sent, or
            either is repeated or blank
    """
    app_external_id = parse_single_header(headers, APP_ID_HEADER, realm)
    api_key = parse_single_header(headers, API_KEY_HEADER, realm)

    if app_external_id is None and api_key is None:
        return None
    if app_external_id is None or api_key is None:
        raise MissingCredentialsError(
            f"{APP_ID_HEADER} and {API_KEY_HEADER} must be sent together",
            realm=realm,
        )
    return AppCredentials(app_external_id=app_external_id, api_key=api_key)


def parse_bearer_credentials(headers: Headers, realm: str) -> BearerCredentials:
    """Parse the provider and bearer token headers.

    An unrecognized provider name parses to ``Provider.UNKNOWN``; rejecting
    it is left to the identity resolver.

    Raises:
        MissingCredentialsError: If either header is absent, repeated or
            blank, or Authorization is not a non-empty Bearer token
    """
    provider_name = parse_single_header(headers, AUTH_PROVIDER_HEADER, realm)
    if provider_name is None:
        raise MissingCredentialsError(
            f"{AUTH_PROVIDER_HEADER} header is required", realm=realm
        )

    authorization = parse_single_header(headers, AUTHORIZATION_HEADER, realm)
    if authorization is None:
        raise MissingCredentialsError("Authorization header is required", realm=realm)
    if not authorization.startswith(BEARER_PREFIX):
        raise MissingCredentialsError(
            "Authorization header must use the Bearer scheme", realm=realm
        )

    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise MissingCredentialsError("Bearer token is empty", realm=realm)

    return BearerCredentials(provider=Provider.parse(provider_name), access_token=token)
