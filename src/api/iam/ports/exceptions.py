"""Domain exceptions for IAM bounded context.

These exceptions classify every failure the authentication and
authorization chain can produce. Lower-level failures (a decrypt error,
a provider HTTP error) are wrapped in one of these kinds so callers see a
stable classification no matter which internal step failed.
"""


class UnauthenticatedError(Exception):
    """Raised when the caller's credentials cannot be established.

    Carries the realm to echo in the ``WWW-Authenticate`` challenge. The
    presentation layer maps every subclass to HTTP 401 without a body so
    the response never reveals which check failed.
    """

    def __init__(self, message: str, realm: str | None = None):
        super().__init__(message)
        self.realm = realm


class MissingCredentialsError(UnauthenticatedError):
    """Raised when a required header is absent, duplicated, blank or malformed."""

    pass


class InvalidAPIKeyError(UnauthenticatedError):
    """Raised when a presented application key does not authenticate.

    Covers an unknown application, a non-matching key, an expired key and
    a stored key that fails to decrypt. They are deliberately one error
    kind so a caller cannot tell them apart.
    """

    pass


class UnsupportedProviderError(UnauthenticatedError):
    """Raised when ``X-AUTH-PROVIDER`` names a provider with no exchanger."""

    pass


class ProviderExchangeError(UnauthenticatedError):
    """Raised when the OAuth2 provider rejects the token or cannot be reached."""

    pass


class UserNotProvisionedError(UnauthenticatedError):
    """Raised when a provider identity has no registered user.

    The token was accepted by the provider, but self-registration is an
    explicit separate flow, so the request is still not authenticated.
    """

    pass


class TokenExpiredError(UnauthenticatedError):
    """Raised when the provider reports a token that is already expired."""

    pass


class ApplicationNotResolvedError(UnauthenticatedError):
    """Raised when no application can be bound to an authenticated request."""

    pass


class UnauthorizedError(Exception):
    """Raised when an authenticated user lacks permission for an operation.

    This exception indicates that authorization checks have failed.
    The presentation layer returns HTTP 403 without exposing internal
    details.
    """

    pass


class DomainValidationError(Exception):
    """Raised when a constructor or setter receives malformed input.

    A caller error (for example an unparseable deactivation timestamp),
    never an attacker signal.
    """

    pass


class CryptoError(Exception):
    """Raised when a cryptographic primitive fails.

    Covers an invalid encryption key, a failing random source, malformed
    ciphertext and a tag that does not verify. Callers on the
    authentication path re-raise it as an ``UnauthenticatedError``.
    """

    pass
