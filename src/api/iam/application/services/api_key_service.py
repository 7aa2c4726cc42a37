"""API key manager for IAM bounded context.

Creates, encrypts and decrypts application API keys. Keys are 128 bits of
secure random data, base64 encoded, and stored only as AES-256-GCM
ciphertext.
"""

from __future__ import annotations

from datetime import datetime

from iam.application.observability import (
    APIKeyServiceProbe,
    DefaultAPIKeyServiceProbe,
)
from iam.application.security import (
    ENCRYPTION_KEY_LENGTH,
    CryptoRandomGenerator,
    decrypt,
    encrypt,
)
from iam.domain.aggregates import APIKey, Application
from iam.ports.exceptions import CryptoError, InvalidAPIKeyError

API_KEY_BYTE_LENGTH = 16


class APIKeyService:
    """Application service for API key generation and decryption.

    The encryption key is passed in explicitly; the service never reads
    configuration itself.
    """

    def __init__(
        self,
        encryption_key: bytes,
        random_generator: CryptoRandomGenerator | None = None,
        probe: APIKeyServiceProbe | None = None,
    ):
        """Initialize APIKeyService with dependencies.

        Args:
            encryption_key: 32-byte AES-256-GCM key
            random_generator: Source of key material
            probe: Optional domain probe for observability
        """
        self._encryption_key = encryption_key
        self._random = random_generator or CryptoRandomGenerator()
        self._probe = probe or DefaultAPIKeyServiceProbe()

    def _require_encryption_key(self) -> bytes:
        if len(self._encryption_key) != ENCRYPTION_KEY_LENGTH:
            raise CryptoError("No valid encryption key is configured")
        return self._encryption_key

    def generate_key(self, deactivation: datetime) -> APIKey:
        """Generate and encrypt a new API key.

        Args:
            deactivation: When the key stops working

        Returns:
            An APIKey with both plaintext and ciphertext populated

        Raises:
            CryptoError: If the random source or the cipher fails
        """
        encryption_key = self._require_encryption_key()
        plaintext = self._random.random_string(API_KEY_BYTE_LENGTH)
        ciphertext = encrypt(plaintext.encode(), encryption_key)

        self._probe.api_key_generated(deactivation=deactivation)
        return APIKey(key=plaintext, ciphertext=ciphertext, deactivation=deactivation)

    def load_key_from_ciphertext(
        self,
        ciphertext_hex: str,
        deactivation: datetime,
        realm: str | None = None,
    ) -> APIKey:
        """Rebuild an APIKey from its stored hex ciphertext.

        Args:
            ciphertext_hex: The hex-encoded ``nonce|ciphertext|tag``
            deactivation: The stored deactivation time
            realm: Realm for the authentication challenge on failure

        Returns:
            The APIKey with its plaintext recovered

        Raises:
            InvalidAPIKeyError: If the ciphertext is malformed, was tampered
                with, or was sealed under a different key
            CryptoError: If no valid encryption key is configured
        """
        encryption_key = self._require_encryption_key()
        try:
            ciphertext = bytes.fromhex(ciphertext_hex)
            plaintext = decrypt(ciphertext, encryption_key)
        except (ValueError, CryptoError) as e:
            self._probe.api_key_decryption_failed(reason=str(e))
            raise InvalidAPIKeyError(
                "Stored API key could not be decrypted", realm=realm
            ) from e

        return APIKey(
            key=plaintext.decode(), ciphertext=ciphertext, deactivation=deactivation
        )

    def add_new_key(self, app: Application, deactivation: datetime) -> APIKey:
        """Generate a key and attach it to ``app``.

        Raises:
            DomainValidationError: If ``deactivation`` is not in the future
        """
        key = self.generate_key(deactivation)
        app.add_key(key)
        return key
