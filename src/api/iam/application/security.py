"""Cryptographic primitives for application API keys.

Provides 256-bit AES-GCM encryption of key material and cryptographically
secure random generation. Encrypted output takes the form
``nonce|ciphertext|tag`` where ``|`` is concatenation, so a single byte
string carries everything needed to decrypt and verify it.
"""

import base64
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from iam.ports.exceptions import CryptoError

ENCRYPTION_KEY_LENGTH = 32
NONCE_LENGTH = 12
TAG_LENGTH = 16


def new_encryption_key() -> bytes:
    """Generate a random 256-bit encryption key.

    Raises:
        CryptoError: If the system's secure random source fails
    """
    try:
        return secrets.token_bytes(ENCRYPTION_KEY_LENGTH)
    except OSError as e:
        raise CryptoError(f"Failed to generate encryption key: {e}") from e


def parse_encryption_key(value: str) -> bytes:
    """Decode a hex-encoded encryption key.

    Args:
        value: 64 hexadecimal characters

    Returns:
        The 32 raw key bytes

    Raises:
        CryptoError: If the value is not hex or not exactly 32 bytes long
    """
    try:
        key = bytes.fromhex(value)
    except ValueError as e:
        raise CryptoError("Encryption key is not valid hex") from e

    if len(key) != ENCRYPTION_KEY_LENGTH:
        raise CryptoError(
            f"Encryption key byte length must be exactly {ENCRYPTION_KEY_LENGTH} bytes"
        )
    return key


def _cipher(key: bytes) -> AESGCM:
    if len(key) != ENCRYPTION_KEY_LENGTH:
        raise CryptoError(
            f"Encryption key byte length must be exactly {ENCRYPTION_KEY_LENGTH} bytes"
        )
    return AESGCM(key)


def encrypt(plaintext: bytes, key: bytes) -> bytes:
    """Encrypt data using 256-bit AES-GCM.

    A fresh random nonce is drawn for every call and prepended to the
    sealed output.

    Args:
        plaintext: Data to encrypt
        key: 32-byte encryption key

    Returns:
        ``nonce|ciphertext|tag``

    Raises:
        CryptoError: If the key is invalid or the random source fails
    """
    cipher = _cipher(key)
    try:
        nonce = secrets.token_bytes(NONCE_LENGTH)
    except OSError as e:
        raise CryptoError(f"Failed to generate nonce: {e}") from e
    return nonce + cipher.encrypt(nonce, plaintext, None)


def decrypt(ciphertext: bytes, key: bytes) -> bytes:
    """Decrypt and verify data produced by :func:`encrypt`.

    Args:
        ciphertext: ``nonce|ciphertext|tag``
        key: 32-byte encryption key

    Returns:
        The original plaintext

    Raises:
        CryptoError: If the input is malformed, was tampered with, or was
            sealed under a different key
    """
    cipher = _cipher(key)
    if len(ciphertext) < NONCE_LENGTH + TAG_LENGTH:
        raise CryptoError("malformed ciphertext")

    nonce, sealed = ciphertext[:NONCE_LENGTH], ciphertext[NONCE_LENGTH:]
    try:
        return cipher.decrypt(nonce, sealed, None)
    except InvalidTag as e:
        raise CryptoError("ciphertext failed authentication") from e


class CryptoRandomGenerator:
    """Source of cryptographically secure random data.

    Injected wherever randomness is needed so tests can substitute a
    deterministic source.
    """

    def random_bytes(self, n: int) -> bytes:
        """Return ``n`` securely generated random bytes.

        Raises:
            CryptoError: If the system's secure random source fails
        """
        try:
            return secrets.token_bytes(n)
        except OSError as e:
            raise CryptoError(f"Failed to read random bytes: {e}") from e

    def random_string(self, n: int) -> str:
        """Return ``n`` random bytes as URL-safe base64 (padded)."""
        return base64.urlsafe_b64encode(self.random_bytes(n)).decode("ascii")
