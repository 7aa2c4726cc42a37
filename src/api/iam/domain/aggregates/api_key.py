"""APIKey value object for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass
class APIKey:
    """An application API key.

    The plaintext key is handed to the client once, alongside the
    application's external id, and acts as the application's password.
    Only the AES-GCM ciphertext is persisted (hex encoded).

    Business rules:
    - A key is valid only if it has ciphertext and its deactivation time
      is strictly in the future
    - Validity is checked at time of use, so a key that was valid when
      created can later become invalid without any change to the key
    """

    key: str = field(repr=False)
    ciphertext: bytes = field(repr=False)
    deactivation: datetime

    @property
    def ciphertext_hex(self) -> str:
        """The encrypted key as stored in the database."""
        return self.ciphertext.hex()

    def set_deactivation(self, deactivation: datetime) -> None:
        """Administratively change when the key stops working."""
        self.deactivation = deactivation

    def set_deactivation_from_string(self, value: str) -> None:
        """Set the deactivation time from an RFC 3339 timestamp.

        Raises:
            DomainValidationError: If the value is not a timezone-aware
                RFC 3339 timestamp
        """
        from iam.ports.exceptions import DomainValidationError

        try:
            parsed = datetime.fromisoformat(value)
        except (TypeError, ValueError) as e:
            raise DomainValidationError(
                f"Deactivation must be an RFC 3339 timestamp: {value!r}"
            ) from e

        if parsed.tzinfo is None:
            raise DomainValidationError(
                f"Deactivation must include a UTC offset: {value!r}"
            )
        self.deactivation = parsed

    def validate(self, now: datetime | None = None) -> None:
        """Check that the key may be used right now.

        Args:
            now: Reference time, defaults to the current UTC time

        Raises:
            DomainValidationError: If the ciphertext is missing or the key
                is deactivated
        """
        from iam.ports.exceptions import DomainValidationError

        if not self.ciphertext:
            raise DomainValidationError("ciphertext must have a value")

        now = now or datetime.now(UTC)
        if self.deactivation <= now:
            raise DomainValidationError(
                f"Key deactivation {self.deactivation.isoformat()} is not after "
                f"current time {now.isoformat()}"
            )

    def is_valid(self, now: datetime | None = None) -> bool:
        """Check if this API key is valid for authentication."""
        from iam.ports.exceptions import DomainValidationError

        try:
            self.validate(now)
        except DomainValidationError:
            return False
        return True
