"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import ExternalId, OrganizationId, UserId


@dataclass(frozen=True)
class User:
    """User aggregate representing an identity scoped to an organization.

    Users are resolved during authentication, never created implicitly.
    Registration is a separate, explicit flow.
    """

    id: UserId
    external_id: ExternalId
    org_id: OrganizationId
    email: str = ""
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        """First and last name joined by a space."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.external_id})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
