"""Organization aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import ExternalId, OrganizationId, OrgKind


@dataclass(frozen=True)
class Organization:
    """The tenant boundary.

    Every Application, User and role assignment belongs to exactly one
    Organization. Cross-organization access is prevented by scoping every
    query to an organization id, not by in-memory checks.
    """

    id: OrganizationId
    external_id: ExternalId
    name: str
    description: str = ""
    kind: OrgKind = OrgKind.STANDARD

    def __str__(self) -> str:
        """Return string representation."""
        return f"Organization({self.name})"
