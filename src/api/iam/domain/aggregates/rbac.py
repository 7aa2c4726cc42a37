"""Role-based access control definitions for IAM context."""

from __future__ import annotations

from dataclasses import dataclass, field

from iam.domain.value_objects import ExternalId, PermissionId, RoleId

HTTP_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "CONNECT", "TRACE"}
)


@dataclass(frozen=True)
class Permission:
    """Approval of one operation on one resource.

    The resource is a route template such as ``/v1/orgs/{extl_id}`` (never
    a literal path) and the operation is an HTTP method.
    """

    id: PermissionId
    external_id: ExternalId
    resource: str
    operation: str
    description: str
    active: bool = True

    def validate(self) -> None:
        """Check the permission definition.

        Raises:
            DomainValidationError: If a required field is missing or the
                operation is not an HTTP method
        """
        from iam.ports.exceptions import DomainValidationError

        if not self.resource:
            raise DomainValidationError("Resource is required")
        if not self.description:
            raise DomainValidationError("Description is required")
        if self.operation not in HTTP_METHODS:
            raise DomainValidationError(
                f"Operation must be an upper-case HTTP method, got {self.operation!r}"
            )

    def matches(self, resource: str, operation: str) -> bool:
        """Check whether this permission covers ``operation`` on ``resource``."""
        return self.resource == resource and self.operation == operation.upper()


@dataclass
class Role:
    """A named, assignable collection of permissions."""

    id: RoleId
    external_id: ExternalId
    code: str
    description: str
    active: bool = True
    permissions: list[Permission] = field(default_factory=list)

    def validate(self) -> None:
        """Check the role definition.

        Raises:
            DomainValidationError: If the code or description is missing
        """
        from iam.ports.exceptions import DomainValidationError

        if not self.code:
            raise DomainValidationError("Code is required")
        if not self.description:
            raise DomainValidationError("Description is required")

    def grants(self, resource: str, operation: str) -> bool:
        """Check whether an active role grants an active matching permission."""
        if not self.active:
            return False
        return any(
            permission.active and permission.matches(resource, operation)
            for permission in self.permissions
        )
