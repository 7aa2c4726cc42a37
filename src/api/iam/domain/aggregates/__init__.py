"""Domain aggregates for IAM context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from iam.domain.aggregates.api_key import APIKey
from iam.domain.aggregates.application import Application
from iam.domain.aggregates.auth import TOKEN_EXPIRY_SKEW, Auth
from iam.domain.aggregates.organization import Organization
from iam.domain.aggregates.rbac import Permission, Role
from iam.domain.aggregates.user import User

__all__ = [
    "APIKey",
    "Application",
    "Auth",
    "Organization",
    "Permission",
    "Role",
    "TOKEN_EXPIRY_SKEW",
    "User",
]
