"""SQLAlchemy ORM models for IAM bounded context.

These models map to database tables and are used by repository implementations.
"""

from iam.infrastructure.models.application import AppAPIKeyModel, ApplicationModel
from iam.infrastructure.models.auth import AuthModel
from iam.infrastructure.models.organization import OrganizationModel
from iam.infrastructure.models.rbac import (
    PermissionModel,
    RoleModel,
    RolePermissionModel,
    UserRoleModel,
)
from iam.infrastructure.models.user import UserModel

__all__ = [
    "AppAPIKeyModel",
    "ApplicationModel",
    "AuthModel",
    "OrganizationModel",
    "PermissionModel",
    "RoleModel",
    "RolePermissionModel",
    "UserModel",
    "UserRoleModel",
]
