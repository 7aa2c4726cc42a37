"""SQLAlchemy ORM models for role-based access control.

permissions and roles are definitions; role_permissions and users_roles are
the assignments joined when a request is authorized.
"""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class PermissionModel(Base, TimestampMixin):
    """ORM model for permissions table.

    resource is a route template and operation an HTTP method; the pair is
    unique.
    """

    __tablename__ = "permissions"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    resource: Mapped[str] = mapped_column(String(512), nullable=False)
    operation: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint(
            "resource", "operation", name="uq_permissions_resource_operation"
        ),
    )


class RoleModel(Base, TimestampMixin):
    """ORM model for roles table."""

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    code: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(1024), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class RolePermissionModel(Base, TimestampMixin):
    """ORM model for role_permissions table."""

    __tablename__ = "role_permissions"

    role_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    )
    permission_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True
    )


class UserRoleModel(Base, TimestampMixin):
    """ORM model for users_roles table.

    A role is assigned to a user within one organization.
    """

    __tablename__ = "users_roles"

    user_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    )
    org_id: Mapped[str] = mapped_column(
        String(26), ForeignKey("orgs.id", ondelete="CASCADE"), primary_key=True
    )
