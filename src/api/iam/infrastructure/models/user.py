"""SQLAlchemy ORM model for the users table."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    Users are scoped to one organization through org_id.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    org_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("orgs.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, default="")
    first_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, org_id={self.org_id})>"
