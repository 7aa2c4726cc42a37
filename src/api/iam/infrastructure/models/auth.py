"""SQLAlchemy ORM model for the auth table.

Links a user to one OAuth2 provider identity and holds the most recent
access token seen for it.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class AuthModel(Base, TimestampMixin):
    """ORM model for auth table.

    Notes:
    - At most one row per (user_id, provider)
    - A provider person id maps to at most one row
    - access_token is indexed for the per-request token lookup
    """

    __tablename__ = "auth"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider: Mapped[str] = mapped_column(String(20), nullable=False)
    provider_client_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    provider_person_id: Mapped[str] = mapped_column(String(255), nullable=False)
    access_token: Mapped[str] = mapped_column(String(4096), nullable=False, index=True)
    token_type: Mapped[str] = mapped_column(String(20), nullable=False, default="Bearer")
    refresh_token: Mapped[str | None] = mapped_column(String(4096), nullable=True)
    access_token_expiry: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("user_id", "provider", name="uq_auth_user_provider"),
        UniqueConstraint(
            "provider", "provider_person_id", name="uq_auth_provider_person_id"
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AuthModel(id={self.id}, user_id={self.user_id}, provider={self.provider})>"
