"""SQLAlchemy ORM models for the apps and app_api_keys tables.

Only the AES-GCM ciphertext of an API key is stored (hex encoded); the
plaintext key is never persisted.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class ApplicationModel(Base, TimestampMixin):
    """ORM model for apps table.

    Notes:
    - org_id references orgs.id with RESTRICT delete
    - (auth_provider, auth_provider_client_id) is unique so an OAuth2 client
      id maps to at most one application
    """

    __tablename__ = "apps"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    org_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("orgs.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    auth_provider: Mapped[str | None] = mapped_column(String(20), nullable=True)
    auth_provider_client_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("org_id", "name", name="uq_apps_org_name"),
        UniqueConstraint(
            "auth_provider",
            "auth_provider_client_id",
            name="uq_apps_auth_provider_client_id",
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ApplicationModel(id={self.id}, name={self.name}, org_id={self.org_id})>"


class AppAPIKeyModel(Base, TimestampMixin):
    """ORM model for app_api_keys table.

    The hex ciphertext is the primary key; AES-GCM nonces make every
    ciphertext unique even for equal plaintexts.
    """

    __tablename__ = "app_api_keys"

    api_key: Mapped[str] = mapped_column(String(256), primary_key=True)
    app_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("apps.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    deactivation_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<AppAPIKeyModel(app_id={self.app_id}, "
            f"deactivation_at={self.deactivation_at})>"
        )
