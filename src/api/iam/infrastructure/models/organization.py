"""SQLAlchemy ORM model for the orgs table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class OrganizationModel(Base, TimestampMixin):
    """ORM model for orgs table.

    Notes:
    - id is VARCHAR(26) for ULID format
    - external_id is the URL-safe base64 id shown to clients
    - kind is one of genesis, test or standard
    """

    __tablename__ = "orgs"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_id: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    kind: Mapped[str] = mapped_column(String(20), nullable=False, default="standard")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<OrganizationModel(id={self.id}, name={self.name}, kind={self.kind})>"
