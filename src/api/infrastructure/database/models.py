"""SQLAlchemy declarative base shared by every ORM model.

Constraint names follow a fixed naming convention so that unique violations
raised by PostgreSQL can be matched to the column set that caused them.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class TimestampMixin:
    """Adds ``created_at``/``updated_at`` columns.

    Both are timezone-aware UTC and generated Python-side, at INSERT and at
    UPDATE time respectively.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        insert_default=_utc_now,
        onupdate=_utc_now,
        nullable=False,
    )
