"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for common fields (integer identities, creation timestamps).

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements columns declared exactly as INTEGER PRIMARY KEY
BigIntegerId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class IntegerIdMixin:
    """
    Mixin providing a storage-assigned, monotonically increasing primary key.

    Identifiers are unique and only grow, so they order rows by insertion
    even when timestamps collide.

    Attributes:
        id: Autoincrement integer primary key, assigned on insert
    """

    id: Mapped[int] = mapped_column(
        BigIntegerId,
        primary_key=True,
        autoincrement=True,
    )


class CreatedAtMixin:
    """
    Mixin providing an immutable creation timestamp.

    Rows using this mixin are append-only, so there is no updated_at.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
