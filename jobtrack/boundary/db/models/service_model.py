"""
Service ORM model.

Registered pipeline services. Route and completion markers name services
by string; this table is what those names resolve to.

Dependencies: sqlalchemy, jobtrack.boundary.db.base
System role: Service registry for route resolution
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobtrack.boundary.db.base import Base, CreatedAtMixin, IntegerIdMixin


class ServiceModel(Base, IntegerIdMixin, CreatedAtMixin):
    """
    Pipeline service entity.

    Attributes:
        id: Integer primary key
        name: Unique service name as used in payload routes
        description: Optional human-readable description
        created_at: Registration timestamp (UTC)
    """

    __tablename__ = "services"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
