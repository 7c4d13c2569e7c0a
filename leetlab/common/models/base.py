"""
Declarative base and shared column definitions.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


def generate_id() -> str:
    """Generate a unique entity identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all LeetLab models."""

    pass


class EntityMixin:
    """
    Identifier and timestamp columns shared by every entity.

    ``created_at`` and ``updated_at`` are stamped with microsecond precision
    by the ORM at insert time, and ``updated_at`` is refreshed on every
    UPDATE issued through the ORM. The server defaults cover rows written
    outside the ORM.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False
    )
