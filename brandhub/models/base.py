"""
Base mixins for database models.

Provides common functionality:
- TimestampMixin: created_at, updated_at timestamps
- generate_uuid: UUID generation for primary keys
- JSONType: JSON column that maps to JSONB on PostgreSQL
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, JSON, func
from sqlalchemy.dialects.postgresql import JSONB


JSONType = JSON().with_variant(JSONB(), "postgresql")


def generate_uuid() -> str:
    """Generate a UUID4 string for use as a primary key default."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns."""

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Timestamp when record was created"
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        comment="Timestamp when record was last updated"
    )
