"""
Notification model for in-app user notifications.

Rows are created only by the notification dispatcher from intents
emitted by state transitions. The only later mutation is flipping `read`,
and only by the recipient.
"""

import enum
import uuid

from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Index

from brandhub.db_base import Base
from brandhub.models.base import TimestampMixin


class NotificationType(str, enum.Enum):
    """Events that produce notifications."""
    ACCESS_REQUEST = "ACCESS_REQUEST"
    ACCESS_APPROVED = "ACCESS_APPROVED"
    ACCESS_DENIED = "ACCESS_DENIED"
    NEW_ASSETS = "NEW_ASSETS"


class Notification(Base, TimestampMixin):
    """A directed message to one user."""

    __tablename__ = "notifications"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal UUID primary key",
    )

    recipient_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User receiving the notification",
    )

    type = Column(
        String(50),
        nullable=False,
        comment="Notification type",
    )

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    read = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_notifications_recipient_read", "recipient_id", "read"),
    )

    def __repr__(self) -> str:
        return (
            f"<Notification(id={self.id}, recipient={self.recipient_id}, "
            f"type={self.type}, read={self.read})>"
        )
