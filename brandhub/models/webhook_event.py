"""
WebhookEvent model for tracking processed Stripe webhooks.

Used for idempotency - ensures webhooks are processed exactly once.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Index, func

from brandhub.db_base import Base


class WebhookEvent(Base):
    """
    Tracks processed Stripe webhook events for deduplication.

    Stripe retries deliveries until acknowledged, so the same event id
    can arrive more than once.
    """

    __tablename__ = "webhook_events"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Primary key (UUID)"
    )

    stripe_event_id = Column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Stripe event ID (evt_...)"
    )

    event_type = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Stripe event type (e.g., customer.subscription.updated)"
    )

    payload_hash = Column(
        String(64),
        nullable=True,
        comment="SHA-256 hash of payload for debugging"
    )

    processed_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the webhook was processed"
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="When the record was created"
    )

    __table_args__ = (
        Index(
            "idx_webhook_events_processed",
            "processed_at",
            postgresql_ops={"processed_at": "DESC"}
        ),
    )

    def __repr__(self) -> str:
        return f"<WebhookEvent(id={self.id}, event_id={self.stripe_event_id}, type={self.event_type})>"
