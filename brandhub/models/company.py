"""
Company model - the tenant root.

A company owns its users and exactly zero-or-one brand. Its
subscription_status backs the entitlement gate and is only changed by
Stripe webhook events (or the UNPAID default at creation).
"""

import enum
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from brandhub.db_base import Base
from brandhub.models.base import TimestampMixin


class SubscriptionStatus(str, enum.Enum):
    """Billing state of a company."""
    UNPAID = "UNPAID"
    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    CANCELLED = "CANCELLED"


class Company(Base, TimestampMixin):
    """A tenant: owns users, one brand and that brand's assets."""

    __tablename__ = "companies"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal UUID primary key",
    )

    name = Column(
        String(255),
        nullable=False,
        comment="Company display name",
    )

    subscription_status = Column(
        String(20),
        nullable=False,
        default=SubscriptionStatus.UNPAID.value,
        index=True,
        comment="Billing state: UNPAID, ACTIVE, PAST_DUE, CANCELLED",
    )

    stripe_customer_id = Column(
        String(255),
        nullable=True,
        unique=True,
        comment="Stripe customer handle",
    )

    stripe_subscription_id = Column(
        String(255),
        nullable=True,
        unique=True,
        comment="Stripe subscription handle",
    )

    subscription_ends_at = Column(
        DateTime(timezone=True),
        nullable=True,
        comment="End of the current billing period",
    )

    users = relationship(
        "User",
        back_populates="company",
        cascade="all, delete-orphan",
        order_by="User.created_at",
    )
    brand = relationship(
        "Brand",
        back_populates="company",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<Company(id={self.id}, name={self.name}, "
            f"subscription_status={self.subscription_status})>"
        )

    @property
    def is_active(self) -> bool:
        return self.subscription_status == SubscriptionStatus.ACTIVE.value
