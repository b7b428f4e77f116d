"""
AccessRequest model for the cross-tenant brand access workflow.

Flow:
1. A requester company creates a PENDING request against a target brand
2. The target brand's company approves or denies it
3. APPROVED unlocks the full brand view (assets, counts) for the requester

Rules:
- At most one request per (requester_company_id, target_brand_id), any status.
  Enforced by a unique constraint, never by a pre-insert lookup.
- APPROVED and DENIED are terminal.
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from brandhub.db_base import Base
from brandhub.models.base import TimestampMixin


class AccessRequestStatus(str, enum.Enum):
    """Lifecycle status of an access request."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


class AccessType(str, enum.Enum):
    FULL = "FULL"
    LIMITED = "LIMITED"


TERMINAL_STATUSES = frozenset({
    AccessRequestStatus.APPROVED.value,
    AccessRequestStatus.DENIED.value,
})


class AccessRequest(Base, TimestampMixin):
    """
    A requester company's request to see a target brand's assets.

    - requester_company_id: company asking for access
    - target_brand_id: brand being requested
    - status: PENDING -> APPROVED|DENIED
    - approved_at: set only on the transition to APPROVED
    """

    __tablename__ = "access_requests"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal UUID primary key",
    )

    requester_company_id = Column(
        String(255),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Company requesting access",
    )

    target_brand_id = Column(
        String(255),
        ForeignKey("brands.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Brand being requested",
    )

    status = Column(
        String(20),
        nullable=False,
        default=AccessRequestStatus.PENDING.value,
        comment="PENDING, APPROVED or DENIED",
    )

    access_type = Column(
        String(20),
        nullable=False,
        default=AccessType.FULL.value,
        comment="Access level granted on approval",
    )

    message = Column(
        Text,
        nullable=True,
        comment="Optional note from the requester",
    )

    approved_at = Column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the request was approved",
    )

    requester_company = relationship("Company", lazy="joined")
    target_brand = relationship("Brand", back_populates="access_requests", lazy="joined")

    __table_args__ = (
        UniqueConstraint(
            "requester_company_id",
            "target_brand_id",
            name="uq_access_requests_requester_target",
        ),
        Index("ix_access_requests_target_status", "target_brand_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<AccessRequest(id={self.id}, requester={self.requester_company_id}, "
            f"brand={self.target_brand_id}, status={self.status})>"
        )

    @property
    def is_pending(self) -> bool:
        return self.status == AccessRequestStatus.PENDING.value

    @property
    def is_approved(self) -> bool:
        return self.status == AccessRequestStatus.APPROVED.value

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def approve(self) -> None:
        """Mark this request as approved."""
        self.status = AccessRequestStatus.APPROVED.value
        self.approved_at = datetime.now(timezone.utc)

    def deny(self) -> None:
        """Mark this request as denied."""
        self.status = AccessRequestStatus.DENIED.value
