"""
Brand model - the profile a company advertises to other tenants.

One brand per company (company_id is unique). Only members of the
owning company may edit it.
"""

import uuid

from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from brandhub.db_base import Base
from brandhub.models.base import TimestampMixin, JSONType


# Known social platforms; other keys are accepted and stored as-is.
SOCIAL_PLATFORMS = ("instagram", "facebook", "twitter", "linkedin", "tiktok", "youtube")


class Brand(Base, TimestampMixin):
    """Brand profile owned 1:1 by a company."""

    __tablename__ = "brands"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal UUID primary key",
    )

    name = Column(
        String(255),
        nullable=False,
        index=True,
        comment="Brand display name (searchable)",
    )

    about = Column(Text, nullable=True)
    website = Column(String(500), nullable=True)

    contact_info = Column(
        JSONType,
        nullable=True,
        comment="Contact fields (email, phone, address...)",
    )

    social_links = Column(
        JSONType,
        nullable=False,
        default=dict,
        comment="Platform name -> profile URL",
    )

    company_id = Column(
        String(255),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        comment="Owning company (1:1)",
    )

    company = relationship("Company", back_populates="brand", lazy="joined")
    assets = relationship(
        "Asset",
        back_populates="brand",
        cascade="all, delete-orphan",
        order_by="Asset.created_at.desc()",
    )
    access_requests = relationship(
        "AccessRequest",
        back_populates="target_brand",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Brand(id={self.id}, name={self.name}, company={self.company_id})>"
