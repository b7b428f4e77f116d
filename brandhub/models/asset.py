"""
Asset model - a categorized media item in a brand's library.

The binary lives in the blob store under `filename`; this row is the
catalog entry.
"""

import enum
import uuid

from sqlalchemy import Column, String, Text, Integer, ForeignKey, Index
from sqlalchemy.orm import relationship

from brandhub.db_base import Base
from brandhub.models.base import TimestampMixin, JSONType


class AssetCategory(str, enum.Enum):
    LOGO = "LOGO"
    PRODUCT = "PRODUCT"
    CAMPAIGN = "CAMPAIGN"


class Asset(Base, TimestampMixin):
    """A file uploaded to a brand's asset library."""

    __tablename__ = "assets"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal UUID primary key",
    )

    filename = Column(
        String(1024),
        nullable=False,
        comment="Blob store key",
    )

    original_name = Column(String(500), nullable=False)

    file_type = Column(
        String(100),
        nullable=False,
        comment="MIME type of the uploaded file",
    )

    size = Column(Integer, nullable=False, comment="Size in bytes")

    url = Column(String(2048), nullable=True, comment="Public object URL")

    category = Column(
        String(20),
        nullable=False,
        comment="LOGO, PRODUCT or CAMPAIGN",
    )

    product_name = Column(
        String(255),
        nullable=True,
        comment="Only set for PRODUCT assets",
    )

    description = Column(Text, nullable=True)

    tags = Column(JSONType, nullable=False, default=list)

    brand_id = Column(
        String(255),
        ForeignKey("brands.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning brand",
    )

    brand = relationship("Brand", back_populates="assets")

    __table_args__ = (
        Index("ix_assets_brand_category", "brand_id", "category"),
    )

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, brand={self.brand_id}, category={self.category})>"
