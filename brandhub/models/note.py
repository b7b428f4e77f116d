"""
Note model - a private annotation a company keeps about another brand.

Notes belong to the annotating company (company_id), not to the brand
owner, and are never shown to the brand owner.
"""

import uuid

from sqlalchemy import Column, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from brandhub.db_base import Base
from brandhub.models.base import TimestampMixin


class Note(Base, TimestampMixin):
    """Company-private note about a brand."""

    __tablename__ = "notes"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal UUID primary key",
    )

    content = Column(Text, nullable=False)

    brand_id = Column(
        String(255),
        ForeignKey("brands.id", ondelete="CASCADE"),
        nullable=False,
        comment="Brand the note is about",
    )

    company_id = Column(
        String(255),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        comment="Annotating company (owner of the note)",
    )

    author_id = Column(
        String(255),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User who wrote the note",
    )

    author = relationship("User", lazy="joined")

    __table_args__ = (
        Index("ix_notes_brand_company", "brand_id", "company_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, brand={self.brand_id}, company={self.company_id})>"
