"""
User model - an authenticated principal belonging to exactly one company.

Each company has exactly one MASTER, created together with the company.
Additional USER members are added and removed by that MASTER.
"""

import enum
import uuid

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship

from brandhub.db_base import Base
from brandhub.models.base import TimestampMixin


class UserRole(str, enum.Enum):
    MASTER = "MASTER"
    USER = "USER"


class User(Base, TimestampMixin):
    """Company member with login credentials."""

    __tablename__ = "users"

    id = Column(
        String(255),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Internal UUID primary key",
    )

    email = Column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Login email, stored lowercase, globally unique",
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)

    role = Column(
        String(20),
        nullable=False,
        default=UserRole.USER.value,
        comment="MASTER or USER",
    )

    company_id = Column(
        String(255),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning company",
    )

    company = relationship("Company", back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    @property
    def is_master(self) -> bool:
        return self.role == UserRole.MASTER.value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
