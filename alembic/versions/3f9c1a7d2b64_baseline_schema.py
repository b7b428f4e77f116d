"""baseline_schema

Revision ID: 3f9c1a7d2b64
Revises: 
Create Date: 2026-10-18 09:12:41.503318

"""
from typing import Sequence, Union

from alembic import op

from brandhub.db_base import Base
import brandhub.models  # noqa: F401 - required to register all model metadata


# revision identifiers, used by Alembic.
revision: str = '3f9c1a7d2b64'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    Base.metadata.create_all(bind=bind)


def downgrade() -> None:
    bind = op.get_bind()
    Base.metadata.drop_all(bind=bind)
