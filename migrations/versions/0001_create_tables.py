"""Create the catalog, content and admin tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op

from database import Base
from utils.schema_upgrade import create_tables

revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# ─────────────────────────────────────────────
# ✅ UPGRADE
# ─────────────────────────────────────────────
def upgrade() -> None:
    # tables that already exist (first deployment) are left alone
    create_tables(op.get_bind())


# ─────────────────────────────────────────────
# ⬅️ DOWNGRADE
# ─────────────────────────────────────────────
def downgrade() -> None:
    Base.metadata.drop_all(bind=op.get_bind(), checkfirst=True)
