"""Insert the settings and about rows with their default copy

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 09:05:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from models import ABOUT_ROW_ID, SETTINGS_ROW_ID
from utils.schema_upgrade import seed_singletons

revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# ─────────────────────────────────────────────
# ✅ UPGRADE
# ─────────────────────────────────────────────
def upgrade() -> None:
    seed_singletons(op.get_bind())


# ─────────────────────────────────────────────
# ⬅️ DOWNGRADE
# ─────────────────────────────────────────────
def downgrade() -> None:
    op.execute(sa.text("DELETE FROM settings WHERE id = :id").bindparams(id=SETTINGS_ROW_ID))
    op.execute(sa.text("DELETE FROM about_page_content WHERE id = :id").bindparams(id=ABOUT_ROW_ID))
