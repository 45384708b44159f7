"""Store created_at with microseconds on MySQL

Revision ID: 0003
Revises: 0002
Create Date: 2026-10-19 09:10:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql

revision: str = "0003"
down_revision: Union[str, Sequence[str], None] = "0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLES = ("categories", "faqs")


def _set_precision(fsp: int) -> None:
    # SQLite stores timestamps as text with microseconds already
    if op.get_bind().dialect.name != "mysql":
        return
    for table in TABLES:
        op.alter_column(
            table,
            "created_at",
            type_=mysql.DATETIME(fsp=fsp),
            existing_type=sa.DateTime(),
            existing_nullable=True,
        )
        print(f"✅ {table}.created_at -> DATETIME({fsp})")


# ─────────────────────────────────────────────
# ✅ UPGRADE
# ─────────────────────────────────────────────
def upgrade() -> None:
    _set_precision(6)


# ─────────────────────────────────────────────
# ⬅️ DOWNGRADE
# ─────────────────────────────────────────────
def downgrade() -> None:
    _set_precision(0)
