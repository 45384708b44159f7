"""
utils/schema_upgrade.py
────────────────────────────────────────────
Idempotent schema upgrades, run once per Storage at startup
(or lazily on the first request of a cold process).

  - sync_columns: adds model columns missing from live tables (every run)
  - Alembic revisions in migrations/versions: applied once, tracked in
    alembic_version
────────────────────────────────────────────
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import Column, Text, inspect, insert, select, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError

from database import Base
from models import ABOUT_ROW_ID, SETTINGS_ROW_ID, AboutPageContent, SiteSettings
from utils.defaults import ABOUT_DEFAULTS, SETTINGS_DEFAULTS

logger = logging.getLogger(__name__)

LOCK_NAME = "phoenix_schema_upgrade"
LOCK_TIMEOUT_SECONDS = 30

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


# -------------------------------------------------------------------------
# 🔹 Steps
# -------------------------------------------------------------------------
def create_tables(conn: Connection) -> None:
    Base.metadata.create_all(bind=conn, checkfirst=True)


def seed_singletons(conn: Connection) -> None:
    """Inserts the settings and about rows with their default copy."""
    for model, row_id, defaults in (
        (SiteSettings, SETTINGS_ROW_ID, SETTINGS_DEFAULTS),
        (AboutPageContent, ABOUT_ROW_ID, ABOUT_DEFAULTS),
    ):
        exists = conn.execute(select(model.id).where(model.id == row_id)).first()
        if exists is None:
            conn.execute(insert(model.__table__).values(id=row_id, **defaults))
            logger.info("Seeded singleton row %s.id=%s", model.__tablename__, row_id)


def _default_clause(column: Column) -> str:
    # MySQL rejects literal defaults on TEXT columns
    if isinstance(column.type, Text):
        return ""
    default = column.default.arg if column.default is not None else None
    if isinstance(default, bool):
        return f" DEFAULT {int(default)}"
    if isinstance(default, int):
        return f" DEFAULT {default}"
    if isinstance(default, str):
        escaped = default.replace("'", "''")
        return f" DEFAULT '{escaped}'"
    return ""


def sync_columns(conn: Connection) -> None:
    """
    Adds every model column the live table is missing.

    Columns are added as nullable; the storage layer fills nulls on read.
    "Duplicate column" errors from a concurrent upgrade are ignored.
    """
    insp = inspect(conn)
    existing_tables = set(insp.get_table_names())
    preparer = conn.dialect.identifier_preparer

    for table in Base.metadata.sorted_tables:
        if table.name not in existing_tables:
            continue
        live = {c["name"] for c in insp.get_columns(table.name)}
        for column in table.columns:
            if column.name in live:
                continue
            ddl = (
                f"ALTER TABLE {preparer.format_table(table)} "
                f"ADD COLUMN {preparer.format_column(column)} "
                f"{column.type.compile(dialect=conn.dialect)}"
                f"{_default_clause(column)}"
            )
            try:
                conn.execute(text(ddl))
                logger.info("Added column %s.%s", table.name, column.name)
            except DBAPIError as exc:
                if "duplicate column" not in str(exc.orig).lower():
                    raise
                logger.debug("Column %s.%s already exists", table.name, column.name)



# -------------------------------------------------------------------------
# 🔒 Runner
# -------------------------------------------------------------------------
@contextmanager
def _server_lock(conn: Connection) -> Iterator[None]:
    """Named MySQL lock so that two instances starting together do not race."""
    if conn.dialect.name != "mysql":
        yield
        return
    acquired = conn.execute(
        text("SELECT GET_LOCK(:name, :timeout)"),
        {"name": LOCK_NAME, "timeout": LOCK_TIMEOUT_SECONDS},
    ).scalar()
    if acquired != 1:
        raise RuntimeError(f"Could not acquire schema lock '{LOCK_NAME}'")
    try:
        yield
    finally:
        conn.execute(text("SELECT RELEASE_LOCK(:name)"), {"name": LOCK_NAME})


def alembic_config(connection: Optional[Connection] = None) -> Config:
    """Alembic config pointing at migrations/, optionally bound to ``connection``."""
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg


def revision_ids() -> list[str]:
    """Every revision, oldest first."""
    script = ScriptDirectory.from_config(alembic_config())
    return [rev.revision for rev in reversed(list(script.walk_revisions()))]


def current_revision(engine: Engine) -> Optional[str]:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def run_migrations(engine: Engine) -> list[str]:
    """
    Brings the schema up to date. Idempotent.

    Returns the revisions applied by this call, oldest first.
    """
    with engine.begin() as conn:
        with _server_lock(conn):
            sync_columns(conn)
            before = MigrationContext.configure(conn).get_current_revision()
            command.upgrade(alembic_config(conn), "head")

    ordered = revision_ids()
    applied = ordered[ordered.index(before) + 1:] if before else ordered
    if applied:
        logger.info("Schema upgraded: %s", ", ".join(applied))
    return applied
