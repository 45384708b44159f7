# =============================================================================
# ⚙️ Alembic environment (Phoenix storefront)
# -----------------------------------------------------------------------------
# Used two ways:
#   - utils/schema_upgrade.run_migrations passes its open connection in
#     config.attributes["connection"] (app start, init_db.py)
#   - `alembic upgrade head` from the repository root builds its own engine
#     from DATABASE_URL / MYSQL_* in .env
# =============================================================================

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from config import DATABASE_URL
from database import Base

# models register their tables on Base.metadata
import models  # noqa: F401

# -------------------------------------------------------------------------
# 🔹 Alembic configuration
# -------------------------------------------------------------------------
config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", DATABASE_URL.replace("%", "%%"))

target_metadata = Base.metadata


# -------------------------------------------------------------------------
# 🔹 Offline mode (SQL script output)
# -------------------------------------------------------------------------
def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


# -------------------------------------------------------------------------
# 🔹 Online mode
# -------------------------------------------------------------------------
def _run_on(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=False,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_on(connection)
        return

    connectable = engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _run_on(connection)


# -------------------------------------------------------------------------
# 🔹 Entry point
# -------------------------------------------------------------------------
if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
