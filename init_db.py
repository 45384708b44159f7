# =============================================================================
# 🧩 init_db.py
# -----------------------------------------------------------------------------
# Prepares the database for the storefront API:
#   - runs the schema upgrade (tables, missing columns, singleton rows)
#   - creates the default admin if there is no admin yet
#   - optional (--seed): inserts the sample catalog
#
#   python init_db.py [--database-url URL] [--seed]
# =============================================================================

from __future__ import annotations

import argparse
import sys

import config
from storage import Storage
from utils.errors import DatabaseUnavailable
from utils.schema_upgrade import current_revision


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Initialise the storefront database.")
    parser.add_argument("--database-url", default=config.DATABASE_URL, help="SQLAlchemy URL (default: from .env)")
    parser.add_argument("--seed", action="store_true", help="insert the sample catalog")
    args = parser.parse_args(argv)

    storage = Storage.from_url(args.database_url)
    try:
        print("🛠️ Running schema upgrade ...")
        storage.initialize()
        print(f"✅ Schema at revision {current_revision(storage.engine)}")

        if args.seed:
            from seeds.catalog_seed import seed_catalog

            print("📦 Seeding sample catalog ...")
            for kind, count in seed_catalog(storage).items():
                print(f"  ➕ {count} {kind}")
    except DatabaseUnavailable as exc:
        print(f"❌ Database not reachable: {exc}", file=sys.stderr)
        return 1
    finally:
        storage.dispose()

    print("🎉 Database ready.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
