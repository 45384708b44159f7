from sqlalchemy import inspect, text
from sqlalchemy.dialects import mysql

from database import create_db_engine
from models import FAQ, Category
from utils.schema_upgrade import current_revision, revision_ids, run_migrations


def test_migrations_are_idempotent():
    engine = create_db_engine("sqlite://")

    first = run_migrations(engine)
    second = run_migrations(engine)

    assert first == ["0001", "0002", "0003"]
    assert first == revision_ids()
    assert second == []
    assert current_revision(engine) == "0003"
    engine.dispose()


def test_required_tables_exist():
    engine = create_db_engine("sqlite://")
    run_migrations(engine)

    tables = set(inspect(engine).get_table_names())
    required = {
        "categories",
        "subcategories",
        "plans",
        "faqs",
        "settings",
        "admin_users",
        "team_members",
        "about_page_content",
        "alembic_version",
    }
    assert not required - tables, f"missing tables: {required - tables}"
    engine.dispose()


def test_singleton_rows_are_seeded_once():
    engine = create_db_engine("sqlite://")
    run_migrations(engine)
    run_migrations(engine)

    with engine.connect() as conn:
        assert conn.execute(text("SELECT COUNT(*) FROM settings")).scalar() == 1
        assert conn.execute(text("SELECT COUNT(*) FROM about_page_content")).scalar() == 1
        assert conn.execute(text("SELECT stat1_value FROM settings WHERE id = 1")).scalar() == "99.9%"
    engine.dispose()


def test_missing_columns_are_added_to_legacy_tables():
    engine = create_db_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE team_members (id VARCHAR(36) PRIMARY KEY, name VARCHAR(255), role VARCHAR(255))"))
        conn.execute(text("INSERT INTO team_members (id, name, role) VALUES ('t1', 'Ava', 'Founder')"))

    run_migrations(engine)

    columns = {c["name"] for c in inspect(engine).get_columns("team_members")}
    assert {"description", "image_url", "sort_order"} <= columns
    with engine.connect() as conn:
        assert conn.execute(text("SELECT sort_order FROM team_members WHERE id = 't1'")).scalar() == 0
    engine.dispose()


def test_database_created_by_the_first_deployment_is_adopted():
    engine = create_db_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE categories (id VARCHAR(36) PRIMARY KEY, name VARCHAR(255), slug VARCHAR(255))"))
        conn.execute(text("INSERT INTO categories (id, name, slug) VALUES ('c1', 'VPS', 'vps')"))

    assert current_revision(engine) is None
    assert run_migrations(engine) == revision_ids()

    with engine.connect() as conn:
        assert conn.execute(text("SELECT slug FROM categories")).scalars().all() == ["vps"]
        assert conn.execute(text("SELECT COUNT(*) FROM settings")).scalar() == 1
    assert "created_at" in {c["name"] for c in inspect(engine).get_columns("categories")}
    engine.dispose()


def test_creation_times_keep_microseconds_on_mysql():
    for model in (Category, FAQ):
        column_type = model.__table__.c.created_at.type
        assert column_type.compile(dialect=mysql.dialect()) == "DATETIME(6)"
