from __future__ import annotations

import init_db
from seeds.catalog_seed import CATEGORIES, FAQS, PLANS, SUBCATEGORIES, seed_catalog
from storage import Storage


def test_seed_inserts_the_sample_catalog(storage):
    added = seed_catalog(storage)

    assert added == {
        "categories": len(CATEGORIES),
        "subcategories": len(SUBCATEGORIES),
        "plans": len(PLANS),
        "faqs": len(FAQS),
    }
    vps = next(c for c in storage.list_categories_with_subcategories() if c.slug == "vps")
    assert [s.slug for s in vps.subcategories] == ["linux", "windows"]

    plan = storage.list_plans()[0]
    assert plan.category_id == vps.id
    assert plan.subcategory_id == vps.subcategories[0].id
    assert plan.features[0] == "2 vCPU Cores"


def test_seed_is_idempotent(storage):
    seed_catalog(storage)
    counts = (
        len(storage.list_categories()),
        len(storage.list_subcategories()),
        len(storage.list_plans()),
        len(storage.list_faqs()),
    )

    again = seed_catalog(storage)

    assert again == {"categories": 0, "subcategories": 0, "plans": 0, "faqs": 0}
    assert counts == (
        len(storage.list_categories()),
        len(storage.list_subcategories()),
        len(storage.list_plans()),
        len(storage.list_faqs()),
    )


def test_seed_keeps_rows_edited_by_an_admin(storage):
    seed_catalog(storage)
    vps = next(c for c in storage.list_categories() if c.slug == "vps")
    storage.delete_category(vps.id)

    again = seed_catalog(storage)

    assert again["categories"] == 1
    assert again["faqs"] == 0
    assert len([c for c in storage.list_categories() if c.slug == "vps"]) == 1


def test_init_db_migrates_and_seeds(tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'phoenix.db'}"

    assert init_db.main(["--database-url", url, "--seed"]) == 0
    assert init_db.main(["--database-url", url, "--seed"]) == 0

    out = capsys.readouterr().out
    assert "Schema at revision 0003" in out
    assert "Database ready" in out

    store = Storage.from_url(url)
    try:
        assert sorted(c.slug for c in store.list_categories()) == ["dedicated", "vps"]
        assert len(store.list_faqs()) == len(FAQS)
        assert store.verify_admin("admin", "admin123")
    finally:
        store.dispose()


def test_init_db_without_seed_leaves_catalog_empty(tmp_path):
    url = f"sqlite:///{tmp_path / 'phoenix.db'}"

    assert init_db.main(["--database-url", url]) == 0

    store = Storage.from_url(url)
    try:
        assert store.list_categories() == []
        assert store.get_settings().stat1_value == "99.9%"
    finally:
        store.dispose()


def test_init_db_reports_unreachable_database(tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'missing' / 'phoenix.db'}"

    assert init_db.main(["--database-url", url]) == 1
    assert "Database not reachable" in capsys.readouterr().err
