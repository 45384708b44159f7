from __future__ import annotations

import logging

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

import config
from database import create_db_engine
from models import AdminUser
from schemas import (
    CategoryCreate,
    CategoryUpdate,
    FAQUpdate,
    PlanCreate,
    PlanUpdate,
    SettingsUpdate,
    SubcategoryCreate,
    TeamMemberCreate,
)
from storage import Storage
from utils.defaults import SETTINGS_DEFAULTS
from utils.errors import DuplicateKey, DuplicateUsername, NotFound, ValidationError
from utils.passwords import legacy_hash


def _catalog(storage):
    category = storage.create_category(CategoryCreate(name="VPS Hosting", slug="vps"))
    sub = storage.create_subcategory(
        SubcategoryCreate(name="Linux VPS", slug="linux", categoryId=category.id, order=1)
    )
    return category, sub


def _plan(storage, category, sub, **overrides):
    data = {
        "name": "Starter VPS",
        "description": "Perfect for small projects",
        "priceUsd": "9.99",
        "priceInr": "849",
        "period": "month",
        "features": ["2 vCPU Cores", "4 GB RAM"],
        "popular": True,
        "categoryId": category.id,
        "subcategoryId": sub.id,
    }
    data.update(overrides)
    return storage.create_plan(PlanCreate(**data))


# -------------------------------------------------------------------------
# 🗂️ Catalog
# -------------------------------------------------------------------------
def test_created_category_appears_in_list(storage):
    created = storage.create_category(CategoryCreate(name="Game Servers", slug="game-servers"))

    listed = storage.list_categories()
    assert [(c.id, c.name, c.slug) for c in listed] == [(created.id, "Game Servers", "game-servers")]
    assert storage.get_category(created.id).id == created.id


def test_plan_features_round_trip_in_order(storage):
    category, sub = _catalog(storage)
    features = ["DDoS Protection", "2 vCPU Cores", "4 GB RAM", "Ünïcode ✓"]

    plan = _plan(storage, category, sub, features=features)

    assert storage.get_plan(plan.id).features == features


def test_partial_plan_update_only_changes_sent_fields(storage):
    category, sub = _catalog(storage)
    plan = _plan(storage, category, sub)

    updated = storage.update_plan(plan.id, PlanUpdate(priceUsd="12.49"))

    assert updated.price_usd == "12.49"
    assert updated.model_dump(exclude={"price_usd"}) == plan.model_dump(exclude={"price_usd"})


def test_delete_category_removes_subcategories_and_nulls_plan_refs(storage):
    category, sub = _catalog(storage)
    plan = _plan(storage, category, sub)

    assert storage.delete_category(category.id) is True

    assert storage.list_subcategories(category_id=category.id) == []
    with pytest.raises(NotFound):
        storage.get_subcategory(sub.id)
    survivor = storage.get_plan(plan.id)
    assert survivor.category_id is None
    assert survivor.subcategory_id is None
    assert storage.delete_category(category.id) is False


def test_delete_subcategory_nulls_plan_reference(storage):
    category, sub = _catalog(storage)
    plan = _plan(storage, category, sub)

    assert storage.delete_subcategory(sub.id) is True

    survivor = storage.get_plan(plan.id)
    assert survivor.subcategory_id is None
    assert survivor.category_id == category.id


def test_plan_requires_existing_references(storage):
    category, sub = _catalog(storage)

    with pytest.raises(ValidationError):
        _plan(storage, category, sub, subcategoryId="missing-sub")
    assert storage.list_plans() == []


def test_duplicate_slug_is_rejected(storage):
    storage.create_category(CategoryCreate(name="VPS", slug="vps"))
    other = storage.create_category(CategoryCreate(name="Dedicated", slug="dedicated"))

    with pytest.raises(DuplicateKey):
        storage.create_category(CategoryCreate(name="VPS again", slug="vps"))
    with pytest.raises(DuplicateKey):
        storage.update_category(other.id, CategoryUpdate(slug="vps"))


def test_lists_are_ordered_by_sort_order(storage):
    category, _ = _catalog(storage)
    storage.create_subcategory(SubcategoryCreate(name="Windows VPS", slug="windows", categoryId=category.id, order=0))
    storage.create_team_member(TeamMemberCreate(name="B", role="Support", order=2))
    storage.create_team_member(TeamMemberCreate(name="A", role="Founder", order=1))

    assert [s.slug for s in storage.list_subcategories()] == ["windows", "linux"]
    assert [m.name for m in storage.list_team_members()] == ["A", "B"]


def test_category_listing_embeds_subcategories(storage):
    category, sub = _catalog(storage)
    storage.create_category(CategoryCreate(name="Dedicated", slug="dedicated"))

    listing = {c.slug: c for c in storage.list_categories_with_subcategories()}

    assert [s.id for s in listing["vps"].subcategories] == [sub.id]
    assert listing["dedicated"].subcategories == []


def test_unknown_ids_raise_not_found(storage):
    with pytest.raises(NotFound):
        storage.get_plan("missing")
    with pytest.raises(NotFound):
        storage.update_faq("missing", FAQUpdate(answer="a"))
    assert storage.delete_faq("missing") is False


# -------------------------------------------------------------------------
# ⚙️ Singletons
# -------------------------------------------------------------------------
def test_settings_are_fully_populated_on_a_fresh_store(storage):
    settings = storage.get_settings()

    assert settings.model_dump() == SETTINGS_DEFAULTS
    assert settings.stat1_value == "99.9%"


def test_settings_update_is_a_full_replace(storage):
    storage.update_settings(SettingsUpdate(currency="inr", heroTitleLine1="Custom"))
    storage.update_settings(SettingsUpdate(heroTitleLine2="Second", stat1Value=""))

    settings = storage.get_settings()
    assert settings.hero_title_line2 == "Second"
    assert settings.hero_title_line1 == SETTINGS_DEFAULTS["hero_title_line1"]
    assert settings.currency == "usd"
    assert settings.stat1_value == "99.9%"


# -------------------------------------------------------------------------
# 👤 Admin users
# -------------------------------------------------------------------------
def test_verify_admin(storage):
    storage.create_admin_user("ops", "s3cr3t")

    assert storage.verify_admin("ops", "s3cr3t") is True
    assert storage.verify_admin("ops", "wrong") is False
    assert storage.verify_admin("ghost", "s3cr3t") is False


def test_bootstrap_admin_is_created_once(storage):
    assert storage.verify_admin("admin", "admin123")
    storage.initialize()

    assert [u.username for u in storage.list_admin_users()] == ["admin"]


def test_unknown_username_still_spends_a_hash_check(storage, monkeypatch):
    storage.initialize()
    calls = []
    monkeypatch.setattr("storage.dummy_verify", lambda: calls.append("dummy"))

    assert storage.authenticate_admin("ghost", "s3cr3t") is None
    assert calls == ["dummy"]

    assert storage.authenticate_admin("admin", "wrong") is None
    assert calls == ["dummy"]


def test_bootstrap_admin_gets_a_generated_password(monkeypatch, caplog):
    monkeypatch.setattr(config, "DEFAULT_ADMIN_PASSWORD", "")
    store = Storage(create_db_engine("sqlite://"))

    with caplog.at_level(logging.WARNING, logger="storage"):
        store.initialize()

    record = next(r for r in caplog.records if "generated password" in r.getMessage())
    username, password = record.args
    assert username == "admin"
    assert password != "admin123"
    assert len(password) >= 16
    assert store.verify_admin("admin", password)
    assert not store.verify_admin("admin", "admin123")
    store.dispose()


def test_admin_user_management(storage):
    user = storage.create_admin_user("  ops  ", "s3cr3t")
    assert user.username == "ops"

    with pytest.raises(DuplicateUsername):
        storage.create_admin_user("ops", "other")
    with pytest.raises(ValidationError):
        storage.create_admin_user("", "pw")

    storage.update_admin_password(user.id, "n3w")
    assert storage.verify_admin("ops", "n3w")
    assert not storage.verify_admin("ops", "s3cr3t")

    assert storage.delete_admin_user(user.id) is True
    assert not storage.verify_admin("ops", "n3w")
    with pytest.raises(NotFound):
        storage.update_admin_password(user.id, "again")


def test_legacy_hash_is_upgraded_on_login(storage):
    storage.initialize()
    with Session(storage.engine) as session:
        session.add(AdminUser(id="legacy-1", username="old", password_hash=legacy_hash("hunter2")))
        session.commit()

    assert storage.authenticate_admin("old", "hunter2") is not None

    with Session(storage.engine) as session:
        stored = session.scalar(select(AdminUser.password_hash).where(AdminUser.username == "old"))
    assert stored.startswith("$scrypt$")
    assert storage.verify_admin("old", "hunter2")
