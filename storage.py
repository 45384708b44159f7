# =============================================================================
# 🗄️ storage.py
# -----------------------------------------------------------------------------
# Storage access layer: the only module that talks to the database.
#
#   Storage(engine)   owns the connection pool and the session factory
#   initialize()      runs the schema upgrade once per instance (lazy, locked)
#   <entity> CRUD     returns pydantic entities from schemas.py, never rows
#
# Database errors are translated into utils.errors:
#   connection / pool failures -> DatabaseUnavailable
#   unique-constraint failures -> DuplicateKey
# =============================================================================

from __future__ import annotations

import logging
import secrets
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fastapi import Request
from sqlalchemy import delete, func, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.orm import Session

import config
import schemas
from database import create_db_engine, create_session_factory
from models import (
    ABOUT_ROW_ID,
    FAQ,
    SETTINGS_ROW_ID,
    AboutPageContent,
    AdminUser,
    Category,
    Plan,
    SiteSettings,
    Subcategory,
    TeamMember,
)
from utils.defaults import ABOUT_DEFAULTS, CURRENCIES, SETTINGS_DEFAULTS, fill_defaults
from utils.errors import (
    DatabaseUnavailable,
    DuplicateKey,
    DuplicateUsername,
    NotFound,
    StorageError,
    ValidationError,
)
from utils.passwords import dummy_verify, hash_password, verify_and_update
from utils.schema_upgrade import run_migrations

logger = logging.getLogger(__name__)

UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError, DisconnectionError)


def _new_id() -> str:
    return str(uuid.uuid4())


# -------------------------------------------------------------------------
# 🔁 Row -> entity mapping
# -------------------------------------------------------------------------
def _category(row: Category) -> schemas.Category:
    return schemas.Category(id=row.id, name=row.name, slug=row.slug)


def _subcategory(row: Subcategory) -> schemas.Subcategory:
    return schemas.Subcategory(
        id=row.id,
        name=row.name,
        slug=row.slug,
        category_id=row.category_id,
        sort_order=row.sort_order or 0,
    )


def _plan(row: Plan) -> schemas.Plan:
    return schemas.Plan(
        id=row.id,
        name=row.name,
        description=row.description or "",
        price_usd=row.price_usd or "",
        price_inr=row.price_inr or "",
        period=row.period or "month",
        features=row.get_features(),
        popular=bool(row.popular),
        category_id=row.category_id,
        subcategory_id=row.subcategory_id,
        sort_order=row.sort_order or 0,
    )


def _faq(row: FAQ) -> schemas.FAQ:
    return schemas.FAQ(id=row.id, question=row.question, answer=row.answer)


def _team_member(row: TeamMember) -> schemas.TeamMember:
    return schemas.TeamMember(
        id=row.id,
        name=row.name,
        role=row.role,
        description=row.description or "",
        image_url=row.image_url or "",
        sort_order=row.sort_order or 0,
    )


def _admin_user(row: AdminUser) -> schemas.AdminUser:
    return schemas.AdminUser(id=row.id, username=row.username)


def _settings_from(values: dict[str, Any]) -> schemas.Settings:
    filled = fill_defaults(values, SETTINGS_DEFAULTS)
    if filled["currency"] not in CURRENCIES:
        filled["currency"] = SETTINGS_DEFAULTS["currency"]
    return schemas.Settings(**filled)


def default_settings() -> schemas.Settings:
    return _settings_from({})


def default_about() -> schemas.AboutPageContent:
    return schemas.AboutPageContent(**ABOUT_DEFAULTS)


class Storage:
    """
    Typed CRUD over the storefront schema.

    One instance per process: built in the application lifespan, disposed on
    shutdown. Every public method opens and closes its own session.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        self._initialized = False
        self._init_lock = threading.Lock()

    @classmethod
    def from_url(cls, url: str | None = None) -> "Storage":
        return cls(create_db_engine(url))

    # ---------------------------------------------------------------------
    # 🔧 Lifecycle
    # ---------------------------------------------------------------------
    def initialize(self) -> None:
        """Upgrades the schema and creates the bootstrap admin, once."""
        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return
            try:
                run_migrations(self.engine)
                self._ensure_bootstrap_admin()
            except UNAVAILABLE_ERRORS as exc:
                logger.warning("Schema initialisation failed, database unreachable: %s", exc)
                raise DatabaseUnavailable("Database unavailable") from exc
            self._initialized = True
            logger.info("Storage initialised (%s)", self.engine.url.get_backend_name())

    def dispose(self) -> None:
        self.engine.dispose()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except UNAVAILABLE_ERRORS:
            return False

    def _ensure_bootstrap_admin(self) -> None:
        username = config.DEFAULT_ADMIN_USERNAME
        password = config.DEFAULT_ADMIN_PASSWORD
        if not username:
            return
        generated = not password
        if generated:
            password = secrets.token_urlsafe(12)
        with self._session_factory() as session:
            if session.scalar(select(func.count()).select_from(AdminUser)):
                return
            session.add(AdminUser(id=_new_id(), username=username, password_hash=hash_password(password)))
            session.commit()
        if generated:
            logger.warning("Created default admin user '%s' with generated password %s; change it", username, password)
        else:
            logger.warning("Created default admin user '%s'; change its password", username)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        self.initialize()
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.info("Write rejected by a unique constraint: %s", exc.orig)
            raise DuplicateKey("Duplicate value for a unique field") from exc
        except UNAVAILABLE_ERRORS as exc:
            session.rollback()
            logger.warning("Database unavailable: %s", exc)
            raise DatabaseUnavailable("Database unavailable") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ---------------------------------------------------------------------
    # 🧰 Helpers
    # ---------------------------------------------------------------------
    @staticmethod
    def _get_row(session: Session, model: type, entity_id: Any, label: str):
        row = session.get(model, entity_id)
        if row is None:
            raise NotFound(label, entity_id)
        return row

    @staticmethod
    def _ensure_unique_slug(session: Session, model: type, slug: str, exclude_id: str | None = None) -> None:
        query = select(model.id).where(model.slug == slug)
        if exclude_id is not None:
            query = query.where(model.id != exclude_id)
        if session.scalar(query) is not None:
            raise DuplicateKey(f"Slug '{slug}' already exists")

    @staticmethod
    def _require_category(session: Session, category_id: str) -> None:
        if session.get(Category, category_id) is None:
            raise ValidationError(f"Unknown category '{category_id}'")

    @staticmethod
    def _require_subcategory(session: Session, subcategory_id: str) -> None:
        if session.get(Subcategory, subcategory_id) is None:
            raise ValidationError(f"Unknown subcategory '{subcategory_id}'")

    @staticmethod
    def _delete_row(session: Session, model: type, entity_id: Any) -> bool:
        result = session.execute(delete(model).where(model.id == entity_id))
        return result.rowcount > 0

    # ---------------------------------------------------------------------
    # 🗂️ Categories
    # ---------------------------------------------------------------------
    def list_categories(self) -> list[schemas.Category]:
        with self._session() as session:
            rows = session.scalars(select(Category).order_by(Category.created_at, Category.id)).all()
            return [_category(r) for r in rows]

    def list_categories_with_subcategories(self) -> list[schemas.CategoryWithSubcategories]:
        """Categories with their subcategories embedded, as the storefront menu needs them."""
        with self._session() as session:
            categories = session.scalars(select(Category).order_by(Category.created_at, Category.id)).all()
            subcategories = session.scalars(
                select(Subcategory).order_by(Subcategory.sort_order, Subcategory.id)
            ).all()

        grouped: dict[str, list[schemas.Subcategory]] = {}
        for sub in subcategories:
            grouped.setdefault(sub.category_id, []).append(_subcategory(sub))

        return [
            schemas.CategoryWithSubcategories(
                id=c.id, name=c.name, slug=c.slug, subcategories=grouped.get(c.id, [])
            )
            for c in categories
        ]

    def get_category(self, category_id: str) -> schemas.Category:
        with self._session() as session:
            return _category(self._get_row(session, Category, category_id, "Category"))

    def create_category(self, data: schemas.CategoryCreate) -> schemas.Category:
        with self._session() as session:
            self._ensure_unique_slug(session, Category, data.slug)
            row = Category(id=_new_id(), name=data.name, slug=data.slug)
            session.add(row)
            session.flush()
            created = _category(row)
        logger.info("Created category %s (%s)", created.id, created.slug)
        return created

    def update_category(self, category_id: str, data: schemas.CategoryUpdate) -> schemas.Category:
        changes = data.changes()
        with self._session() as session:
            row = self._get_row(session, Category, category_id, "Category")
            if "slug" in changes:
                self._ensure_unique_slug(session, Category, changes["slug"], exclude_id=category_id)
            for field, value in changes.items():
                setattr(row, field, value)
            session.flush()
            updated = _category(row)
        logger.info("Updated category %s: %s", category_id, sorted(changes))
        return updated

    def delete_category(self, category_id: str) -> bool:
        """
        Deletes the category and its subcategories. Plans pointing at either
        keep existing with the reference nulled.
        """
        with self._session() as session:
            if session.get(Category, category_id) is None:
                return False
            sub_ids = list(
                session.scalars(select(Subcategory.id).where(Subcategory.category_id == category_id))
            )
            session.execute(
                update(Plan).where(Plan.category_id == category_id).values(category_id=None)
            )
            if sub_ids:
                session.execute(
                    update(Plan).where(Plan.subcategory_id.in_(sub_ids)).values(subcategory_id=None)
                )
                session.execute(delete(Subcategory).where(Subcategory.category_id == category_id))
            removed = self._delete_row(session, Category, category_id)
        logger.info("Deleted category %s (%d subcategories)", category_id, len(sub_ids))
        return removed

    # ---------------------------------------------------------------------
    # 🗂️ Subcategories
    # ---------------------------------------------------------------------
    def list_subcategories(self, category_id: str | None = None) -> list[schemas.Subcategory]:
        query = select(Subcategory).order_by(Subcategory.sort_order, Subcategory.id)
        if category_id is not None:
            query = query.where(Subcategory.category_id == category_id)
        with self._session() as session:
            return [_subcategory(r) for r in session.scalars(query).all()]

    def get_subcategory(self, subcategory_id: str) -> schemas.Subcategory:
        with self._session() as session:
            return _subcategory(self._get_row(session, Subcategory, subcategory_id, "Subcategory"))

    def create_subcategory(self, data: schemas.SubcategoryCreate) -> schemas.Subcategory:
        with self._session() as session:
            self._require_category(session, data.category_id)
            self._ensure_unique_slug(session, Subcategory, data.slug)
            row = Subcategory(
                id=_new_id(),
                name=data.name,
                slug=data.slug,
                category_id=data.category_id,
                sort_order=data.sort_order,
            )
            session.add(row)
            session.flush()
            created = _subcategory(row)
        logger.info("Created subcategory %s (%s)", created.id, created.slug)
        return created

    def update_subcategory(self, subcategory_id: str, data: schemas.SubcategoryUpdate) -> schemas.Subcategory:
        changes = data.changes()
        with self._session() as session:
            row = self._get_row(session, Subcategory, subcategory_id, "Subcategory")
            if "category_id" in changes:
                self._require_category(session, changes["category_id"])
            if "slug" in changes:
                self._ensure_unique_slug(session, Subcategory, changes["slug"], exclude_id=subcategory_id)
            for field, value in changes.items():
                setattr(row, field, value)
            session.flush()
            updated = _subcategory(row)
        logger.info("Updated subcategory %s: %s", subcategory_id, sorted(changes))
        return updated

    def delete_subcategory(self, subcategory_id: str) -> bool:
        with self._session() as session:
            session.execute(
                update(Plan).where(Plan.subcategory_id == subcategory_id).values(subcategory_id=None)
            )
            removed = self._delete_row(session, Subcategory, subcategory_id)
        if removed:
            logger.info("Deleted subcategory %s", subcategory_id)
        return removed

    # ---------------------------------------------------------------------
    # 📦 Plans
    # ---------------------------------------------------------------------
    def list_plans(self, subcategory_id: str | None = None) -> list[schemas.Plan]:
        query = select(Plan).order_by(Plan.sort_order, Plan.id)
        if subcategory_id is not None:
            query = query.where(Plan.subcategory_id == subcategory_id)
        with self._session() as session:
            return [_plan(r) for r in session.scalars(query).all()]

    def get_plan(self, plan_id: str) -> schemas.Plan:
        with self._session() as session:
            return _plan(self._get_row(session, Plan, plan_id, "Plan"))

    def create_plan(self, data: schemas.PlanCreate) -> schemas.Plan:
        with self._session() as session:
            self._require_category(session, data.category_id)
            self._require_subcategory(session, data.subcategory_id)
            row = Plan(
                id=_new_id(),
                name=data.name,
                description=data.description,
                price_usd=data.price_usd,
                price_inr=data.price_inr,
                period=data.period,
                popular=data.popular,
                category_id=data.category_id,
                subcategory_id=data.subcategory_id,
                sort_order=data.sort_order,
            )
            row.set_features(data.features)
            session.add(row)
            session.flush()
            created = _plan(row)
        logger.info("Created plan %s (%s)", created.id, created.name)
        return created

    def update_plan(self, plan_id: str, data: schemas.PlanUpdate) -> schemas.Plan:
        """Partial update: only the fields present in ``data`` change."""
        changes = data.changes()
        with self._session() as session:
            row = self._get_row(session, Plan, plan_id, "Plan")
            if changes.get("category_id") is not None:
                self._require_category(session, changes["category_id"])
            if changes.get("subcategory_id") is not None:
                self._require_subcategory(session, changes["subcategory_id"])
            for field, value in changes.items():
                if field == "features":
                    row.set_features(value)
                else:
                    setattr(row, field, value)
            session.flush()
            updated = _plan(row)
        logger.info("Updated plan %s: %s", plan_id, sorted(changes))
        return updated

    def delete_plan(self, plan_id: str) -> bool:
        with self._session() as session:
            removed = self._delete_row(session, Plan, plan_id)
        if removed:
            logger.info("Deleted plan %s", plan_id)
        return removed

    # ---------------------------------------------------------------------
    # ❓ FAQs
    # ---------------------------------------------------------------------
    def list_faqs(self) -> list[schemas.FAQ]:
        with self._session() as session:
            rows = session.scalars(select(FAQ).order_by(FAQ.created_at, FAQ.id)).all()
            return [_faq(r) for r in rows]

    def get_faq(self, faq_id: str) -> schemas.FAQ:
        with self._session() as session:
            return _faq(self._get_row(session, FAQ, faq_id, "FAQ"))

    def create_faq(self, data: schemas.FAQCreate) -> schemas.FAQ:
        with self._session() as session:
            row = FAQ(id=_new_id(), question=data.question, answer=data.answer)
            session.add(row)
            session.flush()
            created = _faq(row)
        logger.info("Created FAQ %s", created.id)
        return created

    def update_faq(self, faq_id: str, data: schemas.FAQUpdate) -> schemas.FAQ:
        changes = data.changes()
        with self._session() as session:
            row = self._get_row(session, FAQ, faq_id, "FAQ")
            for field, value in changes.items():
                setattr(row, field, value)
            session.flush()
            return _faq(row)

    def delete_faq(self, faq_id: str) -> bool:
        with self._session() as session:
            return self._delete_row(session, FAQ, faq_id)

    # ---------------------------------------------------------------------
    # 👥 Team members
    # ---------------------------------------------------------------------
    def list_team_members(self) -> list[schemas.TeamMember]:
        with self._session() as session:
            rows = session.scalars(select(TeamMember).order_by(TeamMember.sort_order, TeamMember.id)).all()
            return [_team_member(r) for r in rows]

    def get_team_member(self, member_id: str) -> schemas.TeamMember:
        with self._session() as session:
            return _team_member(self._get_row(session, TeamMember, member_id, "Team member"))

    def create_team_member(self, data: schemas.TeamMemberCreate) -> schemas.TeamMember:
        with self._session() as session:
            row = TeamMember(
                id=_new_id(),
                name=data.name,
                role=data.role,
                description=data.description,
                image_url=data.image_url,
                sort_order=data.sort_order,
            )
            session.add(row)
            session.flush()
            created = _team_member(row)
        logger.info("Created team member %s (%s)", created.id, created.name)
        return created

    def update_team_member(self, member_id: str, data: schemas.TeamMemberUpdate) -> schemas.TeamMember:
        changes = data.changes()
        with self._session() as session:
            row = self._get_row(session, TeamMember, member_id, "Team member")
            for field, value in changes.items():
                setattr(row, field, value)
            session.flush()
            return _team_member(row)

    def delete_team_member(self, member_id: str) -> bool:
        with self._session() as session:
            return self._delete_row(session, TeamMember, member_id)

    # ---------------------------------------------------------------------
    # ⚙️ Singletons
    # ---------------------------------------------------------------------
    def get_settings(self) -> schemas.Settings:
        with self._session() as session:
            row = session.get(SiteSettings, SETTINGS_ROW_ID)
            values = {key: getattr(row, key) for key in SETTINGS_DEFAULTS} if row else {}
        return _settings_from(values)

    def update_settings(self, data: schemas.SettingsUpdate) -> schemas.Settings:
        """Replaces every field; omitted or empty fields are reset to their default."""
        settings = _settings_from(data.model_dump())
        values = settings.model_dump()
        with self._session() as session:
            row = session.get(SiteSettings, SETTINGS_ROW_ID)
            if row is None:
                row = SiteSettings(id=SETTINGS_ROW_ID)
                session.add(row)
            for key, value in values.items():
                setattr(row, key, value)
        logger.info("Site settings updated")
        return settings

    def get_about(self) -> schemas.AboutPageContent:
        with self._session() as session:
            row = session.get(AboutPageContent, ABOUT_ROW_ID)
            values = {key: getattr(row, key) for key in ABOUT_DEFAULTS} if row else {}
        return schemas.AboutPageContent(**fill_defaults(values, ABOUT_DEFAULTS))

    def update_about(self, data: schemas.AboutPageUpdate) -> schemas.AboutPageContent:
        values = fill_defaults(data.model_dump(), ABOUT_DEFAULTS)
        with self._session() as session:
            row = session.get(AboutPageContent, ABOUT_ROW_ID)
            if row is None:
                row = AboutPageContent(id=ABOUT_ROW_ID)
                session.add(row)
            for key, value in values.items():
                setattr(row, key, value)
        logger.info("About page content updated")
        return schemas.AboutPageContent(**values)

    # ---------------------------------------------------------------------
    # 👤 Admin users
    # ---------------------------------------------------------------------
    def list_admin_users(self) -> list[schemas.AdminUser]:
        with self._session() as session:
            rows = session.scalars(select(AdminUser).order_by(AdminUser.username)).all()
            return [_admin_user(r) for r in rows]

    def get_admin_user(self, user_id: str) -> schemas.AdminUser:
        with self._session() as session:
            return _admin_user(self._get_row(session, AdminUser, user_id, "User"))

    def create_admin_user(self, username: str, password: str) -> schemas.AdminUser:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password required")
        with self._session() as session:
            if session.scalar(select(AdminUser.id).where(AdminUser.username == username)) is not None:
                raise DuplicateUsername(username)
            row = AdminUser(id=_new_id(), username=username, password_hash=hash_password(password))
            session.add(row)
            session.flush()
            created = _admin_user(row)
        logger.info("Created admin user '%s'", username)
        return created

    def update_admin_password(self, user_id: str, password: str) -> schemas.AdminUser:
        if not password:
            raise ValidationError("Password required")
        with self._session() as session:
            row = self._get_row(session, AdminUser, user_id, "User")
            row.password_hash = hash_password(password)
            updated = _admin_user(row)
        logger.info("Password changed for admin user '%s'", updated.username)
        return updated

    def delete_admin_user(self, user_id: str) -> bool:
        with self._session() as session:
            removed = self._delete_row(session, AdminUser, user_id)
        if removed:
            logger.info("Deleted admin user %s", user_id)
        return removed

    def authenticate_admin(self, username: str, password: str) -> Optional[schemas.AdminUser]:
        """
        Returns the admin on a correct password, else None. Legacy fixed-salt
        hashes and outdated parameters are rehashed on success. Unknown
        usernames cost the same hashing time as a wrong password.
        DatabaseUnavailable propagates so callers can tell "wrong" from "down".
        """
        if not username or not password:
            return None
        with self._session() as session:
            row = session.scalar(select(AdminUser).where(AdminUser.username == username))
            if row is None:
                dummy_verify()
                return None
            ok, new_hash = verify_and_update(password, row.password_hash)
            if not ok:
                return None
            if new_hash:
                row.password_hash = new_hash
                logger.info("Upgraded password hash for admin user '%s'", username)
            return _admin_user(row)

    def verify_admin(self, username: str, password: str) -> bool:
        """True iff the credentials match; any failure counts as a mismatch."""
        try:
            return self.authenticate_admin(username, password) is not None
        except StorageError as exc:
            logger.warning("Credential check failed for '%s': %s", username, exc)
            return False


# -------------------------------------------------------------------------
# 🔌 FastAPI dependency
# -------------------------------------------------------------------------
def get_storage(request: Request) -> Storage:
    """The process-wide Storage built in the application lifespan."""
    return request.app.state.storage
