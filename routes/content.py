from __future__ import annotations

from fastapi import APIRouter, Depends

from routes.auth import require_admin
from routes.utils import degraded
from schemas import AboutPageContent, AboutPageUpdate, Settings, SettingsUpdate
from storage import Storage, default_about, default_settings, get_storage
from utils.errors import DatabaseUnavailable

router = APIRouter(prefix="/api", tags=["Content"])


# -------------------------------------------------------------------------
# ⚙️ Site settings
# -------------------------------------------------------------------------
@router.get("/settings", response_model=Settings)
def get_settings(storage: Storage = Depends(get_storage)):
    try:
        return storage.get_settings()
    except DatabaseUnavailable:
        return degraded(default_settings(), "settings")


@router.post("/settings", response_model=Settings, dependencies=[Depends(require_admin)])
def save_settings(payload: SettingsUpdate, storage: Storage = Depends(get_storage)):
    """Full replace; fields left out or sent empty go back to their default."""
    return storage.update_settings(payload)


# -------------------------------------------------------------------------
# 🏢 About page
# -------------------------------------------------------------------------
@router.get("/about", response_model=AboutPageContent)
def get_about(storage: Storage = Depends(get_storage)):
    try:
        return storage.get_about()
    except DatabaseUnavailable:
        return degraded(default_about(), "about page")


@router.post("/about", response_model=AboutPageContent, dependencies=[Depends(require_admin)])
def save_about(payload: AboutPageUpdate, storage: Storage = Depends(get_storage)):
    return storage.update_about(payload)
