from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

import config
from schemas import AdminUser, LoginRequest
from storage import Storage, get_storage
from utils.errors import NotFound

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin Session"])

SESSION_USER_ID = "admin_user_id"
SESSION_USERNAME = "admin_username"


# -------------------------------------------------------------------------
# 🔐 Dependency for mutating endpoints
# -------------------------------------------------------------------------
def require_admin(request: Request, storage: Storage = Depends(get_storage)) -> Optional[AdminUser]:
    """Returns the logged-in admin; 401 if there is none or it was deleted."""
    if not config.ADMIN_AUTH_REQUIRED:
        return None

    user_id = request.session.get(SESSION_USER_ID)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    try:
        return storage.get_admin_user(user_id)
    except NotFound:
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")


# -------------------------------------------------------------------------
# 🔑 Login / Logout
# -------------------------------------------------------------------------
@router.post("/login")
def login(payload: LoginRequest, request: Request, storage: Storage = Depends(get_storage)):
    username = payload.username.strip()
    user = storage.authenticate_admin(username, payload.password)
    if user is None:
        logger.info("Failed admin login for '%s'", username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    request.session.clear()
    request.session[SESSION_USER_ID] = user.id
    request.session[SESSION_USERNAME] = user.username
    logger.info("Admin '%s' logged in", user.username)
    return {"success": True, "username": user.username}


@router.post("/logout")
def logout(request: Request):
    username = request.session.get(SESSION_USERNAME)
    request.session.clear()
    if username:
        logger.info("Admin '%s' logged out", username)
    return {"success": True}


@router.get("/session")
def session_state(request: Request):
    username = request.session.get(SESSION_USERNAME)
    return {"authenticated": bool(request.session.get(SESSION_USER_ID)), "username": username}
