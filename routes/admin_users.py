from __future__ import annotations

from fastapi import APIRouter, Depends

from routes.auth import require_admin
from routes.utils import degraded, deleted
from schemas import AdminPasswordUpdate, AdminUser, AdminUserCreate
from storage import Storage, get_storage
from utils.errors import DatabaseUnavailable

router = APIRouter(prefix="/api/admin/users", tags=["Admin Users"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[AdminUser])
def list_admin_users(storage: Storage = Depends(get_storage)):
    try:
        return storage.list_admin_users()
    except DatabaseUnavailable:
        return degraded([], "admin user list")


@router.post("", response_model=AdminUser, status_code=201)
def create_admin_user(payload: AdminUserCreate, storage: Storage = Depends(get_storage)):
    return storage.create_admin_user(payload.username, payload.password)


@router.patch("/{user_id}", response_model=AdminUser)
def change_password(user_id: str, payload: AdminPasswordUpdate, storage: Storage = Depends(get_storage)):
    return storage.update_admin_password(user_id, payload.password)


@router.delete("/{user_id}")
def delete_admin_user(user_id: str, storage: Storage = Depends(get_storage)):
    return deleted(storage.delete_admin_user(user_id))
