from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from routes.auth import require_admin
from routes.utils import degraded, deleted
from schemas import Subcategory, SubcategoryCreate, SubcategoryUpdate
from storage import Storage, get_storage
from utils.errors import DatabaseUnavailable

router = APIRouter(prefix="/api/subcategories", tags=["Catalog"])


@router.get("", response_model=list[Subcategory])
def list_subcategories(
    category_id: Optional[str] = Query(default=None, alias="categoryId"),
    storage: Storage = Depends(get_storage),
):
    try:
        return storage.list_subcategories(category_id=category_id)
    except DatabaseUnavailable:
        return degraded([], "subcategory list")


@router.get("/{subcategory_id}", response_model=Subcategory)
def get_subcategory(subcategory_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_subcategory(subcategory_id)


@router.post("", response_model=Subcategory, status_code=201, dependencies=[Depends(require_admin)])
def create_subcategory(payload: SubcategoryCreate, storage: Storage = Depends(get_storage)):
    return storage.create_subcategory(payload)


@router.patch("/{subcategory_id}", response_model=Subcategory, dependencies=[Depends(require_admin)])
def update_subcategory(
    subcategory_id: str,
    payload: SubcategoryUpdate,
    storage: Storage = Depends(get_storage),
):
    return storage.update_subcategory(subcategory_id, payload)


@router.delete("/{subcategory_id}", dependencies=[Depends(require_admin)])
def delete_subcategory(subcategory_id: str, storage: Storage = Depends(get_storage)):
    return deleted(storage.delete_subcategory(subcategory_id))
