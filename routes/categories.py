from __future__ import annotations

from fastapi import APIRouter, Depends

from routes.auth import require_admin
from routes.utils import degraded, deleted
from schemas import Category, CategoryCreate, CategoryUpdate, CategoryWithSubcategories
from storage import Storage, get_storage
from utils.errors import DatabaseUnavailable

router = APIRouter(prefix="/api/categories", tags=["Catalog"])


@router.get("", response_model=list[CategoryWithSubcategories])
def list_categories(storage: Storage = Depends(get_storage)):
    try:
        return storage.list_categories_with_subcategories()
    except DatabaseUnavailable:
        return degraded([], "category list")


@router.get("/{category_id}", response_model=Category)
def get_category(category_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_category(category_id)


@router.post("", response_model=Category, status_code=201, dependencies=[Depends(require_admin)])
def create_category(payload: CategoryCreate, storage: Storage = Depends(get_storage)):
    return storage.create_category(payload)


@router.patch("/{category_id}", response_model=Category, dependencies=[Depends(require_admin)])
def update_category(category_id: str, payload: CategoryUpdate, storage: Storage = Depends(get_storage)):
    return storage.update_category(category_id, payload)


@router.delete("/{category_id}", dependencies=[Depends(require_admin)])
def delete_category(category_id: str, storage: Storage = Depends(get_storage)):
    """Also deletes its subcategories; plans keep existing with a null reference."""
    return deleted(storage.delete_category(category_id))
