from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from routes.auth import require_admin
from routes.utils import degraded, deleted
from schemas import Plan, PlanCreate, PlanUpdate
from storage import Storage, get_storage
from utils.errors import DatabaseUnavailable

router = APIRouter(prefix="/api/plans", tags=["Catalog"])


@router.get("", response_model=list[Plan])
def list_plans(
    subcategory_id: Optional[str] = Query(default=None, alias="subcategoryId"),
    storage: Storage = Depends(get_storage),
):
    try:
        return storage.list_plans(subcategory_id=subcategory_id)
    except DatabaseUnavailable:
        return degraded([], "plan list")


@router.get("/{plan_id}", response_model=Plan)
def get_plan(plan_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_plan(plan_id)


@router.post("", response_model=Plan, status_code=201, dependencies=[Depends(require_admin)])
def create_plan(payload: PlanCreate, storage: Storage = Depends(get_storage)):
    return storage.create_plan(payload)


@router.patch("/{plan_id}", response_model=Plan, dependencies=[Depends(require_admin)])
def update_plan(plan_id: str, payload: PlanUpdate, storage: Storage = Depends(get_storage)):
    return storage.update_plan(plan_id, payload)


@router.delete("/{plan_id}", dependencies=[Depends(require_admin)])
def delete_plan(plan_id: str, storage: Storage = Depends(get_storage)):
    return deleted(storage.delete_plan(plan_id))
