from __future__ import annotations

from fastapi import APIRouter, Depends

from routes.auth import require_admin
from routes.utils import degraded, deleted
from schemas import FAQ, FAQCreate, FAQUpdate
from storage import Storage, get_storage
from utils.errors import DatabaseUnavailable

router = APIRouter(prefix="/api/faqs", tags=["Content"])


@router.get("", response_model=list[FAQ])
def list_faqs(storage: Storage = Depends(get_storage)):
    try:
        return storage.list_faqs()
    except DatabaseUnavailable:
        return degraded([], "FAQ list")


@router.get("/{faq_id}", response_model=FAQ)
def get_faq(faq_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_faq(faq_id)


@router.post("", response_model=FAQ, status_code=201, dependencies=[Depends(require_admin)])
def create_faq(payload: FAQCreate, storage: Storage = Depends(get_storage)):
    return storage.create_faq(payload)


@router.patch("/{faq_id}", response_model=FAQ, dependencies=[Depends(require_admin)])
def update_faq(faq_id: str, payload: FAQUpdate, storage: Storage = Depends(get_storage)):
    return storage.update_faq(faq_id, payload)


@router.delete("/{faq_id}", dependencies=[Depends(require_admin)])
def delete_faq(faq_id: str, storage: Storage = Depends(get_storage)):
    return deleted(storage.delete_faq(faq_id))
