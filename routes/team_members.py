from __future__ import annotations

from fastapi import APIRouter, Depends

from routes.auth import require_admin
from routes.utils import degraded, deleted
from schemas import TeamMember, TeamMemberCreate, TeamMemberUpdate
from storage import Storage, get_storage
from utils.errors import DatabaseUnavailable

router = APIRouter(prefix="/api/team-members", tags=["Content"])


@router.get("", response_model=list[TeamMember])
def list_team_members(storage: Storage = Depends(get_storage)):
    try:
        return storage.list_team_members()
    except DatabaseUnavailable:
        return degraded([], "team member list")


@router.get("/{member_id}", response_model=TeamMember)
def get_team_member(member_id: str, storage: Storage = Depends(get_storage)):
    return storage.get_team_member(member_id)


@router.post("", response_model=TeamMember, status_code=201, dependencies=[Depends(require_admin)])
def create_team_member(payload: TeamMemberCreate, storage: Storage = Depends(get_storage)):
    return storage.create_team_member(payload)


@router.patch("/{member_id}", response_model=TeamMember, dependencies=[Depends(require_admin)])
def update_team_member(member_id: str, payload: TeamMemberUpdate, storage: Storage = Depends(get_storage)):
    return storage.update_team_member(member_id, payload)


@router.delete("/{member_id}", dependencies=[Depends(require_admin)])
def delete_team_member(member_id: str, storage: Storage = Depends(get_storage)):
    return deleted(storage.delete_team_member(member_id))
