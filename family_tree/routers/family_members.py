from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from family_tree.core.storage import get_store
from family_tree.schemas.family_members import (
    BulkUpdateResponse,
    FamilyMemberCreate,
    FamilyMemberDeleteResponse,
    FamilyMemberMutationResponse,
    FamilyMemberUpdate,
)
from family_tree.services.family_store import (
    FamilyStore,
    find_member_index,
    loads_strict,
    next_member_id,
    search_members,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/family-members", tags=["family-members"])


def _load_or_500(store: FamilyStore, detail: str) -> list[dict]:
    try:
        return store.load_members()
    except Exception as exc:
        logger.exception("Reading %s failed", store.store_path)
        raise HTTPException(status_code=500, detail=detail) from exc


@router.get("")
def list_family_members(store: FamilyStore = Depends(get_store)):
    return _load_or_500(store, "Failed to read family data")


@router.get("/search/{query}")
def search_family_members(query: str, store: FamilyStore = Depends(get_store)):
    if len(query) < 2:
        raise HTTPException(status_code=400, detail="Search query must be at least 2 characters")
    members = _load_or_500(store, "Failed to search family members")
    return search_members(members, query)


@router.post("/bulk-update", response_model=BulkUpdateResponse)
async def bulk_update_family(request: Request, store: FamilyStore = Depends(get_store)):
    """
    Replace the whole member list.

    The payload is written verbatim; nothing beyond `members` being present is checked.
    The current store is copied into a timestamped backup before it is overwritten.
    """
    try:
        payload = loads_strict(await request.body())
        members = payload["members"]
        result = await run_in_threadpool(store.bulk_replace, members)
    except Exception as exc:
        logger.exception("Bulk update of %s failed", store.store_path)
        raise HTTPException(status_code=500, detail="Failed to bulk update family data") from exc

    logger.info("Bulk update wrote %d members, backup %s", result.count, result.backup_name)
    return BulkUpdateResponse(
        message=f"Updated {result.count} family members",
        backupPath=result.backup_name,
    )


@router.post("", response_model=FamilyMemberMutationResponse, status_code=201)
def create_family_member(payload: FamilyMemberCreate, store: FamilyStore = Depends(get_store)):
    members = _load_or_500(store, "Failed to add family member")
    member = {**payload.model_dump(exclude_unset=True), "id": next_member_id(members)}
    members.append(member)
    try:
        store.write_members(members)
    except Exception as exc:
        logger.exception("Adding member %s failed", member["id"])
        raise HTTPException(status_code=500, detail="Failed to add family member") from exc

    return FamilyMemberMutationResponse(member=member)


@router.get("/{member_id:int}")
def get_family_member(member_id: int, store: FamilyStore = Depends(get_store)):
    members = _load_or_500(store, "Failed to read family data")
    index = find_member_index(members, member_id)
    if index is None:
        raise HTTPException(status_code=404, detail="Family member not found")
    return members[index]


@router.put("/{member_id:int}", response_model=FamilyMemberMutationResponse)
def update_family_member(
    member_id: int,
    payload: FamilyMemberUpdate,
    store: FamilyStore = Depends(get_store),
):
    members = _load_or_500(store, "Failed to update family member")
    index = find_member_index(members, member_id)
    if index is None:
        raise HTTPException(status_code=404, detail="Family member not found")

    # The path id wins over whatever id the body carries.
    members[index] = {**payload.model_dump(exclude_unset=True), "id": member_id}
    try:
        store.write_members(members)
    except Exception as exc:
        logger.exception("Updating member %s failed", member_id)
        raise HTTPException(status_code=500, detail="Failed to update family member") from exc

    return FamilyMemberMutationResponse(member=members[index])


@router.delete("/{member_id:int}", response_model=FamilyMemberDeleteResponse)
def delete_family_member(member_id: int, store: FamilyStore = Depends(get_store)):
    members = _load_or_500(store, "Failed to delete family member")
    index = find_member_index(members, member_id)
    if index is None:
        raise HTTPException(status_code=404, detail="Family member not found")

    deleted = members.pop(index)
    try:
        store.write_members(members)
    except Exception as exc:
        logger.exception("Deleting member %s failed", member_id)
        raise HTTPException(status_code=500, detail="Failed to delete family member") from exc

    return FamilyMemberDeleteResponse(deletedMember=deleted)
