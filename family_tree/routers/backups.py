from fastapi import APIRouter, Depends

from family_tree.core.storage import get_store
from family_tree.schemas.family_members import BackupListResponse, BackupResponse
from family_tree.services.family_store import FamilyStore

router = APIRouter(prefix="/backups", tags=["backups"])


@router.get("", response_model=BackupListResponse)
def list_backups(store: FamilyStore = Depends(get_store)):
    # Names and sizes only; backups are restored by hand.
    return BackupListResponse(
        items=[
            BackupResponse(filename=item.filename, size=item.size, createdAt=item.created_at)
            for item in store.list_backups()
        ]
    )
