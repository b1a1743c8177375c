"""
Archive API endpoints (admin only).

Deleted jobs and internships wait here until an admin restores them as new
postings or deletes them permanently.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from careerhub.repositories import Stores
from careerhub.services import postings as posting_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


@router.get("/{kind}")
def list_archive(
    kind: str,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Removed postings, most recently removed first."""
    return posting_service.list_archive(stores, kind, identity)


@router.post("/{kind}/{archive_id}/restore")
def restore_posting(
    kind: str,
    archive_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    restored = posting_service.restore_posting(stores, kind, archive_id, identity)
    return {"message": "Posting restored", "restored_id": restored["id"], "posting": restored}


@router.delete("/{kind}/{archive_id}")
def purge_posting(
    kind: str,
    archive_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    posting_service.purge_posting(stores, kind, archive_id, identity)
    return {"message": "Removed posting permanently deleted"}
