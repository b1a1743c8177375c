"""Access request API endpoints."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from careerhub.repositories import Stores
from careerhub.services import access_requests as request_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


class AccessRequestCreate(BaseModel):
    full_name: str
    email: str
    unit_number: str
    mobile: Optional[str] = None


class AccessRequestStatus(BaseModel):
    status: Literal["pending", "approved", "rejected"]


@router.post("", status_code=201)
def create_access_request(payload: AccessRequestCreate, stores: Stores = Depends(get_stores)):
    """Public: ask to be added to the resident whitelist."""
    return request_service.create_access_request(
        stores,
        full_name=payload.full_name,
        email=payload.email,
        unit_number=payload.unit_number,
        mobile=payload.mobile,
    )


@router.get("")
def list_access_requests(
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return request_service.list_access_requests(stores, identity)


@router.patch("/{request_id}/status")
def update_access_request_status(
    request_id: int,
    payload: AccessRequestStatus,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return request_service.update_access_request_status(stores, request_id, payload.status, identity)


@router.delete("/{request_id}")
def delete_access_request(
    request_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    request_service.delete_access_request(stores, request_id, identity)
    return {"message": "Access request deleted"}
