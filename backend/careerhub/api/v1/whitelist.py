"""
Whitelist API endpoints.

Admin management of resident emails, plus the public check used by the
login page.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from careerhub.repositories import Stores
from careerhub.services import whitelist as whitelist_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


# ============== Pydantic Schemas ==============


class WhitelistCreate(BaseModel):
    email: str
    name: Optional[str] = None
    unit: Optional[str] = None
    phone: Optional[str] = None


class WhitelistUpdate(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None
    unit: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None


# ============== API Endpoints ==============


@router.get("/check")
def check_email(email: str, stores: Stores = Depends(get_stores)):
    """Public: is this email allowed to log in?"""
    return {"email": email.strip().lower(), "whitelisted": whitelist_service.is_whitelisted(stores, email)}


@router.get("")
def list_whitelist(
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return whitelist_service.list_whitelist(stores, identity)


@router.post("", status_code=201)
def add_to_whitelist(
    payload: WhitelistCreate,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return whitelist_service.add_to_whitelist(
        stores,
        payload.email,
        identity,
        name=payload.name,
        unit=payload.unit,
        phone=payload.phone,
    )


@router.patch("/{entry_id}")
def update_whitelist_entry(
    entry_id: int,
    payload: WhitelistUpdate,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return whitelist_service.update_whitelist_entry(
        stores, entry_id, payload.model_dump(exclude_unset=True), identity
    )


@router.delete("/{entry_id}")
def remove_from_whitelist(
    entry_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    whitelist_service.remove_from_whitelist(stores, entry_id, identity)
    return {"message": "Email removed from whitelist"}
