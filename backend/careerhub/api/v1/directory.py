"""
Professional Directory API endpoints.

Public browsing of visible profiles; signed-in residents publish and manage
their own.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict

from careerhub.repositories import Stores
from careerhub.services import directory as directory_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


# ============== Pydantic Schemas ==============


class ProfileFields(BaseModel):
    """Profile content; required fields are checked by the service."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    bio: Optional[str] = None
    skills: Union[str, list[str], None] = None
    industry: Optional[str] = None
    experience_level: Optional[str] = None
    contact: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    phone: Optional[str] = None
    how_can_you_support: Optional[str] = None
    is_visible: Optional[bool] = None


# ============== API Endpoints ==============


@router.get("")
def list_profiles(
    request: Request,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """List profiles, filtered by any field given as a query parameter (e.g. ?industry=Finance)."""
    return directory_service.list_profiles(stores, dict(request.query_params), identity)


@router.post("", status_code=201)
def create_profile(
    payload: ProfileFields,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return directory_service.create_profile(stores, payload.model_dump(exclude_none=True), identity)


@router.get("/{profile_id}")
def get_profile(
    profile_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return directory_service.get_profile(stores, profile_id, identity)


@router.patch("/{profile_id}")
def update_profile(
    profile_id: int,
    payload: ProfileFields,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return directory_service.update_profile(
        stores, profile_id, payload.model_dump(exclude_unset=True), identity
    )


@router.delete("/{profile_id}")
def delete_profile(
    profile_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    directory_service.delete_profile(stores, profile_id, identity)
    return {"message": "Profile deleted"}
