"""
Admin API endpoints.

Platform statistics and user administration. Deleting a user also ends
their sessions.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from careerhub.repositories import Stores
from careerhub.services import admin as admin_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


class PlatformStats(BaseModel):
    total_jobs: int
    active_jobs: int
    total_internships: int
    active_internships: int
    total_courses: int
    active_courses: int
    total_applications: int
    pending_applications: int
    approved_applications: int
    total_cv_showcase: int
    total_profiles: int
    visible_profiles: int
    total_community_benefits: int
    active_community_benefits: int
    total_users: int
    pending_access_requests: int


class AdminUser(BaseModel):
    id: int
    email: str
    name: str
    role: str
    created_at: Optional[str] = None
    last_login_at: Optional[str] = None


@router.get("/stats", response_model=PlatformStats)
def get_stats(
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return admin_service.get_stats(stores, identity)


@router.get("/users", response_model=list[AdminUser])
def list_users(
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return admin_service.list_users(stores, identity)


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    admin_service.delete_user(stores, user_id, identity)
    return {"message": "User deleted"}
