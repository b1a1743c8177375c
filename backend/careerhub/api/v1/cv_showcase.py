"""
CV Showcase API endpoints.

The residents' professional directory: public reads, owner-or-admin edits,
file attachment and job matching.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict

from careerhub.repositories import Stores
from careerhub.services import cv_showcase as cv_service
from careerhub.services import matching
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


# ============== Pydantic Schemas ==============


class CvCreate(BaseModel):
    """Schema for a new CV."""

    model_config = ConfigDict(extra="forbid")

    name: str
    email: str
    title: str
    section: str
    phone: Optional[str] = None
    bio: Optional[str] = None
    skills: Union[str, list[str], None] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    years_of_experience: Optional[str] = None
    linkedin_url: Optional[str] = None


class CvUpdate(BaseModel):
    """Schema for a partial CV edit (only sent fields change)."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    email: Optional[str] = None
    title: Optional[str] = None
    section: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    skills: Union[str, list[str], None] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    years_of_experience: Optional[str] = None
    linkedin_url: Optional[str] = None


class CvFileAttach(BaseModel):
    """Reference to a file already uploaded to the blob store."""

    storage_id: str
    file_name: str
    content_hash: str  # sha256 hex of the file content
    size: int


# ============== API Endpoints ==============


@router.get("/sections")
def list_sections():
    return cv_service.list_sections()


@router.get("")
def list_cvs(request: Request, stores: Stores = Depends(get_stores)):
    """List CVs, filtered by any field given as a query parameter (e.g. ?section=Finance)."""
    return cv_service.list_cvs(stores, dict(request.query_params))


@router.post("", status_code=201)
def create_cv(payload: CvCreate, stores: Stores = Depends(get_stores)):
    return cv_service.create_cv(stores, payload.model_dump(exclude_none=True))


@router.get("/{cv_id}")
def get_cv(cv_id: int, stores: Stores = Depends(get_stores)):
    return cv_service.get_cv(stores, cv_id)


@router.patch("/{cv_id}")
def update_cv(
    cv_id: int,
    payload: CvUpdate,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return cv_service.update_cv(stores, cv_id, payload.model_dump(exclude_unset=True), identity)


@router.delete("/{cv_id}")
def delete_cv(
    cv_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    cv_service.delete_cv(stores, cv_id, identity)
    return {"message": "CV deleted"}


@router.post("/{cv_id}/file")
def attach_cv_file(
    cv_id: int,
    payload: CvFileAttach,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """
    Attach an uploaded file to a CV.

    The content hash must not already belong to another CV and the file must
    be within the size limit.
    """
    return cv_service.attach_cv_file(
        stores,
        cv_id,
        storage_id=payload.storage_id,
        file_name=payload.file_name,
        content_hash=payload.content_hash,
        size=payload.size,
        identity=identity,
    )


@router.get("/{cv_id}/matching-jobs")
def matching_jobs(cv_id: int, stores: Stores = Depends(get_stores)):
    """Visible jobs ranked by keyword affinity with the CV (score 0-100)."""
    return matching.match_jobs_for_cv(stores, cv_id)
