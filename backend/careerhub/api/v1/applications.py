"""Applications API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from careerhub.repositories import Stores
from careerhub.services import applications as application_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()


# ============== Pydantic Schemas ==============


class ApplicationCreate(BaseModel):
    """Schema for applying to a job or an internship (exactly one id)."""

    applicant_name: str
    applicant_email: str
    applicant_phone: str
    cover_letter: Optional[str] = None
    cv_file_name: Optional[str] = None
    cv_storage_id: Optional[str] = None
    job_id: Optional[int] = None
    internship_id: Optional[int] = None


class ApplicationStatusUpdate(BaseModel):
    status: str
    notes: Optional[str] = None


# ============== API Endpoints ==============


@router.post("", status_code=201)
def submit_application(payload: ApplicationCreate, stores: Stores = Depends(get_stores)):
    return application_service.submit_application(stores, payload.model_dump())


@router.get("")
def list_applications(
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """All applications, most recent first (admin only)."""
    return application_service.list_applications(stores, identity)


@router.get("/by-email")
def list_applications_for_email(
    email: str,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return application_service.list_applications_for_email(stores, email, identity)


@router.patch("/{application_id}/status")
def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return application_service.update_application_status(
        stores, application_id, payload.status, payload.notes, identity
    )


@router.delete("/{application_id}")
def delete_application(
    application_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    application_service.delete_application(stores, application_id, identity)
    return {"message": "Application deleted"}
