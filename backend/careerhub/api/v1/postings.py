"""
Postings API endpoints.

Submission, moderation and listing of jobs, internships and courses. The
posting kind is part of the path: /postings/{kind} with kind one of
"jobs", "internships", "courses".
"""

from typing import Any, Optional, Union

from fastapi import APIRouter, Body, Depends, Request
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from careerhub.core.errors import ValidationError
from careerhub.repositories import Stores
from careerhub.services import matching
from careerhub.services import postings as posting_service
from careerhub.services.auth import Identity
from careerhub.api.v1.auth import get_current_identity, get_stores

router = APIRouter()

Skills = Union[str, list[str], None]


# ============== Pydantic Schemas ==============


class JobPayload(BaseModel):
    """Job fields accepted on submit and edit (required fields are checked by the service)."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    skills: Skills = None
    industry: Optional[str] = None
    experience_level: Optional[str] = None
    job_type: Optional[str] = None
    location: Optional[str] = None
    salary_range: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    poster_email: Optional[str] = None
    poster_role: Optional[str] = None


class InternshipPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    requirements: Optional[str] = None
    skills: Skills = None
    department: Optional[str] = None
    duration: Optional[str] = None
    is_paid: Optional[bool] = None
    stipend: Optional[str] = None
    location: Optional[str] = None
    positions: Optional[int] = None
    poster_email: Optional[str] = None
    poster_role: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    start_date: Optional[str] = None
    application_deadline: Optional[str] = None


class CoursePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    instructor: Optional[str] = None
    duration: Optional[str] = None
    price: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    max_attendees: Optional[int] = None
    current_attendees: Optional[int] = None
    location: Optional[str] = None
    is_online: Optional[bool] = None
    registration_url: Optional[str] = None
    skills: Skills = None
    is_featured: Optional[bool] = None


PAYLOAD_SCHEMAS: dict[str, type[BaseModel]] = {
    "jobs": JobPayload,
    "internships": InternshipPayload,
    "courses": CoursePayload,
}


def parse_payload(kind: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Validate a raw body against the kind's schema, keeping only sent fields."""
    schema = PAYLOAD_SCHEMAS[posting_service.get_kind(kind).name]
    try:
        return schema.model_validate(payload).model_dump(exclude_unset=True)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ValidationError(problems)


# ============== API Endpoints ==============


@router.post("/{kind}", status_code=201)
def submit_posting(
    kind: str,
    payload: dict[str, Any] = Body(...),
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """
    Submit a posting for moderation.

    Anyone may submit; a logged-in caller is recorded as the poster. The
    posting stays hidden until an admin approves it.
    """
    return posting_service.submit_posting(stores, kind, parse_payload(kind, payload), identity)


@router.get("/{kind}")
def list_postings(
    kind: str,
    request: Request,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """
    List postings, filtered by any field given as a query parameter.

    Example: GET /postings/jobs?industry=Finance&job_type=Full-time
    """
    filters = dict(request.query_params)
    return posting_service.list_postings(stores, kind, filters, identity)


@router.get("/{kind}/pending")
def list_pending(
    kind: str,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """Moderation queue (admin only)."""
    return posting_service.list_pending(stores, kind, identity)


@router.get("/jobs/{job_id}/matching-cvs")
def matching_cvs(job_id: int, stores: Stores = Depends(get_stores)):
    """CVs whose profile fits the job."""
    return matching.match_cvs_for_job(stores, job_id)


@router.get("/{kind}/{posting_id}")
def get_posting(
    kind: str,
    posting_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return posting_service.get_posting(stores, kind, posting_id, identity)


@router.patch("/{kind}/{posting_id}")
def update_posting(
    kind: str,
    posting_id: int,
    payload: dict[str, Any] = Body(...),
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return posting_service.update_posting(
        stores, kind, posting_id, parse_payload(kind, payload), identity
    )


@router.post("/{kind}/{posting_id}/approve")
def approve_posting(
    kind: str,
    posting_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return posting_service.approve_posting(stores, kind, posting_id, identity)


@router.post("/{kind}/{posting_id}/reject")
def reject_posting(
    kind: str,
    posting_id: int,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    return posting_service.reject_posting(stores, kind, posting_id, identity)


@router.delete("/{kind}/{posting_id}")
def delete_posting(
    kind: str,
    posting_id: int,
    reason: Optional[str] = None,
    stores: Stores = Depends(get_stores),
    identity: Optional[Identity] = Depends(get_current_identity),
):
    """
    Delete a posting (admin or poster).

    Jobs and internships move to the archive; courses are deleted outright.
    """
    archived = posting_service.delete_posting(stores, kind, posting_id, identity, reason)
    if archived is None:
        return {"message": "Posting deleted", "archived": None}
    return {"message": "Posting moved to the archive", "archived": archived}
