"""Applications to jobs and internships."""

from __future__ import annotations

from typing import Any, Optional

from careerhub.core.errors import Forbidden, NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.auth import Identity, normalize_email, require_admin, require_identity
from careerhub.services.postings import is_visible
from careerhub.utils.timestamps import now_iso

logger = get_logger("applications")

APPLICATION_FIELDS = (
    "applicant_name", "applicant_email", "applicant_phone", "cover_letter",
    "cv_file_name", "cv_storage_id", "job_id", "internship_id",
)
REQUIRED_APPLICATION_FIELDS = ("applicant_name", "applicant_email", "applicant_phone")


def _target(stores: Stores, fields: dict[str, Any]) -> tuple[str, int]:
    job_id = fields.get("job_id")
    internship_id = fields.get("internship_id")
    if (job_id is None) == (internship_id is None):
        raise ValidationError("An application targets exactly one of job_id or internship_id")

    kind, target_id, store = (
        ("job", job_id, stores.jobs) if job_id is not None else ("internship", internship_id, stores.internships)
    )
    posting = store.get(target_id)
    if posting is None or not is_visible(posting):
        raise NotFound(f"{kind.capitalize()} not found")
    return f"{kind}_id", posting["id"]


def submit_application(stores: Stores, fields: dict[str, Any]) -> Record:
    """
    Apply to a job or an internship.

    Raises:
        ValidationError: If both or neither target ids are given, or an
            applicant field is missing
        NotFound: If the target posting does not exist or is not open
    """
    content = {name: fields.get(name) for name in APPLICATION_FIELDS}
    missing = [
        name for name in REQUIRED_APPLICATION_FIELDS
        if content.get(name) is None or not str(content[name]).strip()
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    target_field, target_id = _target(stores, content)
    content["job_id"] = None
    content["internship_id"] = None
    content[target_field] = target_id
    content["applicant_email"] = normalize_email(content["applicant_email"])

    now = now_iso()
    application = stores.applications.insert({
        **content,
        "status": "pending",
        "notes": None,
        "created_at": now,
        "updated_at": now,
    })
    logger.info(f"Application {application['id']} received for {target_field}={target_id}")
    return application


def _load(stores: Stores, application_id: Any) -> Record:
    application = stores.applications.get(application_id)
    if application is None:
        raise NotFound("Application not found")
    return application


def update_application_status(
    stores: Stores,
    application_id: Any,
    status: str,
    notes: Optional[str],
    identity: Optional[Identity],
) -> Record:
    require_admin(identity)
    application = _load(stores, application_id)
    if not status or not status.strip():
        raise ValidationError("status is required")

    changes: Record = {"status": status.strip(), "updated_at": now_iso()}
    if notes is not None:
        changes["notes"] = notes
    updated = stores.applications.patch(application["id"], changes)
    logger.info(f"Application {application['id']} marked {updated['status']}")
    return updated


def list_applications(stores: Stores, identity: Optional[Identity]) -> list[Record]:
    """All applications, most recent first."""
    require_admin(identity)
    return list(reversed(stores.applications.collect()))


def list_applications_for_email(stores: Stores, email: str, identity: Optional[Identity]) -> list[Record]:
    identity = require_identity(identity)
    normalized = normalize_email(email)
    if not identity.is_admin and normalized != identity.email:
        raise Forbidden("You can only view your own applications")
    return list(reversed(stores.applications.query({"applicant_email": normalized})))


def delete_application(stores: Stores, application_id: Any, identity: Optional[Identity]) -> None:
    require_admin(identity)
    application = _load(stores, application_id)
    stores.applications.delete(application["id"])
    logger.info(f"Application {application['id']} deleted")
