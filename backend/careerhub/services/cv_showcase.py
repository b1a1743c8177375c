"""
CV Showcase Service - the residents' professional directory.

CVs are public to read. Only the owner (same email) or an admin may edit or
delete one. An attached file is referenced by its blob-store id; its content
hash is bound to exactly one CV so the same document cannot be published
twice under different profiles.
"""

from __future__ import annotations

from typing import Any, Optional

from careerhub.core.config import settings
from careerhub.core.errors import Forbidden, NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.auth import Identity, normalize_email, require_identity
from careerhub.services.postings import join_skills
from careerhub.utils.timestamps import now_iso

logger = get_logger("cv_showcase")

PROFESSIONAL_SECTIONS: tuple[str, ...] = (
    "Technology/IT",
    "Marketing",
    "Finance",
    "HR",
    "Sales",
    "Procurement",
    "Engineering",
    "Real Estate",
    "Healthcare",
    "Education",
    "Legal",
    "Operations",
    "Consulting",
    "Architecture",
    "Media & Design",
)
OTHER_SECTION = "Other"

_SECTION_LOOKUP = {section.lower(): section for section in PROFESSIONAL_SECTIONS}

CV_FIELDS: tuple[str, ...] = (
    "name", "email", "phone", "title", "section", "bio", "skills",
    "experience", "education", "years_of_experience", "linkedin_url",
)
# Written only by attach_cv_file
FILE_FIELDS: tuple[str, ...] = ("cv_file_name", "cv_storage_id", "cv_file_hash")
REQUIRED_CV_FIELDS: tuple[str, ...] = ("name", "email", "title", "section")
FILTERABLE_CV_FIELDS = frozenset(CV_FIELDS + FILE_FIELDS) | {"id"}

FILE_NONE = "none"
FILE_ATTACHED = "attached"
FILE_MISSING = "missing"


def list_sections() -> list[str]:
    return [*PROFESSIONAL_SECTIONS, OTHER_SECTION]


def canonical_section(section: str) -> str:
    """
    Canonicalise a catalogue section; any other text is a free-text "Other".
    """
    text = (section or "").strip()
    return _SECTION_LOOKUP.get(text.lower(), text)


def section_group(section: Optional[str]) -> str:
    canonical = canonical_section(section or "")
    return canonical if canonical in PROFESSIONAL_SECTIONS else OTHER_SECTION


def file_status(cv: Record) -> str:
    """
    Report whether a CV's file reference is usable.

    A file name recorded without a storage reference means the upload never
    completed (or the reference was lost) and is reported as missing.
    """
    if cv.get("cv_storage_id"):
        return FILE_ATTACHED
    if cv.get("cv_file_name"):
        return FILE_MISSING
    return FILE_NONE


def present_cv(cv: Record) -> Record:
    return {**cv, "section_group": section_group(cv.get("section")), "file_status": file_status(cv)}


def can_edit_cv(identity: Optional[Identity], cv: Record) -> bool:
    if identity is None:
        return False
    return identity.is_admin or normalize_email(cv.get("email") or "") == identity.email


def _clean(fields: dict[str, Any]) -> Record:
    if set(fields) & set(FILE_FIELDS):
        raise ValidationError("CV files can only be set by attaching an uploaded file")
    unknown = set(fields) - set(CV_FIELDS) - {"id", "created_at", "updated_at"}
    if unknown:
        raise ValidationError(f"Unknown CV fields: {', '.join(sorted(unknown))}")

    cleaned = {name: value for name, value in fields.items() if name in CV_FIELDS}
    if "email" in cleaned:
        cleaned["email"] = normalize_email(cleaned["email"])
    if "section" in cleaned:
        cleaned["section"] = canonical_section(cleaned["section"])
    if "skills" in cleaned:
        cleaned["skills"] = join_skills(cleaned["skills"])
    return cleaned


def _require_fields(record: Record) -> None:
    missing = [
        name for name in REQUIRED_CV_FIELDS
        if record.get(name) is None or not str(record.get(name)).strip()
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _load_cv(stores: Stores, cv_id: Any) -> Record:
    cv = stores.cvs.get(cv_id)
    if cv is None:
        raise NotFound("CV not found")
    return cv


def _load_editable(stores: Stores, cv_id: Any, identity: Optional[Identity]) -> tuple[Record, Identity]:
    identity = require_identity(identity)
    cv = _load_cv(stores, cv_id)
    if not can_edit_cv(identity, cv):
        logger.warning(f"{identity.email} tried to modify CV {cv_id} owned by {cv.get('email')}")
        raise Forbidden("You can only modify your own CV")
    return cv, identity


# ============== CRUD ==============


def create_cv(stores: Stores, fields: dict[str, Any]) -> Record:
    content = {name: value for name, value in _clean(fields).items() if value is not None}
    _require_fields(content)

    now = now_iso()
    cv = stores.cvs.insert({
        **{name: None for name in CV_FIELDS + FILE_FIELDS},
        **content,
        "created_at": now,
        "updated_at": now,
    })
    logger.info(f"CV {cv['id']} created for {cv['email']}")
    return present_cv(cv)


def update_cv(stores: Stores, cv_id: Any, fields: dict[str, Any], identity: Optional[Identity]) -> Record:
    cv, identity = _load_editable(stores, cv_id, identity)

    changes = _clean(fields)
    _require_fields({**cv, **changes})

    updated = stores.cvs.patch(cv["id"], {**changes, "updated_at": now_iso()})
    logger.info(f"CV {cv['id']} updated by {identity.email}")
    return present_cv(updated)


def delete_cv(stores: Stores, cv_id: Any, identity: Optional[Identity]) -> None:
    """Delete a CV together with its file-hash bindings."""
    cv, identity = _load_editable(stores, cv_id, identity)

    with stores.atomic():
        for binding in stores.cv_file_hashes.query({"cv_id": cv["id"]}):
            stores.cv_file_hashes.delete(binding["id"])
        stores.cvs.delete(cv["id"])

    logger.info(f"CV {cv['id']} deleted by {identity.email}")


def get_cv(stores: Stores, cv_id: Any) -> Record:
    return present_cv(_load_cv(stores, cv_id))


def list_cvs(stores: Stores, filters: Optional[dict[str, Any]] = None) -> list[Record]:
    """
    List CVs by equality filters over known fields; empty values are ignored.

    Filtering by section "Other" returns every CV outside the catalogue.
    """
    parsed: Record = {}
    wants_other = False
    for name, value in (filters or {}).items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        if name not in FILTERABLE_CV_FIELDS:
            raise ValidationError(f"Cannot filter CVs by '{name}'")
        if name == "section":
            value = canonical_section(value)
            if value == OTHER_SECTION:
                wants_other = True
                continue
        if name == "email":
            value = normalize_email(value)
        if name == "id":
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise ValidationError("Field 'id' must be an integer")
        parsed[name] = value

    cvs = stores.cvs.query(parsed)
    if wants_other:
        cvs = [cv for cv in cvs if section_group(cv.get("section")) == OTHER_SECTION]
    return [present_cv(cv) for cv in cvs]


# ============== Files ==============


def attach_cv_file(
    stores: Stores,
    cv_id: Any,
    storage_id: str,
    file_name: str,
    content_hash: str,
    size: int,
    identity: Optional[Identity],
) -> Record:
    """
    Record an uploaded file on a CV.

    Args:
        stores: Record stores
        cv_id: CV receiving the file
        storage_id: Blob-store reference returned by the upload
        file_name: Original file name
        content_hash: sha256 hex digest of the file content
        size: File size in bytes
        identity: Caller (owner or admin)

    Returns:
        The updated CV

    Raises:
        ValidationError: If the file is too large, or the same content or
            storage reference is already attached to another CV
    """
    cv, identity = _load_editable(stores, cv_id, identity)

    if size > settings.MAX_CV_FILE_BYTES:
        limit_mb = settings.MAX_CV_FILE_BYTES // (1024 * 1024)
        raise ValidationError(f"CV file exceeds the {limit_mb} MB limit")
    if not storage_id or not file_name:
        raise ValidationError("storage_id and file_name are required")

    digest = (content_hash or "").strip().lower()
    if not digest:
        raise ValidationError("content_hash is required")

    bound = stores.cv_file_hashes.first({"content_hash": digest})
    if bound is not None and int(bound["cv_id"]) != int(cv["id"]):
        logger.warning(f"Duplicate CV file for CV {cv['id']}: already attached to CV {bound['cv_id']}")
        raise ValidationError("This CV file has already been uploaded for another profile")
    holders = stores.cvs.query({"cv_storage_id": storage_id})
    if any(int(holder["id"]) != int(cv["id"]) for holder in holders):
        raise ValidationError("This CV file has already been uploaded for another profile")

    with stores.atomic():
        for binding in stores.cv_file_hashes.query({"cv_id": cv["id"]}):
            if binding["content_hash"] != digest:
                stores.cv_file_hashes.delete(binding["id"])
        if bound is None:
            stores.cv_file_hashes.insert({
                "content_hash": digest,
                "cv_id": cv["id"],
                "created_at": now_iso(),
            })
        updated = stores.cvs.patch(cv["id"], {
            "cv_file_name": file_name,
            "cv_storage_id": storage_id,
            "cv_file_hash": digest,
            "updated_at": now_iso(),
        })

    logger.info(f"File {file_name} attached to CV {cv['id']}")
    return present_cv(updated)
