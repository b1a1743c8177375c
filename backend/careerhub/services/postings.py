"""
Posting Lifecycle Manager.

Jobs, internships and courses move through the same moderation states:

    submit -> pending -> approve -> approved
                      -> reject  -> rejected (kept for audit)
    approved --delete--> archive row (jobs, internships) or gone (courses)
    archive --restore--> new posting, status "active"
    archive --purge----> gone

Only approved and active postings are visible to ordinary callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from careerhub.core.errors import Forbidden, NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, RecordStore, Stores
from careerhub.services.auth import Identity, normalize_email, require_admin, require_identity
from careerhub.utils.timestamps import now_iso

logger = get_logger("moderation")

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
STATUS_ACTIVE = "active"

LIFECYCLE_FIELDS = ("status", "is_active", "is_approved", "posted_by")
TIMESTAMP_FIELDS = ("created_at", "updated_at")
DEFAULT_REMOVAL_REASON = "Deleted by user"


@dataclass(frozen=True)
class PostingKind:
    """Static description of one posting collection."""

    name: str
    label: str
    store: str
    archive: Optional[str]
    content_fields: tuple[str, ...]
    required_fields: tuple[str, ...]
    boolean_fields: frozenset[str] = frozenset()
    integer_fields: frozenset[str] = frozenset()
    defaults: dict[str, Any] = field(default_factory=dict)
    newest_first: bool = False

    @property
    def filterable_fields(self) -> frozenset[str]:
        return frozenset(("id",) + self.content_fields + LIFECYCLE_FIELDS + TIMESTAMP_FIELDS)

    @property
    def has_poster(self) -> bool:
        return "poster_email" in self.content_fields


JOBS = PostingKind(
    name="jobs",
    label="Job",
    store="jobs",
    archive="removed_jobs",
    content_fields=(
        "title", "company", "description", "requirements", "skills",
        "industry", "experience_level", "job_type", "location",
        "salary_range", "contact_email", "contact_phone",
        "poster_email", "poster_role",
    ),
    required_fields=("title", "company", "description", "contact_email", "contact_phone"),
    newest_first=True,
)

INTERNSHIPS = PostingKind(
    name="internships",
    label="Internship",
    store="internships",
    archive="removed_internships",
    content_fields=(
        "title", "company", "description", "requirements", "skills",
        "department", "duration", "is_paid", "stipend", "location",
        "positions", "poster_email", "poster_role", "contact_email",
        "contact_phone", "start_date", "application_deadline",
    ),
    required_fields=("title", "company", "description", "duration", "contact_email"),
    boolean_fields=frozenset({"is_paid"}),
    integer_fields=frozenset({"positions"}),
    defaults={"is_paid": False, "positions": 1},
)

COURSES = PostingKind(
    name="courses",
    label="Course",
    store="courses",
    archive=None,
    content_fields=(
        "title", "description", "type", "instructor", "duration", "price",
        "start_date", "end_date", "max_attendees", "current_attendees",
        "location", "is_online", "registration_url", "skills", "is_featured",
    ),
    required_fields=("title", "description", "type"),
    boolean_fields=frozenset({"is_online", "is_featured"}),
    integer_fields=frozenset({"max_attendees", "current_attendees"}),
    defaults={"current_attendees": 0, "is_online": False, "is_featured": False},
)

POSTING_KINDS: dict[str, PostingKind] = {kind.name: kind for kind in (JOBS, INTERNSHIPS, COURSES)}

_LIFECYCLE_BOOLEANS = frozenset({"is_active", "is_approved"})


# ============== Helpers ==============


def get_kind(name: str) -> PostingKind:
    kind = POSTING_KINDS.get(name)
    if kind is None:
        raise NotFound(f"Unknown posting kind '{name}'")
    return kind


def get_archive_kind(name: str) -> PostingKind:
    kind = get_kind(name)
    if kind.archive is None:
        raise NotFound(f"{kind.label} postings have no archive")
    return kind


def _posting_store(stores: Stores, kind: PostingKind) -> RecordStore:
    return stores.collection(kind.store)


def _archive_store(stores: Stores, kind: PostingKind) -> RecordStore:
    return stores.collection(kind.archive)


def join_skills(value: Any) -> Any:
    """Store skill lists as a comma-joined string."""
    if isinstance(value, (list, tuple, set)):
        return ", ".join(str(item).strip() for item in value if str(item).strip())
    return value


def _coerce(kind: PostingKind, name: str, value: Any) -> Any:
    if name in kind.boolean_fields or name in _LIFECYCLE_BOOLEANS:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("true", "false"):
            return text == "true"
        raise ValidationError(f"Field '{name}' must be true or false")

    if name in kind.integer_fields or name == "id":
        if value is None or isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise ValidationError(f"Field '{name}' must be an integer")

    if name == "skills":
        return join_skills(value)
    return value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_content(kind: PostingKind, fields: dict[str, Any]) -> Record:
    """Keep the known content fields of a payload, coerced to their types."""
    unknown = set(fields) - set(kind.content_fields) - set(LIFECYCLE_FIELDS) - {"id"}
    unknown -= set(TIMESTAMP_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown {kind.label.lower()} fields: {', '.join(sorted(unknown))}")

    return {
        name: _coerce(kind, name, value)
        for name, value in fields.items()
        if name in kind.content_fields
    }


def _missing_required(kind: PostingKind, record: Record) -> list[str]:
    return [name for name in kind.required_fields if _is_blank(record.get(name))]


def is_visible(posting: Record) -> bool:
    return bool(posting.get("is_active")) and bool(posting.get("is_approved"))


def can_manage(identity: Optional[Identity], posting: Record) -> bool:
    """Admins manage every posting; a poster manages their own."""
    if identity is None:
        return False
    if identity.is_admin:
        return True

    poster_email = posting.get("poster_email")
    if poster_email and normalize_email(poster_email) == identity.email:
        return True

    posted_by = posting.get("posted_by")
    return posted_by is not None and str(posted_by) == str(identity.user_id)


def _content_of(kind: PostingKind, record: Record) -> Record:
    return {name: record.get(name) for name in kind.content_fields}


def _load(stores: Stores, kind: PostingKind, posting_id: Any) -> Record:
    posting = _posting_store(stores, kind).get(posting_id)
    if posting is None:
        raise NotFound(f"{kind.label} not found")
    return posting


# ============== Lifecycle ==============


def submit_posting(
    stores: Stores,
    kind_name: str,
    fields: dict[str, Any],
    identity: Optional[Identity] = None,
) -> Record:
    """
    Store a new posting awaiting moderation.

    Lifecycle fields in the payload are ignored: every submission starts as
    pending, active and unapproved.

    Args:
        stores: Record stores
        kind_name: "jobs", "internships" or "courses"
        fields: Posting content
        identity: Caller, when a valid session was presented

    Returns:
        The stored posting

    Raises:
        ValidationError: If a required field is missing or blank
    """
    kind = get_kind(kind_name)
    content = {**kind.defaults, **{k: v for k, v in _clean_content(kind, fields).items() if v is not None}}

    if kind.has_poster and identity is not None:
        content.setdefault("poster_email", identity.email)
        content.setdefault("poster_role", "admin" if identity.is_admin else identity.user.get("role"))

    missing = _missing_required(kind, content)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    now = now_iso()
    posting = _posting_store(stores, kind).insert({
        **{name: None for name in kind.content_fields},
        **content,
        "status": STATUS_PENDING,
        "is_active": True,
        "is_approved": False,
        "posted_by": str(identity.user_id) if identity is not None else None,
        "created_at": now,
        "updated_at": now,
    })

    logger.info(f"{kind.label} {posting['id']} submitted for review: {posting.get('title')}")
    return posting


def get_posting(
    stores: Stores,
    kind_name: str,
    posting_id: Any,
    identity: Optional[Identity] = None,
) -> Record:
    """Fetch one posting; hidden postings only reach admins and their poster."""
    kind = get_kind(kind_name)
    posting = _load(stores, kind, posting_id)
    if not is_visible(posting) and not can_manage(identity, posting):
        raise NotFound(f"{kind.label} not found")
    return posting


def update_posting(
    stores: Stores,
    kind_name: str,
    posting_id: Any,
    fields: dict[str, Any],
    identity: Optional[Identity],
) -> Record:
    """
    Edit the content of a posting.

    Lifecycle fields in the payload are ignored. When a poster edits a
    posting that was already approved, it goes back to the moderation queue
    and stays hidden until an admin approves it again. Admin edits keep the
    current state.

    Raises:
        Unauthenticated: Without a session
        Forbidden: If the caller is neither admin nor the poster
        NotFound: If the posting does not exist
        ValidationError: If the edit blanks a required field
    """
    identity = require_identity(identity)
    kind = get_kind(kind_name)
    posting = _load(stores, kind, posting_id)
    if not can_manage(identity, posting):
        raise Forbidden(f"Only the poster or an admin can edit this {kind.label.lower()}")

    changes = _clean_content(kind, fields)
    missing = _missing_required(kind, {**posting, **changes})
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    patch = {**changes, "updated_at": now_iso()}
    if changes and not identity.is_admin and posting.get("is_approved"):
        patch.update({"status": STATUS_PENDING, "is_approved": False})
        logger.info(f"{kind.label} {posting['id']} edited by its poster, back to review")

    updated = _posting_store(stores, kind).patch(posting["id"], patch)
    logger.info(f"{kind.label} {posting['id']} edited by {identity.email}")
    return updated


def approve_posting(
    stores: Stores,
    kind_name: str,
    posting_id: Any,
    identity: Optional[Identity],
) -> Record:
    require_admin(identity)
    kind = get_kind(kind_name)
    posting = _load(stores, kind, posting_id)

    if posting.get("status") == STATUS_APPROVED and is_visible(posting):
        return posting

    approved = _posting_store(stores, kind).patch(posting["id"], {
        "status": STATUS_APPROVED,
        "is_approved": True,
        "is_active": True,
        "updated_at": now_iso(),
    })
    logger.info(f"{kind.label} {posting['id']} approved")
    return approved


def reject_posting(
    stores: Stores,
    kind_name: str,
    posting_id: Any,
    identity: Optional[Identity],
) -> Record:
    require_admin(identity)
    kind = get_kind(kind_name)
    posting = _load(stores, kind, posting_id)

    rejected = _posting_store(stores, kind).patch(posting["id"], {
        "status": STATUS_REJECTED,
        "is_approved": False,
        "updated_at": now_iso(),
    })
    logger.info(f"{kind.label} {posting['id']} rejected")
    return rejected


def delete_posting(
    stores: Stores,
    kind_name: str,
    posting_id: Any,
    identity: Optional[Identity],
    reason: Optional[str] = None,
) -> Optional[Record]:
    """
    Delete a posting, moving jobs and internships to their archive.

    The archive insert and the delete happen in one atomic unit, so a posting
    and its archive row never coexist.

    Args:
        stores: Record stores
        kind_name: Posting kind
        posting_id: Id of the live posting
        identity: Caller (admin or poster)
        reason: Removal reason recorded on the archive row

    Returns:
        The archive row, or None for courses (deleted outright)

    Raises:
        NotFound: If the posting does not exist (including a second delete)
    """
    identity = require_identity(identity)
    kind = get_kind(kind_name)
    posting = _load(stores, kind, posting_id)
    if not can_manage(identity, posting):
        raise Forbidden(f"Only the poster or an admin can delete this {kind.label.lower()}")

    if kind.archive is None:
        _posting_store(stores, kind).delete(posting["id"])
        logger.info(f"{kind.label} {posting['id']} deleted by {identity.email}")
        return None

    with stores.atomic():
        archived = _archive_store(stores, kind).insert({
            **_content_of(kind, posting),
            **{name: posting.get(name) for name in LIFECYCLE_FIELDS},
            "original_id": posting["id"],
            "original_created_at": posting.get("created_at"),
            "original_updated_at": posting.get("updated_at"),
            "removed_at": now_iso(),
            "removed_by": identity.email,
            "removal_reason": reason or DEFAULT_REMOVAL_REASON,
        })
        _posting_store(stores, kind).delete(posting["id"])

    logger.info(f"{kind.label} {posting['id']} archived as {archived['id']} by {identity.email}")
    return archived


def restore_posting(
    stores: Stores,
    kind_name: str,
    archive_id: Any,
    identity: Optional[Identity],
) -> Record:
    """
    Re-publish an archived posting under a new id.

    The restored posting is active and approved, keeps its original creation
    time, and the archive row is removed.
    """
    require_admin(identity)
    kind = get_archive_kind(kind_name)
    archived = _archive_store(stores, kind).get(archive_id)
    if archived is None:
        raise NotFound(f"Removed {kind.label.lower()} not found")

    now = now_iso()
    with stores.atomic():
        restored = _posting_store(stores, kind).insert({
            **_content_of(kind, archived),
            "status": STATUS_ACTIVE,
            "is_active": True,
            "is_approved": True,
            "posted_by": archived.get("posted_by"),
            "created_at": archived.get("original_created_at") or now,
            "updated_at": now,
        })
        _archive_store(stores, kind).delete(archived["id"])

    logger.info(f"Removed {kind.label.lower()} {archived['id']} restored as {restored['id']}")
    return restored


def purge_posting(
    stores: Stores,
    kind_name: str,
    archive_id: Any,
    identity: Optional[Identity],
) -> None:
    require_admin(identity)
    kind = get_archive_kind(kind_name)
    if not _archive_store(stores, kind).delete(archive_id):
        raise NotFound(f"Removed {kind.label.lower()} not found")
    logger.info(f"Removed {kind.label.lower()} {archive_id} permanently deleted")


# ============== Listings ==============


def parse_filters(kind: PostingKind, filters: Optional[dict[str, Any]]) -> Record:
    """
    Validate listing filters.

    Empty values are dropped, boolean fields accept "true"/"false".

    Raises:
        ValidationError: On an unknown field
    """
    parsed: Record = {}
    for name, value in (filters or {}).items():
        if _is_blank(value):
            continue
        if name not in kind.filterable_fields:
            raise ValidationError(f"Cannot filter {kind.name} by '{name}'")
        parsed[name] = _coerce(kind, name, value)
    return parsed


def list_postings(
    stores: Stores,
    kind_name: str,
    filters: Optional[dict[str, Any]] = None,
    identity: Optional[Identity] = None,
) -> list[Record]:
    """
    List postings matching equality filters.

    Non-admin callers only see visible postings. Jobs come most recent first,
    internships and courses in insertion order.
    """
    kind = get_kind(kind_name)
    postings = _posting_store(stores, kind).query(parse_filters(kind, filters))

    if identity is None or not identity.is_admin:
        postings = [posting for posting in postings if is_visible(posting)]
    if kind.newest_first:
        postings.reverse()
    return postings


def list_pending(stores: Stores, kind_name: str, identity: Optional[Identity]) -> list[Record]:
    """Moderation queue of one kind."""
    require_admin(identity)
    return list_postings(stores, kind_name, {"status": STATUS_PENDING}, identity)


def list_archive(stores: Stores, kind_name: str, identity: Optional[Identity]) -> list[Record]:
    """Archived postings of one kind, most recently removed first."""
    require_admin(identity)
    kind = get_archive_kind(kind_name)
    return sorted(
        _archive_store(stores, kind).collect(),
        key=lambda row: (row.get("removed_at") or "", row["id"]),
        reverse=True,
    )
