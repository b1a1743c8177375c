"""
Professional Directory Service.

Residents publish a short professional profile: what they do and how they
can support their neighbours. Visible profiles are public; the owner or an
admin may edit, hide or delete one.
"""

from __future__ import annotations

from typing import Any, Optional

from careerhub.core.errors import Forbidden, NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.auth import Identity, require_identity
from careerhub.services.postings import join_skills
from careerhub.utils.timestamps import now_iso

logger = get_logger("directory")

PROFILE_FIELDS: tuple[str, ...] = (
    "name", "title", "company", "bio", "skills", "industry",
    "experience_level", "contact", "linkedin_url", "portfolio_url",
    "phone", "how_can_you_support",
)
REQUIRED_PROFILE_FIELDS: tuple[str, ...] = ("name", "title")
OWNER_FIELDS: tuple[str, ...] = ("user_id", "owner_email")
FILTERABLE_PROFILE_FIELDS = frozenset(("id", "is_visible") + PROFILE_FIELDS + OWNER_FIELDS)


def parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "false"):
        return text == "true"
    raise ValidationError(f"Field '{name}' must be true or false")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def can_edit_profile(identity: Optional[Identity], profile: Record) -> bool:
    if identity is None:
        return False
    return identity.is_admin or profile.get("owner_email") == identity.email


def _clean(fields: dict[str, Any]) -> Record:
    unknown = set(fields) - set(PROFILE_FIELDS) - {"is_visible"}
    if unknown:
        raise ValidationError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

    cleaned: Record = {}
    for name, value in fields.items():
        if name == "is_visible":
            value = parse_bool(name, value)
        elif name == "skills":
            value = join_skills(value)
        cleaned[name] = value
    return cleaned


def _require_fields(record: Record) -> None:
    missing = [name for name in REQUIRED_PROFILE_FIELDS if _is_blank(record.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _load(stores: Stores, profile_id: Any) -> Record:
    profile = stores.profiles.get(profile_id)
    if profile is None:
        raise NotFound("Profile not found")
    return profile


def _load_editable(stores: Stores, profile_id: Any, identity: Optional[Identity]) -> tuple[Record, Identity]:
    identity = require_identity(identity)
    profile = _load(stores, profile_id)
    if not can_edit_profile(identity, profile):
        raise Forbidden("You can only modify your own profile")
    return profile, identity


# ============== CRUD ==============


def create_profile(stores: Stores, fields: dict[str, Any], identity: Optional[Identity]) -> Record:
    """
    Publish a directory profile owned by the caller.

    Args:
        stores: Record stores
        fields: Profile content; is_visible defaults to true
        identity: Signed-in resident or admin

    Returns:
        The stored profile

    Raises:
        Unauthenticated: Without a session
        ValidationError: If name or title is missing
    """
    identity = require_identity(identity)
    content = {name: value for name, value in _clean(fields).items() if value is not None}
    _require_fields(content)

    now = now_iso()
    profile = stores.profiles.insert({
        **{name: None for name in PROFILE_FIELDS},
        "is_visible": True,
        **content,
        "user_id": str(identity.user_id),
        "owner_email": identity.email,
        "created_at": now,
        "updated_at": now,
    })
    logger.info(f"Profile {profile['id']} created by {identity.email}")
    return profile


def get_profile(stores: Stores, profile_id: Any, identity: Optional[Identity] = None) -> Record:
    """Hidden profiles only reach their owner and admins."""
    profile = _load(stores, profile_id)
    if not profile.get("is_visible") and not can_edit_profile(identity, profile):
        raise NotFound("Profile not found")
    return profile


def update_profile(
    stores: Stores,
    profile_id: Any,
    fields: dict[str, Any],
    identity: Optional[Identity],
) -> Record:
    profile, identity = _load_editable(stores, profile_id, identity)

    changes = _clean(fields)
    _require_fields({**profile, **changes})

    updated = stores.profiles.patch(profile["id"], {**changes, "updated_at": now_iso()})
    logger.info(f"Profile {profile['id']} updated by {identity.email}")
    return updated


def delete_profile(stores: Stores, profile_id: Any, identity: Optional[Identity]) -> None:
    profile, identity = _load_editable(stores, profile_id, identity)
    stores.profiles.delete(profile["id"])
    logger.info(f"Profile {profile['id']} deleted by {identity.email}")


def list_profiles(
    stores: Stores,
    filters: Optional[dict[str, Any]] = None,
    identity: Optional[Identity] = None,
) -> list[Record]:
    """
    List profiles by equality filters; empty values are ignored.

    Admins see every profile, anyone else the visible ones plus their own.
    """
    parsed: Record = {}
    for name, value in (filters or {}).items():
        if _is_blank(value):
            continue
        if name not in FILTERABLE_PROFILE_FIELDS:
            raise ValidationError(f"Cannot filter profiles by '{name}'")
        if name == "is_visible":
            value = parse_bool(name, value)
        elif name == "id":
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise ValidationError("Field 'id' must be an integer")
        parsed[name] = value

    profiles = stores.profiles.query(parsed)
    return [
        profile for profile in profiles
        if profile.get("is_visible") or can_edit_profile(identity, profile)
    ]
