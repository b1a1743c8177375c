"""
Community Benefits Service.

Discounts and perks from local businesses, curated by admins. Active
benefits are public; the homepage shows the active ones an admin featured.
"""

from __future__ import annotations

from typing import Any, Optional

from careerhub.core.errors import NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.auth import Identity, require_admin
from careerhub.services.directory import parse_bool
from careerhub.utils.timestamps import now_iso

logger = get_logger("benefits")

BENEFIT_FIELDS: tuple[str, ...] = (
    "title", "description", "business_name", "discount_percentage",
    "location", "category", "valid_until", "image_url", "image_urls",
)
FLAG_FIELDS: tuple[str, ...] = ("is_active", "show_on_homepage")
REQUIRED_BENEFIT_FIELDS: tuple[str, ...] = ("title", "description", "business_name")
# image_urls is a list and cannot be matched by equality
FILTERABLE_BENEFIT_FIELDS = frozenset(("id",) + BENEFIT_FIELDS + FLAG_FIELDS) - {"image_urls"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean(fields: dict[str, Any], allow_flags: bool) -> Record:
    """Keep known benefit fields; flags are only taken when allowed."""
    unknown = set(fields) - set(BENEFIT_FIELDS) - set(FLAG_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown benefit fields: {', '.join(sorted(unknown))}")

    cleaned: Record = {}
    for name, value in fields.items():
        if name in FLAG_FIELDS:
            if not allow_flags:
                continue
            value = parse_bool(name, value)
        elif name == "image_urls" and value is not None:
            if not isinstance(value, (list, tuple)) or not all(isinstance(url, str) for url in value):
                raise ValidationError("Field 'image_urls' must be a list of URLs")
            value = [url.strip() for url in value if url.strip()]
        cleaned[name] = value
    return cleaned


def _require_fields(record: Record) -> None:
    missing = [name for name in REQUIRED_BENEFIT_FIELDS if _is_blank(record.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def _load(stores: Stores, benefit_id: Any) -> Record:
    benefit = stores.benefits.get(benefit_id)
    if benefit is None:
        raise NotFound("Community benefit not found")
    return benefit


# ============== Admin ==============


def create_benefit(stores: Stores, fields: dict[str, Any], identity: Optional[Identity]) -> Record:
    """
    Add a benefit. It starts active and off the homepage.

    Raises:
        Forbidden: If the caller is not an admin
        ValidationError: If title, description or business name is missing
    """
    identity = require_admin(identity)
    content = {name: value for name, value in _clean(fields, allow_flags=False).items() if value is not None}
    _require_fields(content)

    now = now_iso()
    benefit = stores.benefits.insert({
        **{name: None for name in BENEFIT_FIELDS},
        **content,
        "is_active": True,
        "show_on_homepage": False,
        "created_at": now,
        "updated_at": now,
    })
    logger.info(f"Benefit {benefit['id']} from {benefit['business_name']} added by {identity.email}")
    return benefit


def update_benefit(
    stores: Stores,
    benefit_id: Any,
    fields: dict[str, Any],
    identity: Optional[Identity],
) -> Record:
    """Edit content or flags (is_active, show_on_homepage)."""
    identity = require_admin(identity)
    benefit = _load(stores, benefit_id)

    changes = _clean(fields, allow_flags=True)
    _require_fields({**benefit, **changes})

    updated = stores.benefits.patch(benefit["id"], {**changes, "updated_at": now_iso()})
    logger.info(f"Benefit {benefit['id']} updated by {identity.email}")
    return updated


def delete_benefit(stores: Stores, benefit_id: Any, identity: Optional[Identity]) -> None:
    identity = require_admin(identity)
    benefit = _load(stores, benefit_id)
    stores.benefits.delete(benefit["id"])
    logger.info(f"Benefit {benefit['id']} deleted by {identity.email}")


# ============== Reads ==============


def get_benefit(stores: Stores, benefit_id: Any, identity: Optional[Identity] = None) -> Record:
    benefit = _load(stores, benefit_id)
    if not benefit.get("is_active") and not (identity is not None and identity.is_admin):
        raise NotFound("Community benefit not found")
    return benefit


def list_benefits(
    stores: Stores,
    filters: Optional[dict[str, Any]] = None,
    identity: Optional[Identity] = None,
) -> list[Record]:
    """
    List benefits by equality filters, most recent first.

    Inactive benefits are only listed for admins.
    """
    parsed: Record = {}
    for name, value in (filters or {}).items():
        if _is_blank(value):
            continue
        if name not in FILTERABLE_BENEFIT_FIELDS:
            raise ValidationError(f"Cannot filter benefits by '{name}'")
        if name in FLAG_FIELDS:
            value = parse_bool(name, value)
        elif name == "id":
            try:
                value = int(value)
            except (TypeError, ValueError):
                raise ValidationError("Field 'id' must be an integer")
        parsed[name] = value

    benefits = stores.benefits.query(parsed)
    if identity is None or not identity.is_admin:
        benefits = [benefit for benefit in benefits if benefit.get("is_active")]
    benefits.reverse()
    return benefits


def list_homepage_benefits(stores: Stores) -> list[Record]:
    """Active benefits featured on the homepage, in the order they were added."""
    return stores.benefits.query({"show_on_homepage": True, "is_active": True})
