"""
Whitelist Service - the resident emails allowed to log in.

Emails are stored lower-case and are unique case-insensitively.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from careerhub.core.config import settings
from careerhub.core.errors import Conflict, NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.auth import Identity, find_whitelist_entry, normalize_email, require_admin
from careerhub.utils.timestamps import now_iso

logger = get_logger("whitelist")

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")

EDITABLE_FIELDS = ("email", "name", "unit", "phone", "is_active")


def validate_email(email: str) -> str:
    """Normalise an email, raising ValidationError when it is malformed."""
    normalized = normalize_email(email)
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError("Invalid email format")
    return normalized


def _reject_admin_email(email: str) -> None:
    # The admin account only signs in through admin_login
    if email == normalize_email(settings.ADMIN_USERNAME):
        raise ValidationError("The admin account cannot be whitelisted")


def add_entry(
    stores: Stores,
    email: str,
    name: Optional[str] = None,
    unit: Optional[str] = None,
    phone: Optional[str] = None,
    added_by: Optional[str] = None,
) -> Record:
    """Insert a whitelist entry without an authorization check."""
    normalized = validate_email(email)
    _reject_admin_email(normalized)
    if stores.whitelist.first({"email": normalized}) is not None:
        raise Conflict("Email already whitelisted")

    now = now_iso()
    entry = stores.whitelist.insert({
        "email": normalized,
        "name": name,
        "unit": unit,
        "phone": phone,
        "is_active": True,
        "added_by": added_by,
        "created_at": now,
        "updated_at": now,
    })
    logger.info(f"Whitelisted {normalized}")
    return entry


def add_to_whitelist(
    stores: Stores,
    email: str,
    identity: Optional[Identity],
    name: Optional[str] = None,
    unit: Optional[str] = None,
    phone: Optional[str] = None,
) -> Record:
    """
    Whitelist a resident email (admin only).

    Raises:
        Conflict: If the email is already whitelisted
        ValidationError: If the email is malformed
    """
    identity = require_admin(identity)
    return add_entry(stores, email, name=name, unit=unit, phone=phone, added_by=identity.email)


def remove_from_whitelist(stores: Stores, entry_id: Any, identity: Optional[Identity]) -> None:
    require_admin(identity)
    entry = stores.whitelist.get(entry_id)
    if entry is None:
        raise NotFound("Whitelist entry not found")
    stores.whitelist.delete(entry["id"])
    logger.info(f"Removed {entry['email']} from the whitelist")


def update_whitelist_entry(
    stores: Stores,
    entry_id: Any,
    fields: dict[str, Any],
    identity: Optional[Identity],
) -> Record:
    require_admin(identity)
    entry = stores.whitelist.get(entry_id)
    if entry is None:
        raise NotFound("Whitelist entry not found")

    changes = {name: value for name, value in fields.items() if name in EDITABLE_FIELDS}
    if "email" in changes:
        changes["email"] = validate_email(changes["email"])
        _reject_admin_email(changes["email"])
        existing = stores.whitelist.first({"email": changes["email"]})
        if existing is not None and existing["id"] != entry["id"]:
            raise Conflict("Email already whitelisted")

    updated = stores.whitelist.patch(entry["id"], {**changes, "updated_at": now_iso()})
    logger.info(f"Whitelist entry {entry['id']} updated")
    return updated


def list_whitelist(stores: Stores, identity: Optional[Identity]) -> list[Record]:
    require_admin(identity)
    return stores.whitelist.collect()


def is_whitelisted(stores: Stores, email: str) -> bool:
    return find_whitelist_entry(stores, email) is not None
