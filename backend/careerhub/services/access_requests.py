"""Access requests from residents who are not whitelisted yet."""

from __future__ import annotations

from typing import Any, Optional

from careerhub.core.errors import Conflict, NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.auth import Identity, require_admin
from careerhub.services.whitelist import add_entry, is_whitelisted, validate_email
from careerhub.utils.timestamps import now_iso

logger = get_logger("access_requests")

REQUEST_STATUSES = ("pending", "approved", "rejected")


def create_access_request(
    stores: Stores,
    full_name: str,
    email: str,
    unit_number: str,
    mobile: Optional[str] = None,
) -> Record:
    """
    File a request to join the whitelist.

    Raises:
        Conflict: If the email is already whitelisted or has a pending request
        ValidationError: On a malformed email or missing name/unit
    """
    normalized = validate_email(email)
    if not (full_name or "").strip() or not (unit_number or "").strip():
        raise ValidationError("full_name and unit_number are required")

    if is_whitelisted(stores, normalized):
        raise Conflict("Email is already whitelisted")
    if stores.access_requests.first({"email": normalized, "status": "pending"}) is not None:
        raise Conflict("Access request already pending for this email")

    now = now_iso()
    request = stores.access_requests.insert({
        "full_name": full_name.strip(),
        "email": normalized,
        "unit_number": unit_number.strip(),
        "mobile": mobile,
        "status": "pending",
        "created_at": now,
        "updated_at": now,
    })
    logger.info(f"Access request {request['id']} filed by {normalized}")
    return request


def list_access_requests(stores: Stores, identity: Optional[Identity]) -> list[Record]:
    """All requests, most recent first."""
    require_admin(identity)
    return list(reversed(stores.access_requests.collect()))


def update_access_request_status(
    stores: Stores,
    request_id: Any,
    status: str,
    identity: Optional[Identity],
) -> Record:
    """
    Set the review status of a request.

    Approving a request also whitelists its email (unit number as the unit),
    reactivating a disabled entry if there is one.
    """
    identity = require_admin(identity)
    if status not in REQUEST_STATUSES:
        raise ValidationError(f"status must be one of {', '.join(REQUEST_STATUSES)}")

    request = stores.access_requests.get(request_id)
    if request is None:
        raise NotFound("Access request not found")

    with stores.atomic():
        updated = stores.access_requests.patch(request["id"], {"status": status, "updated_at": now_iso()})
        existing = stores.whitelist.first({"email": request["email"]})
        if status == "approved" and existing is not None and not existing.get("is_active"):
            stores.whitelist.patch(existing["id"], {"is_active": True, "updated_at": now_iso()})
        elif status == "approved" and existing is None:
            add_entry(
                stores,
                request["email"],
                name=request.get("full_name"),
                unit=request.get("unit_number"),
                phone=request.get("mobile"),
                added_by=identity.email,
            )

    logger.info(f"Access request {request['id']} marked {status}")
    return updated


def delete_access_request(stores: Stores, request_id: Any, identity: Optional[Identity]) -> None:
    require_admin(identity)
    if not stores.access_requests.delete(request_id):
        raise NotFound("Access request not found")
    logger.info(f"Access request {request_id} deleted")
