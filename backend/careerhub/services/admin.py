"""Platform statistics and user administration."""

from __future__ import annotations

from typing import Any, Optional

from careerhub.core.errors import NotFound, ValidationError
from careerhub.core.logging import get_logger
from careerhub.repositories import Record, Stores
from careerhub.services.auth import Identity, require_admin, require_identity

logger = get_logger("admin")


def _active(records: list[Record]) -> int:
    return sum(1 for record in records if record.get("is_active"))


def get_stats(stores: Stores, identity: Optional[Identity]) -> dict[str, int]:
    """Collection totals for the dashboard (any signed-in caller)."""
    require_identity(identity)

    jobs = stores.jobs.collect()
    internships = stores.internships.collect()
    courses = stores.courses.collect()
    applications = stores.applications.collect()
    benefits = stores.benefits.collect()

    return {
        "total_jobs": len(jobs),
        "active_jobs": _active(jobs),
        "total_internships": len(internships),
        "active_internships": _active(internships),
        "total_courses": len(courses),
        "active_courses": _active(courses),
        "total_applications": len(applications),
        "pending_applications": sum(1 for app in applications if app.get("status") == "pending"),
        "approved_applications": sum(1 for app in applications if app.get("status") == "approved"),
        "total_cv_showcase": stores.cvs.count(),
        "total_profiles": stores.profiles.count(),
        "visible_profiles": stores.profiles.count({"is_visible": True}),
        "total_community_benefits": len(benefits),
        "active_community_benefits": _active(benefits),
        "total_users": stores.users.count(),
        "pending_access_requests": stores.access_requests.count({"status": "pending"}),
    }


def list_users(stores: Stores, identity: Optional[Identity]) -> list[Record]:
    require_admin(identity)
    return stores.users.collect()


def delete_user(stores: Stores, user_id: Any, identity: Optional[Identity]) -> None:
    """
    Delete a user and end their sessions.

    Raises:
        ValidationError: If an admin tries to delete their own account
    """
    identity = require_admin(identity)
    user = stores.users.get(user_id)
    if user is None:
        raise NotFound("User not found")
    if user["id"] == identity.user_id:
        raise ValidationError("You cannot delete your own account")

    with stores.atomic():
        for session in stores.sessions.query({"email": user["email"]}):
            stores.sessions.delete(session["id"])
        stores.users.delete(user["id"])

    logger.info(f"User {user['email']} deleted by {identity.email}")
