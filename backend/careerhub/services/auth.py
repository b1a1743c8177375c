"""
Session Authenticator.

Residents log in with a whitelisted email only; the admin logs in with the
single configured credential pair. Both receive an opaque session token that
expires after SESSION_TTL_HOURS. Expired sessions are ignored, not purged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from careerhub.core.config import settings
from careerhub.core.errors import AccessDenied, Forbidden, InvalidCredentials, Unauthenticated
from careerhub.core.logging import get_logger
from careerhub.core.security import (
    generate_session_token,
    is_expired,
    session_expiry,
    verify_admin_credentials,
)
from careerhub.repositories import Record, Stores
from careerhub.utils.timestamps import now_iso

logger = get_logger("auth")

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_RECRUITER = "recruiter"  # reserved, no behaviour attached


@dataclass
class Identity:
    """The caller behind a valid session."""

    email: str
    is_admin: bool
    user: Record
    session_id: Optional[str] = None

    @property
    def user_id(self) -> Any:
        return self.user.get("id")

    def to_dict(self) -> dict[str, Any]:
        return {"email": self.email, "is_admin": self.is_admin, "user": self.user}


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def find_whitelist_entry(stores: Stores, email: str) -> Optional[Record]:
    """Return the active whitelist entry for an email, if any."""
    entry = stores.whitelist.first({"email": normalize_email(email)})
    if entry is None or not entry.get("is_active", True):
        return None
    return entry


def _open_session(stores: Stores, email: str, is_admin: bool) -> str:
    token = generate_session_token()
    stores.sessions.insert({
        "session_id": token,
        "email": email,
        "is_admin": is_admin,
        "created_at": now_iso(),
        "expires_at": session_expiry(),
    })
    return token


def _ensure_user(stores: Stores, email: str, name: str, role: str) -> Record:
    now = now_iso()
    user = stores.users.first({"email": email})
    if user is None:
        return stores.users.insert({
            "email": email,
            "name": name,
            "role": role,
            "created_at": now,
            "updated_at": now,
            "last_login_at": now,
        })
    return stores.users.patch(user["id"], {"last_login_at": now})


def login(stores: Stores, email: str) -> dict[str, Any]:
    """
    Log a resident in by email.

    Args:
        stores: Record stores
        email: Submitted email (case-insensitive)

    Returns:
        {"session_id", "user", "message"}

    Raises:
        AccessDenied: If the email is not on the whitelist. Nothing is written.
    """
    normalized = normalize_email(email)
    entry = find_whitelist_entry(stores, normalized)
    if entry is None:
        logger.warning(f"Login refused for non-resident email {normalized}")
        raise AccessDenied()

    user = _ensure_user(stores, normalized, entry.get("name") or "User", ROLE_USER)
    token = _open_session(stores, normalized, is_admin=False)

    logger.info(f"Resident login: {normalized}")
    return {"session_id": token, "user": user, "message": "Login successful"}


def admin_login(stores: Stores, username: str, password: str) -> dict[str, Any]:
    """
    Log the shared admin identity in.

    Raises:
        InvalidCredentials: If either value differs from the configured pair
    """
    if not verify_admin_credentials(username or "", password or ""):
        logger.warning("Admin login refused: invalid credentials")
        raise InvalidCredentials()

    email = normalize_email(settings.ADMIN_USERNAME)
    user = _ensure_user(stores, email, "Admin", ROLE_ADMIN)
    token = _open_session(stores, email, is_admin=True)

    logger.info("Admin login")
    return {"session_id": token, "user": user, "message": "Admin login successful"}


def resolve_session(stores: Stores, token: Optional[str]) -> Optional[Identity]:
    """
    Map a session token to the caller's identity.

    Returns None when the token is missing, unknown or expired, or when the
    user behind it no longer exists.
    """
    if not token:
        return None

    session = stores.sessions.first({"session_id": token})
    if session is None or is_expired(session.get("expires_at")):
        return None

    user = stores.users.first({"email": session["email"]})
    if user is None:
        return None

    return Identity(
        email=session["email"],
        is_admin=bool(session.get("is_admin")) or user.get("role") == ROLE_ADMIN,
        user=user,
        session_id=token,
    )


def logout(stores: Stores, token: Optional[str]) -> dict[str, str]:
    """Delete the session behind a token. Unknown tokens are ignored."""
    if token:
        session = stores.sessions.first({"session_id": token})
        if session is not None:
            stores.sessions.delete(session["id"])
            logger.info(f"Logout: {session['email']}")
    return {"message": "Logged out successfully"}


def require_identity(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise Unauthenticated()
    return identity


def require_admin(identity: Optional[Identity]) -> Identity:
    """
    Authorization guard for admin-only operations.

    Raises:
        Unauthenticated: Without a valid session
        Forbidden: For a non-admin caller
    """
    identity = require_identity(identity)
    if not identity.is_admin:
        logger.warning(f"Admin operation refused for {identity.email}")
        raise Forbidden()
    return identity
