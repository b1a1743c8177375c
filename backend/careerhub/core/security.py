"""
Security utilities for authentication.

Provides opaque session token generation, session expiry computation and
the shared admin credential check.
"""

import secrets
from datetime import timedelta
from typing import Optional

from careerhub.core.config import settings
from careerhub.utils.timestamps import iso_after, parse_iso, utcnow


def generate_session_token() -> str:
    """
    Create a new opaque session token.

    Returns:
        A URL-safe random string
    """
    return secrets.token_urlsafe(32)


def session_expiry(ttl_hours: Optional[int] = None) -> str:
    """
    Compute the expiry timestamp for a session created now.

    Args:
        ttl_hours: Optional override of the configured TTL

    Returns:
        ISO-8601 expiry timestamp
    """
    hours = settings.SESSION_TTL_HOURS if ttl_hours is None else ttl_hours
    return iso_after(timedelta(hours=hours))


def is_expired(expires_at: Optional[str]) -> bool:
    """
    Check whether a session expiry timestamp lies in the past.

    Unparseable or missing values count as expired.
    """
    if not expires_at:
        return True
    try:
        return parse_iso(expires_at) < utcnow()
    except ValueError:
        return True


def verify_admin_credentials(username: str, password: str) -> bool:
    """
    Compare submitted credentials against the configured admin pair.

    Args:
        username: Submitted admin username (email)
        password: Submitted admin password

    Returns:
        True if both match, False otherwise
    """
    username_ok = secrets.compare_digest(
        username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8")
    )
    return username_ok and password_ok
