"""
Authentication API endpoints.

Handles resident (whitelisted email) login, the shared admin login, logout
and the current-session lookup. Also provides the request dependencies the
other routers use to reach the stores and the caller's identity.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from careerhub.core.config import settings
from careerhub.db.session import get_db
from careerhub.repositories import Stores, sql_stores
from careerhub.services import auth as auth_service
from careerhub.services.auth import Identity

router = APIRouter()

SESSION_COOKIE = "session_id"

# Session token from "Authorization: Bearer <token>" or the session cookie
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=SESSION_COOKIE, auto_error=False)


# ============== Pydantic Schemas ==============


class LoginRequest(BaseModel):
    """Schema for resident login."""

    email: str


class AdminLoginRequest(BaseModel):
    """Schema for admin login."""

    username: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: str
    created_at: Optional[str] = None
    last_login_at: Optional[str] = None


class LoginResponse(BaseModel):
    """Schema for a successful login."""

    session_id: str
    user: UserResponse
    message: str


class CurrentUserResponse(BaseModel):
    email: str
    is_admin: bool
    is_authenticated: bool = True
    user: UserResponse


# ============== Dependencies ==============


def get_stores(db: Session = Depends(get_db)) -> Stores:
    """Stores bound to the request's database session."""
    return sql_stores(db)


def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    cookie_token: Optional[str] = Depends(cookie_scheme),
) -> Optional[str]:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return cookie_token


def get_current_identity(
    token: Optional[str] = Depends(get_session_token),
    stores: Stores = Depends(get_stores),
) -> Optional[Identity]:
    """
    Dependency resolving the caller's session.

    Returns None for anonymous callers; services decide whether that is
    acceptable (see require_identity / require_admin).
    """
    return auth_service.resolve_session(stores, token)


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        samesite="lax",
    )


# ============== API Endpoints ==============


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    stores: Stores = Depends(get_stores),
):
    """
    Log a resident in with their whitelisted email.

    Returns the session token and also sets it as an HTTP-only cookie.
    """
    result = auth_service.login(stores, payload.email)
    _set_session_cookie(response, result["session_id"])
    return result


@router.post("/admin-login", response_model=LoginResponse)
def admin_login(
    payload: AdminLoginRequest,
    response: Response,
    stores: Stores = Depends(get_stores),
):
    result = auth_service.admin_login(stores, payload.username, payload.password)
    _set_session_cookie(response, result["session_id"])
    return result


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    stores: Stores = Depends(get_stores),
):
    response.delete_cookie(SESSION_COOKIE)
    return auth_service.logout(stores, token)


@router.get("/me", response_model=Optional[CurrentUserResponse])
def me(identity: Optional[Identity] = Depends(get_current_identity)):
    """Current session's user, or null when not logged in."""
    if identity is None:
        return None
    return identity.to_dict()
