"""Tests for the whitelist-gated session authenticator."""

from datetime import timedelta

import pytest

from careerhub.core.config import settings
from careerhub.core.errors import AccessDenied, Forbidden, InvalidCredentials, Unauthenticated
from careerhub.services import auth
from careerhub.services.whitelist import add_entry
from careerhub.utils.timestamps import iso_after, parse_iso


# ===== TESTS: resident login =====

class TestLogin:

    def test_non_whitelisted_email_is_denied_without_writes(self, stores):
        with pytest.raises(AccessDenied) as exc_info:
            auth.login(stores, "stranger@example.com")

        assert "not registered as a resident" in exc_info.value.message
        assert stores.users.count() == 0
        assert stores.sessions.count() == 0

    def test_login_is_case_insensitive(self, stores):
        add_entry(stores, "resident@example.com", name="Layla Hassan")

        result = auth.login(stores, "  Resident@Example.COM ")

        assert result["user"]["email"] == "resident@example.com"
        assert result["user"]["name"] == "Layla Hassan"
        assert result["user"]["role"] == "user"
        assert result["user"]["last_login_at"]

    def test_two_logins_one_user_two_sessions(self, stores):
        add_entry(stores, "resident@example.com")

        first = auth.login(stores, "resident@example.com")
        second = auth.login(stores, "resident@example.com")

        assert stores.users.count() == 1
        assert stores.sessions.count() == 2
        assert first["session_id"] != second["session_id"]
        assert first["user"]["name"] == "User"

    def test_deactivated_entry_is_denied(self, stores):
        entry = add_entry(stores, "resident@example.com")
        stores.whitelist.patch(entry["id"], {"is_active": False})

        with pytest.raises(AccessDenied):
            auth.login(stores, "resident@example.com")


# ===== TESTS: admin login =====

class TestAdminLogin:

    def test_valid_credentials_create_admin_session(self, stores):
        result = auth.admin_login(stores, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)

        identity = auth.resolve_session(stores, result["session_id"])
        assert identity.is_admin
        assert result["user"]["role"] == "admin"
        assert result["user"]["name"] == "Admin"

    def test_repeated_admin_login_reuses_user(self, stores):
        auth.admin_login(stores, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
        auth.admin_login(stores, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
        assert stores.users.count({"role": "admin"}) == 1

    @pytest.mark.parametrize("username,password", [
        ("someone@example.com", None),
        (None, "wrong-password"),
        ("", ""),
    ])
    def test_invalid_credentials(self, stores, username, password):
        with pytest.raises(InvalidCredentials):
            auth.admin_login(
                stores,
                settings.ADMIN_USERNAME if username is None else username,
                settings.ADMIN_PASSWORD if password is None else password,
            )
        assert stores.sessions.count() == 0


# ===== TESTS: sessions =====

class TestResolveSession:

    def test_unknown_and_missing_tokens(self, stores):
        assert auth.resolve_session(stores, None) is None
        assert auth.resolve_session(stores, "") is None
        assert auth.resolve_session(stores, "no-such-token") is None

    def test_expired_session_is_treated_as_missing(self, stores, resident):
        session = stores.sessions.first({"session_id": resident.session_id})
        stores.sessions.patch(session["id"], {"expires_at": iso_after(timedelta(seconds=-1))})

        assert auth.resolve_session(stores, resident.session_id) is None
        # Expired sessions are not purged
        assert stores.sessions.get(session["id"]) is not None

    def test_session_expires_after_ttl(self, stores, resident):
        session = stores.sessions.first({"session_id": resident.session_id})
        expires_at = parse_iso(session["expires_at"])
        assert expires_at > parse_iso(iso_after(timedelta(hours=settings.SESSION_TTL_HOURS - 1)))
        assert expires_at <= parse_iso(iso_after(timedelta(hours=settings.SESSION_TTL_HOURS)))

    def test_missing_user_invalidates_session(self, stores, resident):
        stores.users.delete(resident.user_id)
        assert auth.resolve_session(stores, resident.session_id) is None

    def test_admin_role_makes_identity_admin(self, stores, resident):
        stores.users.patch(resident.user_id, {"role": "admin"})
        assert auth.resolve_session(stores, resident.session_id).is_admin

    def test_logout_is_idempotent(self, stores, resident):
        auth.logout(stores, resident.session_id)
        auth.logout(stores, resident.session_id)
        auth.logout(stores, None)

        assert auth.resolve_session(stores, resident.session_id) is None


# ===== TESTS: guards =====

class TestGuards:

    def test_require_identity(self, resident):
        with pytest.raises(Unauthenticated):
            auth.require_identity(None)
        assert auth.require_identity(resident) is resident

    def test_require_admin(self, admin, resident):
        with pytest.raises(Unauthenticated):
            auth.require_admin(None)
        with pytest.raises(Forbidden):
            auth.require_admin(resident)
        assert auth.require_admin(admin) is admin
