# ipc_core/iam/tests/test_auth_api.py
import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from ipc_core.conftest import DEFAULT_PASSWORD

pytestmark = pytest.mark.django_db


def _login(client, email, password=DEFAULT_PASSWORD):
    return client.post("/api/v1/auth/login/", {"email": email, "password": password}, format="json")


def test_login_sets_cookies_and_returns_profile(nurse_profile, settings):
    c = APIClient()
    res = _login(c, nurse_profile.email)

    assert res.status_code == 200
    assert res.data["state"] == "authenticated_active"
    assert res.data["profile"]["role"] == "STAFF_NURSE"
    assert settings.SIMPLE_JWT["AUTH_COOKIE"] in res.cookies
    assert settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"] in res.cookies


def test_cookie_session_reaches_protected_endpoints(nurse_profile):
    c = APIClient()
    _login(c, nurse_profile.email)

    res = c.get("/api/v1/session/bootstrap/")

    assert res.status_code == 200
    assert res.data["state"] == "authenticated_active"
    assert "CAUTI" in res.data["accessible_forms"]
    assert "MDRO" not in res.data["accessible_forms"]
    assert res.data["flags"] == {"is_admin": False, "can_review": False}


def test_login_bad_password(nurse_profile):
    res = _login(APIClient(), nurse_profile.email, password="nope")

    assert res.status_code in (401, 403)
    assert res.data["error"]["message"].startswith("Invalid email or password")
    assert "ipc_access" not in res.cookies


def test_login_requires_email_or_username(db):
    res = APIClient().post("/api/v1/auth/login/", {"password": "x"}, format="json")

    assert res.status_code == 400
    assert "email" in res.data["error"]["details"]


def test_login_without_active_profile_issues_no_tokens(make_profile):
    p = make_profile(is_active=False)

    res = _login(APIClient(), p.email)

    assert res.status_code == 403
    assert res.data["error"]["code"] == "profile_required"
    assert "ipc_access" not in res.cookies


def test_refresh_rotates_and_logout_revokes(nurse_profile):
    c = APIClient()
    _login(c, nurse_profile.email)
    first_refresh = c.cookies["ipc_refresh"].value

    res = c.post("/api/v1/auth/refresh/", {}, format="json")
    assert res.status_code == 200
    rotated = res.cookies["ipc_refresh"].value
    assert rotated != first_refresh

    res = c.post("/api/v1/auth/logout/", {}, format="json")
    assert res.status_code == 200
    assert res.data["state"] == "unauthenticated"
    assert res.cookies["ipc_access"].value == ""

    # the revoked token no longer refreshes
    res = APIClient().post("/api/v1/auth/refresh/", {"refresh": rotated}, format="json")
    assert res.status_code in (401, 403)


def test_logout_succeeds_with_garbage_tokens(db):
    c = APIClient()
    c.cookies["ipc_access"] = "garbage"
    c.cookies["ipc_refresh"] = "garbage"

    res = c.post("/api/v1/auth/logout/", {}, format="json")

    assert res.status_code == 200
    assert res.data["state"] == "unauthenticated"


def test_header_token_without_profile_is_profile_required(make_user):
    user = make_user()
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {RefreshToken.for_user(user).access_token}")

    res = c.get("/api/v1/me/")

    assert res.status_code == 403
    assert res.data["error"]["code"] == "profile_required"


def test_bootstrap_without_profile_is_answered_with_empty_grants(client_for, make_user):
    res = client_for(make_user()).get("/api/v1/session/bootstrap/")

    assert res.status_code == 200
    assert res.data["state"] == "authenticated_no_profile"
    assert res.data["profile"] is None
    assert res.data["accessible_forms"] == []
