# ipc_core/iam/tests/test_session_gate.py
from types import SimpleNamespace

import pytest
from django.db import DatabaseError

from ipc_core.iam.constants import FormType
from ipc_core.iam.session import (
    DEACTIVATED_MSG,
    INVALID_CREDENTIALS_MSG,
    SessionContext,
    SessionGate,
    SessionState,
)

pytestmark = pytest.mark.django_db

PASSWORD = "Ward-round-2024!"


def test_sign_in_with_active_profile(nurse_profile):
    result = SessionGate.sign_in(None, email=nurse_profile.email, password=PASSWORD)

    assert result.ok
    assert result.state == SessionState.AUTHENTICATED_ACTIVE
    assert result.context.profile == nurse_profile
    assert FormType.CAUTI.value in result.context.accessible_forms


def test_sign_in_email_is_case_insensitive(nurse_profile):
    result = SessionGate.sign_in(None, email=nurse_profile.email.upper(), password=PASSWORD)

    assert result.ok


def test_sign_in_bad_password(nurse_profile):
    result = SessionGate.sign_in(None, email=nurse_profile.email, password="wrong")

    assert result.state == SessionState.UNAUTHENTICATED
    assert result.message == INVALID_CREDENTIALS_MSG
    assert result.context.profile is None


def test_sign_in_unknown_email(db):
    result = SessionGate.sign_in(None, email="nobody@hospital.test", password=PASSWORD)

    assert result.state == SessionState.UNAUTHENTICATED


def test_sign_in_without_profile_is_blocked(make_user):
    user = make_user(email="orphan@hospital.test")

    result = SessionGate.sign_in(None, email=user.email, password=PASSWORD)

    assert result.state == SessionState.AUTHENTICATED_NO_PROFILE
    assert "orphan@hospital.test" in result.message
    assert result.context.accessible_forms == []


def test_sign_in_with_deactivated_profile(make_profile):
    p = make_profile(is_active=False)

    result = SessionGate.sign_in(None, email=p.email, password=PASSWORD)

    assert result.state == SessionState.AUTHENTICATED_NO_PROFILE
    assert result.message == DEACTIVATED_MSG
    assert result.context.accessible_forms == []
    assert not result.context.can_review


def test_profile_lookup_failure_is_error_state(nurse_profile):
    def broken_loader(user):
        raise DatabaseError("connection refused")

    ctx = SessionContext.init(nurse_profile.user, profile_loader=broken_loader)

    assert ctx.state == SessionState.ERROR
    assert ctx.profile is None


def test_stale_refresh_result_is_dropped(nurse_profile):
    ctx = SessionContext.init(nurse_profile.user)
    old = ctx.begin_refresh()
    new = ctx.begin_refresh()

    assert ctx.apply_refresh(old, profile=None) is False
    assert ctx.state == SessionState.AUTHENTICATED_ACTIVE

    assert ctx.apply_refresh(new, profile=nurse_profile) is True


def test_refresh_finishing_after_teardown_is_dropped(nurse_profile):
    ctx = SessionContext.init(nurse_profile.user)
    pending = ctx.begin_refresh()

    ctx.teardown()

    assert ctx.apply_refresh(pending, profile=nurse_profile) is False
    assert ctx.state == SessionState.UNAUTHENTICATED
    assert ctx.profile is None


def test_sign_out_with_unusable_token_still_ends_unauthenticated(nurse_profile):
    ctx = SessionContext.init(nurse_profile.user)

    state = SessionGate.sign_out(ctx, refresh_token="not-a-jwt")

    assert state == SessionState.UNAUTHENTICATED
    assert ctx.state == SessionState.UNAUTHENTICATED
    assert ctx.user is None


def test_anonymous_context_has_no_grants():
    ctx = SessionContext.init(SimpleNamespace(is_authenticated=False))

    assert ctx.state == SessionState.UNAUTHENTICATED
    assert ctx.accessible_forms == []
    assert not ctx.is_admin
