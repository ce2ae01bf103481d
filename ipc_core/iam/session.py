# ipc_core/iam/session.py
"""
Session / profile gate.

States:
    unauthenticated -> authenticating -> authenticated_active
                                      -> authenticated_no_profile (terminal until an admin fixes the account)
                                      -> unauthenticated (bad credentials)
                                      -> error (data store failure)
    any -> unauthenticated on sign-out

A SessionContext is built per request (get_session_context) and owns the
resolved profile. Refreshes are tagged with a generation number; a result that
comes back after teardown or after a newer refresh is dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from django.contrib.auth import authenticate, get_user_model
from django.db import DatabaseError, models
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from ipc_core.iam.access import accessible_forms, can_review, is_administrator
from ipc_core.iam.selectors import get_profile_for_user

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MSG = "Invalid email or password. Please check your credentials and try again."
DEACTIVATED_MSG = "Your account has been deactivated. Please contact your administrator."
NO_PROFILE_MSG = "No user profile found for {email}. Please contact your administrator to set up your profile."
PROFILE_REQUIRED_MSG = "User profile not found or inactive. Please contact administrator."
BACKEND_ERROR_MSG = "Unable to reach the data store. Please try again."


class SessionState(models.TextChoices):
    UNAUTHENTICATED = "unauthenticated", "Unauthenticated"
    AUTHENTICATING = "authenticating", "Authenticating"
    AUTHENTICATED_NO_PROFILE = "authenticated_no_profile", "Authenticated (no active profile)"
    AUTHENTICATED_ACTIVE = "authenticated_active", "Authenticated"
    ERROR = "error", "Error"


ProfileLoader = Callable[[Any], Any]


@dataclass
class SessionContext:
    user: Any = None
    profile: Any = None
    state: str = SessionState.UNAUTHENTICATED
    message: str | None = None
    generation: int = 0
    profile_loader: ProfileLoader = field(default=get_profile_for_user, repr=False)

    # -------------------------
    # Lifecycle
    # -------------------------
    @classmethod
    def init(cls, user, *, profile_loader: Optional[ProfileLoader] = None) -> "SessionContext":
        ctx = cls(user=user)
        if profile_loader is not None:
            ctx.profile_loader = profile_loader
        if user is not None and getattr(user, "is_authenticated", False):
            ctx.refresh()
        return ctx

    def begin_refresh(self) -> int:
        self.generation += 1
        return self.generation

    def apply_refresh(self, generation: int, *, profile=None, failed: bool = False) -> bool:
        """
        Returns False (and changes nothing) when the result is stale.
        """
        if generation != self.generation or self.user is None:
            return False

        if failed:
            self.profile = None
            self.state = SessionState.ERROR
            self.message = BACKEND_ERROR_MSG
            return True

        if profile is not None and profile.is_active:
            self.profile = profile
            self.state = SessionState.AUTHENTICATED_ACTIVE
            self.message = None
            return True

        self.profile = None
        self.state = SessionState.AUTHENTICATED_NO_PROFILE
        if profile is not None:
            self.message = DEACTIVATED_MSG
        else:
            self.message = NO_PROFILE_MSG.format(email=getattr(self.user, "email", "") or "this account")
        return True

    def refresh(self) -> str:
        generation = self.begin_refresh()
        try:
            profile = self.profile_loader(self.user)
        except DatabaseError:
            logger.exception("Profile lookup failed for user_id=%s", getattr(self.user, "pk", None))
            self.apply_refresh(generation, failed=True)
            return self.state

        self.apply_refresh(generation, profile=profile)
        return self.state

    def teardown(self) -> None:
        # bumping the generation invalidates any refresh still in flight
        self.generation += 1
        self.user = None
        self.profile = None
        self.state = SessionState.UNAUTHENTICATED
        self.message = None

    # -------------------------
    # Read helpers
    # -------------------------
    @property
    def is_active(self) -> bool:
        return self.state == SessionState.AUTHENTICATED_ACTIVE and self.profile is not None

    @property
    def accessible_forms(self) -> list[str]:
        # no profile -> no default grants
        return accessible_forms(self.profile) if self.is_active else []

    @property
    def can_review(self) -> bool:
        return self.is_active and can_review(self.profile)

    @property
    def is_admin(self) -> bool:
        return self.is_active and is_administrator(self.profile)


@dataclass(frozen=True)
class SignInResult:
    state: str
    context: SessionContext
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.state == SessionState.AUTHENTICATED_ACTIVE


class SessionGate:
    """
    Credential sign-in and sign-out, expressed as SessionContext transitions.
    """

    @staticmethod
    def _resolve_username(email: str) -> str | None:
        User = get_user_model()
        user = User.objects.filter(email__iexact=email).only(User.USERNAME_FIELD).first()
        if user is None:
            return None
        return getattr(user, User.USERNAME_FIELD)

    @staticmethod
    def sign_in(request, *, password: str, email: str | None = None, username: str | None = None) -> SignInResult:
        ctx = SessionContext()
        ctx.state = SessionState.AUTHENTICATING

        try:
            login_name = username or (SessionGate._resolve_username(email) if email else None)
            user = authenticate(request, username=login_name, password=password) if login_name else None
        except DatabaseError:
            logger.exception("Sign-in failed: data store error")
            ctx.state = SessionState.ERROR
            ctx.message = BACKEND_ERROR_MSG
            return SignInResult(state=ctx.state, context=ctx, message=ctx.message)

        if user is None:
            logger.info("Sign-in rejected: invalid credentials for %s", email or username)
            ctx.state = SessionState.UNAUTHENTICATED
            ctx.message = INVALID_CREDENTIALS_MSG
            return SignInResult(state=ctx.state, context=ctx, message=ctx.message)

        ctx.user = user
        ctx.refresh()

        if ctx.state == SessionState.AUTHENTICATED_ACTIVE:
            logger.info("Sign-in ok: user_id=%s role=%s", user.pk, ctx.profile.role)
        else:
            logger.warning("Sign-in blocked: user_id=%s state=%s", user.pk, ctx.state)

        return SignInResult(state=ctx.state, context=ctx, message=ctx.message)

    @staticmethod
    def sign_out(ctx: SessionContext | None, *, refresh_token: str | None = None) -> str:
        """
        Always ends unauthenticated. Local state is cleared before the token is revoked,
        and a failed revocation is logged, not raised.
        """
        user_id = getattr(getattr(ctx, "user", None), "pk", None)
        if ctx is not None:
            ctx.teardown()

        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except (TokenError, DatabaseError) as exc:
                logger.warning("Refresh token revocation failed for user_id=%s: %s", user_id, exc)

        return SessionState.UNAUTHENTICATED


SESSION_ATTR = "ipc_session"


def get_session_context(request) -> SessionContext:
    """
    Lazily builds the per-request SessionContext (after DRF authentication ran).
    """
    ctx = getattr(request, SESSION_ATTR, None)
    if ctx is None:
        ctx = SessionContext.init(getattr(request, "user", None))
        setattr(request, SESSION_ATTR, ctx)
    return ctx
