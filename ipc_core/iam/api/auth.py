# ipc_core/iam/api/auth.py

from __future__ import annotations

from datetime import timedelta
from typing import Any

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from ipc_core.common.api.exceptions import BackendUnavailable, ProfileRequired
from ipc_core.iam.api.schema_serializers import (
    LoginRequestSerializer,
    LoginResponseSerializer,
    LogoutResponseSerializer,
    RefreshResponseSerializer,
)
from ipc_core.iam.api.serializers import UserProfileSerializer
from ipc_core.iam.session import SessionGate, SessionState, get_session_context


def _seconds(value: Any) -> int:
    """
    JWT lifetime setting -> seconds. Accepts timedelta or a number of seconds.
    """
    if isinstance(value, timedelta):
        return int(value.total_seconds())
    try:
        return int(value)
    except (TypeError, ValueError):
        # 0 -> session cookie
        return 0


def _jwt_cfg() -> dict:
    return getattr(settings, "SIMPLE_JWT", {}) or {}


def _set_auth_cookies(response: Response, *, access: str, refresh: str) -> None:
    jwt_cfg = _jwt_cfg()

    secure = bool(jwt_cfg.get("AUTH_COOKIE_SECURE", False))
    samesite = jwt_cfg.get("AUTH_COOKIE_SAMESITE", "Lax")

    for name, value, lifetime in (
        (jwt_cfg.get("AUTH_COOKIE", "ipc_access"), access, jwt_cfg.get("ACCESS_TOKEN_LIFETIME", timedelta(minutes=10))),
        (jwt_cfg.get("AUTH_COOKIE_REFRESH", "ipc_refresh"), refresh, jwt_cfg.get("REFRESH_TOKEN_LIFETIME", timedelta(days=14))),
    ):
        response.set_cookie(
            name,
            value,
            max_age=_seconds(lifetime),
            httponly=True,
            secure=secure,
            samesite=samesite,
            path="/",
        )


def _clear_auth_cookies(response: Response) -> None:
    jwt_cfg = _jwt_cfg()
    response.delete_cookie(jwt_cfg.get("AUTH_COOKIE", "ipc_access"), path="/")
    response.delete_cookie(jwt_cfg.get("AUTH_COOKIE_REFRESH", "ipc_refresh"), path="/")


class LoginView(APIView):
    """
    Tokens are issued only for authenticated_active sessions.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        request=LoginRequestSerializer,
        responses={200: LoginResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        result = SessionGate.sign_in(
            request,
            email=ser.validated_data.get("email"),
            username=ser.validated_data.get("username"),
            password=ser.validated_data["password"],
        )

        if result.state == SessionState.ERROR:
            raise BackendUnavailable(result.message)
        if result.state == SessionState.UNAUTHENTICATED:
            raise AuthenticationFailed(result.message)
        if result.state == SessionState.AUTHENTICATED_NO_PROFILE:
            raise ProfileRequired(result.message)

        refresh = RefreshToken.for_user(result.context.user)

        res = Response(
            {
                "detail": "login ok",
                "state": result.state,
                "profile": UserProfileSerializer(result.context.profile).data,
            },
            status=status.HTTP_200_OK,
        )
        _set_auth_cookies(res, access=str(refresh.access_token), refresh=str(refresh))
        return res


class RefreshView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        request=None,
        responses={200: RefreshResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        refresh_cookie_name = _jwt_cfg().get("AUTH_COOKIE_REFRESH", "ipc_refresh")
        refresh = request.COOKIES.get(refresh_cookie_name) or request.data.get("refresh")

        serializer = TokenRefreshSerializer(data={"refresh": refresh})
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0])

        access = serializer.validated_data["access"]
        new_refresh = serializer.validated_data.get("refresh", refresh)

        res = Response({"detail": "refreshed"}, status=status.HTTP_200_OK)
        _set_auth_cookies(res, access=access, refresh=new_refresh)
        return res


class LogoutView(APIView):
    """
    Always succeeds and always clears cookies, even when token revocation fails
    or the access token has already expired.
    """
    permission_classes = [AllowAny]

    @extend_schema(
        request=None,
        responses={200: LogoutResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        refresh = request.COOKIES.get(_jwt_cfg().get("AUTH_COOKIE_REFRESH", "ipc_refresh")) or request.data.get("refresh")

        state = SessionGate.sign_out(get_session_context(request), refresh_token=refresh)

        res = Response({"detail": "logged out", "state": state}, status=status.HTTP_200_OK)
        _clear_auth_cookies(res)
        return res

    def perform_authentication(self, request):
        # an expired/invalid access cookie must not block sign-out
        try:
            request.user
        except AuthenticationFailed:
            # DRF has already reset the request to anonymous at this point
            return
