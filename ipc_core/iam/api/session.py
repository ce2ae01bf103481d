# ipc_core/iam/api/session.py

from __future__ import annotations

from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ipc_core.common.api.exceptions import BackendUnavailable
from ipc_core.iam.api.schema_serializers import SessionBootstrapResponseSerializer
from ipc_core.iam.api.serializers import UserProfileSerializer
from ipc_core.iam.session import SessionState, get_session_context


class SessionBootstrapView(APIView):
    """
    Frontend bootstrap endpoint.

    - Requires auth (cookie or header JWT).
    - Answers 200 even without an active profile so the UI can render the
      blocking "contact your administrator" screen; accessible_forms is then empty.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: SessionBootstrapResponseSerializer},
        tags=["IAM"],
    )
    def get(self, request):
        ctx = get_session_context(request)
        if ctx.state == SessionState.ERROR:
            raise BackendUnavailable(ctx.message)

        return Response(
            {
                "state": ctx.state,
                "message": ctx.message,
                "user": {
                    "id": request.user.id,
                    "username": getattr(request.user, "username", None),
                    "email": getattr(request.user, "email", None),
                },
                "profile": UserProfileSerializer(ctx.profile).data if ctx.profile is not None else None,
                "accessible_forms": ctx.accessible_forms,
                "flags": {
                    "is_admin": ctx.is_admin,
                    "can_review": ctx.can_review,
                },
                "server_time": timezone.now(),
                "api_version": "0.1.0",
            }
        )
