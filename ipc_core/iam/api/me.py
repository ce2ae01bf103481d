# ipc_core/iam/api/me.py

from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from ipc_core.common.api.exceptions import validation_payload
from ipc_core.common.permissions import HasActiveProfile
from ipc_core.iam.api.schema_serializers import ChangePasswordRequestSerializer
from ipc_core.iam.api.serializers import ProfileSelfUpdateSerializer, UserProfileSerializer
from ipc_core.iam.services.profiles import ProfileService
from ipc_core.iam.session import get_session_context

ADMIN_ONLY_FIELDS = ("role", "department", "is_active")


class MeView(APIView):
    """
    Own profile: read and edit contact fields.
    """
    permission_classes = [HasActiveProfile]

    @extend_schema(responses={200: UserProfileSerializer}, tags=["IAM"])
    def get(self, request):
        profile = get_session_context(request).profile
        return Response(UserProfileSerializer(profile).data, status=status.HTTP_200_OK)

    @extend_schema(request=ProfileSelfUpdateSerializer, responses={200: UserProfileSerializer}, tags=["IAM"])
    def patch(self, request):
        blocked = [f for f in ADMIN_ONLY_FIELDS if f in request.data]
        if blocked:
            raise ValidationError({f: "Only an administrator can change this field." for f in blocked})

        ser = ProfileSelfUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        ctx = get_session_context(request)
        try:
            profile = ProfileService.update_own_profile(profile=ctx.profile, data=ser.validated_data)
        except DjangoValidationError as e:
            raise ValidationError(validation_payload(e))

        # keep the request-scoped context in step with what was saved
        ctx.profile = profile
        return Response(UserProfileSerializer(profile).data, status=status.HTTP_200_OK)


class ChangePasswordView(APIView):
    permission_classes = [HasActiveProfile]

    @extend_schema(request=ChangePasswordRequestSerializer, responses={204: None}, tags=["IAM"])
    def post(self, request):
        ser = ChangePasswordRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            ProfileService.change_password(
                user=request.user,
                current_password=ser.validated_data["current_password"],
                new_password=ser.validated_data["new_password"],
            )
        except DjangoValidationError as e:
            payload = validation_payload(e)
            if "detail" in payload:
                payload = {"new_password": payload["detail"]}
            raise ValidationError(payload)

        return Response(status=status.HTTP_204_NO_CONTENT)
