# ipc_core/iam/api/users.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from ipc_core.common.api.exceptions import ConflictError, validation_payload
from ipc_core.common.permissions import IsAdministrator
from ipc_core.iam.api.schema_serializers import TemporaryPasswordResponseSerializer
from ipc_core.iam.api.serializers import AccountCreateSerializer, AccountUpdateSerializer, UserProfileSerializer
from ipc_core.iam.filters import UserProfileFilter
from ipc_core.iam.models import UserProfile
from ipc_core.iam.services.profiles import ProfileService


class UserAccountViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Administrator user management.

    list / retrieve:   GET    /users/[{id}/]
    create:            POST   /users/                 -> profile + temporary password
    partial_update:    PATCH  /users/{id}/
    destroy:           DELETE /users/{id}/            -> profile + auth user
    activate:          POST   /users/{id}/activate/
    deactivate:        POST   /users/{id}/deactivate/
    reset_password:    POST   /users/{id}/reset-password/
    link_account:      POST   /users/{id}/link-account/
    """
    permission_classes = [IsAdministrator]
    serializer_class = UserProfileSerializer
    queryset = UserProfile.objects.select_related("user").order_by("-created_at")
    filterset_class = UserProfileFilter
    search_fields = ["full_name", "email", "employee_id"]
    ordering_fields = ["created_at", "full_name", "email", "role", "department"]

    def _actor_id(self, request):
        return getattr(request.user, "id", None)

    @extend_schema(request=AccountCreateSerializer, responses={201: TemporaryPasswordResponseSerializer})
    def create(self, request):
        ser = AccountCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            profile, password = ProfileService.create_account(actor_user_id=self._actor_id(request), **ser.validated_data)
        except DjangoValidationError as e:
            raise ConflictError(detail=validation_payload(e))

        return Response(
            {"profile": UserProfileSerializer(profile).data, "temporary_password": password},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=AccountUpdateSerializer, responses={200: UserProfileSerializer})
    def partial_update(self, request, pk=None):
        profile = self.get_object()
        ser = AccountUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            profile = ProfileService.update_account(
                actor_user_id=self._actor_id(request),
                profile=profile,
                data=ser.validated_data,
            )
        except DjangoValidationError as e:
            raise ValidationError(validation_payload(e))

        return Response(UserProfileSerializer(profile).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        profile = self.get_object()
        try:
            ProfileService.delete_account(actor_user_id=self._actor_id(request), profile=profile)
        except DjangoValidationError as e:
            raise ConflictError(detail=validation_payload(e))
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _set_active(self, request, is_active: bool):
        profile = self.get_object()
        try:
            profile = ProfileService.set_active(
                actor_user_id=self._actor_id(request),
                profile=profile,
                is_active=is_active,
            )
        except DjangoValidationError as e:
            raise ConflictError(detail=validation_payload(e))
        return Response(UserProfileSerializer(profile).data, status=status.HTTP_200_OK)

    @extend_schema(request=None, responses={200: UserProfileSerializer})
    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):
        return self._set_active(request, True)

    @extend_schema(request=None, responses={200: UserProfileSerializer})
    @action(detail=True, methods=["post"])
    def deactivate(self, request, pk=None):
        return self._set_active(request, False)

    @extend_schema(request=None, responses={200: TemporaryPasswordResponseSerializer})
    @action(detail=True, methods=["post"], url_path="reset-password")
    def reset_password(self, request, pk=None):
        profile = self.get_object()
        try:
            password = ProfileService.reset_password(actor_user_id=self._actor_id(request), profile=profile)
        except DjangoValidationError as e:
            raise ConflictError(detail=validation_payload(e))
        return Response(
            {"profile": UserProfileSerializer(profile).data, "temporary_password": password},
            status=status.HTTP_200_OK,
        )

    @extend_schema(request=None, responses={200: TemporaryPasswordResponseSerializer})
    @action(detail=True, methods=["post"], url_path="link-account")
    def link_account(self, request, pk=None):
        profile = self.get_object()
        try:
            profile, password = ProfileService.link_user(actor_user_id=self._actor_id(request), profile=profile)
        except DjangoValidationError as e:
            raise ConflictError(detail=validation_payload(e))
        return Response(
            {"profile": UserProfileSerializer(profile).data, "temporary_password": password},
            status=status.HTTP_200_OK,
        )
