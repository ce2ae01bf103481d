# ipc_core/iam/api/schema_serializers.py
from __future__ import annotations

from rest_framework import serializers

from ipc_core.iam.api.serializers import UserProfileSerializer


class LoginRequestSerializer(serializers.Serializer):
    # email is the normal path; username kept for service accounts
    email = serializers.EmailField(required=False)
    username = serializers.CharField(required=False)
    password = serializers.CharField()

    def validate(self, attrs):
        if not attrs.get("email") and not attrs.get("username"):
            raise serializers.ValidationError({"email": "Email is required."})
        return attrs


class LoginResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    state = serializers.CharField()
    profile = UserProfileSerializer()


class RefreshResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class LogoutResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    state = serializers.CharField()


class SessionUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField(allow_null=True, required=False)
    email = serializers.EmailField(allow_null=True, required=False)


class SessionFlagsSerializer(serializers.Serializer):
    is_admin = serializers.BooleanField()
    can_review = serializers.BooleanField()


class SessionBootstrapResponseSerializer(serializers.Serializer):
    state = serializers.CharField()
    message = serializers.CharField(allow_null=True, required=False)
    user = SessionUserSerializer()
    profile = UserProfileSerializer(allow_null=True)

    # capability list for UI gating (menus/buttons)
    accessible_forms = serializers.ListField(child=serializers.CharField())
    flags = SessionFlagsSerializer()

    server_time = serializers.DateTimeField(required=False)
    api_version = serializers.CharField(required=False)


class ChangePasswordRequestSerializer(serializers.Serializer):
    current_password = serializers.CharField()
    new_password = serializers.CharField(min_length=8)
    confirm_password = serializers.CharField()

    def validate(self, attrs):
        if attrs["new_password"] != attrs["confirm_password"]:
            raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        return attrs


class TemporaryPasswordResponseSerializer(serializers.Serializer):
    profile = UserProfileSerializer()
    temporary_password = serializers.CharField()
