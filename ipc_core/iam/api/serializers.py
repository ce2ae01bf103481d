from __future__ import annotations

from rest_framework import serializers

from ipc_core.iam.constants import DepartmentType, UserRole
from ipc_core.iam.models import UserProfile


class UserProfileSerializer(serializers.ModelSerializer):
    role_display = serializers.CharField(read_only=True)
    department_display = serializers.CharField(read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            "id",
            "user_id",
            "email",
            "full_name",
            "employee_id",
            "phone",
            "role",
            "role_display",
            "department",
            "department_display",
            "is_active",
            "avatar_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProfileSelfUpdateSerializer(serializers.Serializer):
    """
    PATCH /me/. Role and department are deliberately absent; the view rejects them.
    """
    full_name = serializers.CharField(max_length=255, required=False)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    employee_id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    email = serializers.EmailField(required=False)

    def validate_full_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Full name is required.")
        return value.strip()

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class AccountCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    full_name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=UserRole.choices)
    department = serializers.ChoiceField(choices=DepartmentType.choices)
    employee_id = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    password = serializers.CharField(min_length=8, required=False, write_only=True)


class AccountUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    full_name = serializers.CharField(max_length=255, required=False)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    department = serializers.ChoiceField(choices=DepartmentType.choices, required=False)
    employee_id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    avatar_url = serializers.URLField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs
