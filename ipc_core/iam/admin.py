# ipc_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from ipc_core.iam.models import DepartmentPermission, RolePermission, UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("full_name", "email", "role", "department", "is_active", "created_at")
    list_filter = ("role", "department", "is_active")
    search_fields = ("full_name", "email", "employee_id", "user__username")
    autocomplete_fields = ("user",)
    ordering = ("-created_at",)


@admin.register(RolePermission)
class RolePermissionAdmin(admin.ModelAdmin):
    list_display = ("role", "form_type", "can_create", "can_read", "can_update", "can_delete", "can_approve", "can_export")
    list_filter = ("role", "form_type")
    ordering = ("role", "form_type")


@admin.register(DepartmentPermission)
class DepartmentPermissionAdmin(admin.ModelAdmin):
    list_display = ("department", "form_type", "can_create", "can_read", "can_update", "can_delete")
    list_filter = ("department", "form_type")
    ordering = ("department", "form_type")
