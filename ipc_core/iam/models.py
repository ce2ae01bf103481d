# ipc_core/iam/models.py
import uuid
from django.conf import settings
from django.db import models

from ipc_core.iam.constants import DepartmentType, FormType, UserRole


class UserProfile(models.Model):
    """
    Surveillance user profile anchored to Django's AUTH_USER_MODEL.

    Carries the role + department pair the form access matrix is keyed on.
    `user` is nullable so an administrator can pre-create a profile and link
    the login later.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="ipc_profile",
        null=True,
        blank=True,
    )

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=255)
    employee_id = models.CharField(max_length=64, blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")

    role = models.CharField(max_length=32, choices=UserRole.choices, default=UserRole.VIEWER, db_index=True)
    department = models.CharField(max_length=32, choices=DepartmentType.choices, db_index=True)

    is_active = models.BooleanField(default=True)
    avatar_url = models.URLField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_user_profile"
        indexes = [
            models.Index(fields=["department", "role"], name="iam_profile_dept_role_idx"),
            models.Index(fields=["is_active"], name="iam_profile_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"

    @property
    def role_display(self) -> str:
        return UserRole(self.role).label

    @property
    def department_display(self) -> str:
        return DepartmentType(self.department).label


class RolePermission(models.Model):
    """
    (role, form type) grant. Seeded from ipc_core.iam.access.ROLE_FORMS.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    role = models.CharField(max_length=32, choices=UserRole.choices)
    form_type = models.CharField(max_length=32, choices=FormType.choices)

    can_create = models.BooleanField(default=False)
    can_read = models.BooleanField(default=False)
    can_update = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)
    can_approve = models.BooleanField(default=False)
    can_export = models.BooleanField(default=False)

    class Meta:
        db_table = "iam_role_permission"
        constraints = [
            models.UniqueConstraint(fields=["role", "form_type"], name="uq_role_form_type"),
        ]

    def __str__(self) -> str:
        return f"{self.role}:{self.form_type}"


class DepartmentPermission(models.Model):
    """
    (department, form type) grant. Seeded from ipc_core.iam.access.DEPARTMENT_FORMS.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    department = models.CharField(max_length=32, choices=DepartmentType.choices)
    form_type = models.CharField(max_length=32, choices=FormType.choices)

    can_create = models.BooleanField(default=False)
    can_read = models.BooleanField(default=False)
    can_update = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)

    class Meta:
        db_table = "iam_department_permission"
        constraints = [
            models.UniqueConstraint(fields=["department", "form_type"], name="uq_department_form_type"),
        ]

    def __str__(self) -> str:
        return f"{self.department}:{self.form_type}"
