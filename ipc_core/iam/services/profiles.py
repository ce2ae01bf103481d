# ipc_core/iam/services/profiles.py
from __future__ import annotations

import logging
import secrets
import string
from typing import Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction

from ipc_core.audit.services import AuditService
from ipc_core.iam.models import UserProfile

logger = logging.getLogger(__name__)

TEMP_PASSWORD_LENGTH = 12
TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%"

SELF_EDITABLE_FIELDS = {"full_name", "phone", "employee_id", "email"}
ADMIN_EDITABLE_FIELDS = SELF_EDITABLE_FIELDS | {"role", "department", "avatar_url", "is_active"}


def generate_temporary_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    """
    Random password with at least one letter, one digit and one symbol.
    """
    while True:
        pw = "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))
        if (
            any(c.isalpha() for c in pw)
            and any(c.isdigit() for c in pw)
            and any(c in "!@#$%" for c in pw)
        ):
            return pw


class ProfileService:
    """
    Profile + account write operations.

    Notes:
    - Users edit their own contact fields only; role/department are admin-only.
    - Account creation writes the auth user and the profile in one transaction.
    - Email is kept in sync between profile and auth user.
    """

    # -------------------------
    # Internal helpers
    # -------------------------
    @staticmethod
    def _email_taken(email: str, *, exclude_profile_id=None, exclude_user_id=None) -> bool:
        User = get_user_model()
        profiles = UserProfile.objects.filter(email__iexact=email)
        if exclude_profile_id is not None:
            profiles = profiles.exclude(id=exclude_profile_id)
        users = User.objects.filter(email__iexact=email)
        if exclude_user_id is not None:
            users = users.exclude(pk=exclude_user_id)
        return profiles.exists() or users.exists()

    @staticmethod
    def _sync_user_email(profile: UserProfile) -> None:
        user = profile.user
        if user is None or user.email == profile.email:
            return
        user.email = profile.email
        update_fields = ["email"]
        if user.USERNAME_FIELD == "username":
            user.username = profile.email
            update_fields.append("username")
        user.save(update_fields=update_fields)

    @staticmethod
    def _apply(profile: UserProfile, data: dict, allowed: set[str]) -> list[str]:
        changed: list[str] = []
        for k, v in (data or {}).items():
            if k not in allowed:
                continue
            if getattr(profile, k) != v:
                setattr(profile, k, v)
                changed.append(k)
        return changed

    # -------------------------
    # Self service
    # -------------------------
    @staticmethod
    @transaction.atomic
    def update_own_profile(*, profile: UserProfile, data: dict) -> UserProfile:
        forbidden = sorted(set(data or {}) & {"role", "department", "is_active"})
        if forbidden:
            raise ValidationError({f: "Only an administrator can change this field." for f in forbidden})

        if "full_name" in data and not str(data["full_name"]).strip():
            raise ValidationError({"full_name": "Full name is required."})

        email = data.get("email")
        if email and ProfileService._email_taken(
            email, exclude_profile_id=profile.id, exclude_user_id=profile.user_id
        ):
            raise ValidationError({"email": "This email is already in use."})

        changed = ProfileService._apply(profile, data, SELF_EDITABLE_FIELDS)
        if not changed:
            return profile

        profile.save(update_fields=changed + ["updated_at"])
        if "email" in changed:
            ProfileService._sync_user_email(profile)

        AuditService.log(
            event_code="profile.updated",
            entity_type="UserProfile",
            entity_id=profile.id,
            actor_user_id=profile.user_id,
            metadata={"updated_fields": sorted(changed)},
        )
        return profile

    @staticmethod
    @transaction.atomic
    def change_password(*, user, current_password: str, new_password: str) -> None:
        if not user.check_password(current_password):
            raise ValidationError({"current_password": "Current password is incorrect."})

        validate_password(new_password, user=user)
        user.set_password(new_password)
        user.save(update_fields=["password"])
        logger.info("Password changed for user_id=%s", user.pk)

    # -------------------------
    # Administration
    # -------------------------
    @staticmethod
    @transaction.atomic
    def create_account(
        *,
        actor_user_id: int | None,
        email: str,
        full_name: str,
        role: str,
        department: str,
        employee_id: str = "",
        phone: str = "",
        password: Optional[str] = None,
    ) -> tuple[UserProfile, str]:
        """
        Creates auth user + profile. Returns (profile, password) so the
        administrator can hand over the temporary password.
        """
        if ProfileService._email_taken(email):
            raise ValidationError({"email": "An account with this email already exists."})

        password = password or generate_temporary_password()

        User = get_user_model()
        user = User.objects.create_user(username=email, email=email, password=password)

        profile = UserProfile.objects.create(
            user=user,
            email=email,
            full_name=full_name,
            role=role,
            department=department,
            employee_id=employee_id or "",
            phone=phone or "",
            is_active=True,
        )

        AuditService.log(
            event_code="account.created",
            entity_type="UserProfile",
            entity_id=profile.id,
            actor_user_id=actor_user_id,
            metadata={"email": email, "role": role, "department": department},
        )
        logger.info("Account created: profile_id=%s role=%s department=%s", profile.id, role, department)
        return profile, password

    @staticmethod
    @transaction.atomic
    def update_account(*, actor_user_id: int | None, profile: UserProfile, data: dict) -> UserProfile:
        email = data.get("email")
        if email and ProfileService._email_taken(
            email, exclude_profile_id=profile.id, exclude_user_id=profile.user_id
        ):
            raise ValidationError({"email": "This email is already in use."})

        if data.get("is_active") is False and profile.user_id is not None and profile.user_id == actor_user_id:
            raise ValidationError({"is_active": "You cannot deactivate your own account."})

        changed = ProfileService._apply(profile, data, ADMIN_EDITABLE_FIELDS)
        if not changed:
            return profile

        profile.save(update_fields=changed + ["updated_at"])
        if "email" in changed:
            ProfileService._sync_user_email(profile)

        AuditService.log(
            event_code="account.updated",
            entity_type="UserProfile",
            entity_id=profile.id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(changed)},
        )
        return profile

    @staticmethod
    def set_active(*, actor_user_id: int | None, profile: UserProfile, is_active: bool) -> UserProfile:
        return ProfileService.update_account(
            actor_user_id=actor_user_id,
            profile=profile,
            data={"is_active": is_active},
        )

    @staticmethod
    @transaction.atomic
    def reset_password(*, actor_user_id: int | None, profile: UserProfile) -> str:
        if profile.user is None:
            raise ValidationError("This profile is not linked to a login account.")

        password = generate_temporary_password()
        profile.user.set_password(password)
        profile.user.save(update_fields=["password"])

        AuditService.log(
            event_code="account.password_reset",
            entity_type="UserProfile",
            entity_id=profile.id,
            actor_user_id=actor_user_id,
        )
        return password

    @staticmethod
    @transaction.atomic
    def link_user(*, actor_user_id: int | None, profile: UserProfile, password: Optional[str] = None) -> tuple[UserProfile, str]:
        """
        Attach a login account to a profile created without one.
        """
        if profile.user_id is not None:
            raise ValidationError("This profile is already linked to a login account.")

        User = get_user_model()
        if User.objects.filter(email__iexact=profile.email).exists():
            raise ValidationError({"email": "A login account with this email already exists."})

        password = password or generate_temporary_password()
        profile.user = User.objects.create_user(username=profile.email, email=profile.email, password=password)
        profile.save(update_fields=["user", "updated_at"])

        AuditService.log(
            event_code="account.linked",
            entity_type="UserProfile",
            entity_id=profile.id,
            actor_user_id=actor_user_id,
        )
        return profile, password

    @staticmethod
    @transaction.atomic
    def delete_account(*, actor_user_id: int | None, profile: UserProfile) -> None:
        if profile.user_id is not None and profile.user_id == actor_user_id:
            raise ValidationError("You cannot delete your own account.")

        profile_id = profile.id
        email = profile.email
        user = profile.user

        profile.delete()
        if user is not None:
            user.delete()

        AuditService.log(
            event_code="account.deleted",
            entity_type="UserProfile",
            entity_id=profile_id,
            actor_user_id=actor_user_id,
            metadata={"email": email},
        )
        logger.info("Account deleted: profile_id=%s", profile_id)
