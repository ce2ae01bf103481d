# ipc_core/iam/selectors.py
from __future__ import annotations

from ipc_core.iam.models import UserProfile


def get_profile_for_user(user) -> UserProfile | None:
    """
    Profile linked to an auth user, active or not. None for anonymous users.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return UserProfile.objects.filter(user_id=user.pk).first()
