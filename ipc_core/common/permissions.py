# ipc_core/common/permissions.py

from __future__ import annotations

from rest_framework.permissions import BasePermission, SAFE_METHODS

from ipc_core.common.api.exceptions import BackendUnavailable
from ipc_core.iam.access import can_access_form, can_manage_department_records
from ipc_core.iam.session import PROFILE_REQUIRED_MSG, SessionState, get_session_context


class HasActiveProfile(BasePermission):
    """
    Authenticated AND resolved to an active profile.

    Authenticated users without an active profile get 403 profile_required,
    never a default set of permissions.
    """
    message = PROFILE_REQUIRED_MSG
    code = "profile_required"

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        ctx = get_session_context(request)
        if ctx.state == SessionState.ERROR:
            raise BackendUnavailable(ctx.message)
        return ctx.is_active


class FormAccessPermission(HasActiveProfile):
    """
    Gate a view on the form access matrix.

    The view declares `form_type`. Writes additionally require the record's
    department to be visible to the caller (own department unless an IPC role).
    """
    form_message = "You do not have permission to access this form."

    # actions that move a record through review rather than create/read it
    review_actions = {"review"}

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False

        ctx = get_session_context(request)
        form_type = getattr(view, "form_type", None)

        if getattr(view, "action", None) in self.review_actions:
            if not ctx.can_review:
                self.message = "Only IPC reviewers can review submissions."
                self.code = "permission_denied"
                return False
            return True

        if not can_access_form(ctx.profile, form_type):
            self.message = self.form_message
            self.code = "permission_denied"
            return False
        return True

    def has_object_permission(self, request, view, obj) -> bool:
        ctx = get_session_context(request)
        if request.method in SAFE_METHODS or getattr(view, "action", None) in self.review_actions:
            return ctx.is_active
        department = getattr(obj, "department", None)
        if department and not can_manage_department_records(ctx.profile, department):
            self.message = "You do not have access to this department's records."
            self.code = "permission_denied"
            return False
        return True


class IsAdministrator(HasActiveProfile):
    message = "Administrator access required."

    def has_permission(self, request, view) -> bool:
        if not super().has_permission(request, view):
            return False
        if not get_session_context(request).is_admin:
            self.message = IsAdministrator.message
            self.code = "permission_denied"
            return False
        return True
