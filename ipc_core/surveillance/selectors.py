# ipc_core/surveillance/selectors.py
from __future__ import annotations

from django.db.models import Case, IntegerField, QuerySet, Value, When

from ipc_core.iam.access import has_role
from ipc_core.iam.constants import FULL_ACCESS_ROLES
from ipc_core.surveillance.constants import SSI_OPEN_STATUSES, SsiPriority
from ipc_core.surveillance.models import SsiCase

PRIORITY_RANK = {
    SsiPriority.HIGH.value: 0,
    SsiPriority.MEDIUM.value: 1,
    SsiPriority.LOW.value: 2,
}


def scoped_records(model, *, profile) -> QuerySet:
    """
    Records a profile may read. IPC staff see every department, everyone else
    sees their own department only.
    """
    qs = model.objects.select_related("submitted_by")
    if profile is None:
        return qs.none()
    if not has_role(profile, *FULL_ACCESS_ROLES):
        qs = qs.filter(department=profile.department)
    return qs.order_by("-created_at")


def ssi_watchlist(*, profile=None) -> QuerySet[SsiCase]:
    """
    Open SSI cases: HIGH before MEDIUM before LOW, then oldest suspicion first.
    """
    qs = SsiCase.objects.filter(current_status__in=SSI_OPEN_STATUSES, is_active=True)
    if profile is not None and not has_role(profile, *FULL_ACCESS_ROLES):
        qs = qs.filter(department=profile.department)

    return qs.annotate(
        priority_rank=Case(
            *[When(priority=p, then=Value(rank)) for p, rank in PRIORITY_RANK.items()],
            default=Value(len(PRIORITY_RANK)),
            output_field=IntegerField(),
        )
    ).order_by("priority_rank", "suspicion_date", "created_at")
