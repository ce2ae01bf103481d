# ipc_core/bundles/selectors.py
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from django.db.models import Avg, Count, Max, Min, Q, QuerySet
from django.utils import timezone

from ipc_core.bundles.compliance import percentage, round_half_up
from ipc_core.bundles.constants import (
    ADMISSION_COMPONENT,
    BUNDLE_COMPONENTS,
    COMPONENT_LABELS,
    LOW_COMPLIANCE_THRESHOLD,
    PERFECT_COMPLIANCE,
)
from ipc_core.bundles.models import ClabsiBundleEntry
from ipc_core.iam.access import has_role
from ipc_core.iam.constants import FULL_ACCESS_ROLES


def scoped_entries(*, profile) -> QuerySet[ClabsiBundleEntry]:
    qs = ClabsiBundleEntry.objects.select_related("created_by")
    if profile is None:
        return qs.none()
    if not has_role(profile, *FULL_ACCESS_ROLES):
        qs = qs.filter(department=profile.department)
    return qs.order_by("-entry_date", "patient_id", "shift")


def patient_history(*, profile, patient_id: str) -> QuerySet[ClabsiBundleEntry]:
    return scoped_entries(profile=profile).filter(patient_id=patient_id).order_by("entry_date", "shift")


def patient_overview(*, profile) -> list[dict[str, Any]]:
    """
    One row per patient: admission data, discharge data (if recorded), entry
    count and mean compliance across entries.
    """
    rows = (
        scoped_entries(profile=profile)
        .order_by()
        .values("patient_id")
        .annotate(
            admission_date=Min("admission_date"),
            admission_shift=Min("admission_shift"),
            discharge_date=Max("discharge_date"),
            discharge_shift=Max("discharge_shift"),
            discharge_type=Max("discharge_type"),
            total_entries=Count("id"),
            avg_compliance=Avg("compliance_score"),
            last_entry=Max("entry_date"),
        )
        .order_by("-last_entry", "patient_id")
    )

    out = []
    for row in rows:
        out.append(
            {
                "patient_id": row["patient_id"],
                "admission_date": row["admission_date"],
                "admission_shift": row["admission_shift"],
                "discharge_date": row["discharge_date"],
                "discharge_shift": row["discharge_shift"] or "",
                "discharge_type": row["discharge_type"] or "",
                "total_entries": row["total_entries"],
                "overall_compliance": round_half_up(row["avg_compliance"] or 0),
                "is_active": row["discharge_date"] is None,
            }
        )
    return out


def bundle_stats(*, profile, today: Optional[date] = None) -> dict[str, int]:
    today = today or timezone.localdate()
    month_start = today.replace(day=1)

    patients = patient_overview(profile=profile)
    total = len(patients)
    active = sum(1 for p in patients if p["is_active"])
    scores = [p["overall_compliance"] for p in patients]

    return {
        "total_cases": total,
        "active_cases": active,
        "completed_cases": total - active,
        "average_compliance": round_half_up(sum(scores) / total) if total else 0,
        "this_month_entries": scoped_entries(profile=profile).filter(entry_date__gte=month_start).count(),
        "low_compliance_cases": sum(1 for s in scores if s < LOW_COMPLIANCE_THRESHOLD),
        "perfect_compliance_cases": sum(1 for s in scores if s == PERFECT_COMPLIANCE),
    }


def component_breakdown(*, profile) -> dict[str, dict[str, int]]:
    """
    Completion per bundle component. Skin prep is only counted on day-1 entries.
    """
    qs = scoped_entries(profile=profile).order_by()
    agg = qs.aggregate(
        total=Count("id"),
        day_one=Count("id", filter=Q(day_number=1)),
        **{name: Count("id", filter=Q(**{name: True})) for name in BUNDLE_COMPONENTS},
    )

    out = {}
    for name in BUNDLE_COMPONENTS:
        total = agg["day_one"] if name == ADMISSION_COMPONENT else agg["total"]
        completed = agg[name]
        out[COMPONENT_LABELS[name]] = {
            "completed": completed,
            "total": total,
            "percentage": percentage(completed, total),
        }
    return out
