# ipc_core/analytics/selectors.py
"""
Read-side aggregation over surveillance tables.

Counting and grouping happen in the database; Python only fills empty months
and reshapes rows. Table and column names come from the form registry.
"""
from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Optional

from django.db.models import Count, QuerySet
from django.db.models.functions import TruncMonth
from django.utils import timezone

from ipc_core.iam.access import has_role
from ipc_core.iam.constants import FULL_ACCESS_ROLES, DepartmentType, FormType
from ipc_core.surveillance.registry import REGISTRY, FormRegistration

DEFAULT_RANGE_DAYS = 365
RECENT_FORM_TYPES = (FormType.CAUTI.value, FormType.CLABSI.value)


def default_range(today: Optional[date] = None) -> tuple[date, date]:
    today = today or timezone.localdate()
    return today - timedelta(days=DEFAULT_RANGE_DAYS), today


def _scoped(registration: FormRegistration, *, profile) -> QuerySet:
    qs = registration.model.objects.filter(is_active=True)
    if profile is not None and not has_role(profile, *FULL_ACCESS_ROLES):
        qs = qs.filter(**{registration.department_field: profile.department})
    return qs


def _in_range(registration: FormRegistration, *, start: date, end: date, profile) -> QuerySet:
    return _scoped(registration, profile=profile).filter(
        **{
            f"{registration.date_field}__gte": start,
            f"{registration.date_field}__lte": end,
        }
    )


def _month_keys(start: date, end: date) -> list[str]:
    keys = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        keys.append(f"{year:04d}-{month:02d}")
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return keys


def monthly_trends(*, registration: FormRegistration, start: date, end: date, profile=None) -> list[dict[str, Any]]:
    rows = (
        _in_range(registration, start=start, end=end, profile=profile)
        .annotate(month=TruncMonth(registration.date_field))
        .values("month")
        .annotate(cases=Count("id"))
        .order_by("month")
    )
    counts = {r["month"].strftime("%Y-%m"): r["cases"] for r in rows if r["month"] is not None}
    return [{"month": key, "cases": counts.get(key, 0)} for key in _month_keys(start, end)]


def department_breakdown(*, registration: FormRegistration, start: date, end: date, profile=None) -> list[dict[str, Any]]:
    field = registration.department_field
    rows = (
        _in_range(registration, start=start, end=end, profile=profile)
        .values(field)
        .annotate(cases=Count("id"))
        .order_by("-cases", field)
    )

    labels = dict(DepartmentType.choices)
    return [
        {"department": r[field], "department_name": labels.get(r[field], r[field]), "cases": r["cases"]}
        for r in rows
    ]


def pathogen_breakdown(*, registration: FormRegistration, start: date, end: date, profile=None) -> list[dict[str, Any]]:
    field = registration.pathogen_field
    if not field:
        return []

    rows = (
        _in_range(registration, start=start, end=end, profile=profile)
        .values(field)
        .annotate(cases=Count("id"))
        .order_by("-cases")
    )

    out: dict[str, int] = {}
    for r in rows:
        name = str(r[field] or "").strip()
        if not name:
            continue
        out[name] = out.get(name, 0) + r["cases"]
    return [{"pathogen": k, "cases": v} for k, v in sorted(out.items(), key=lambda kv: (-kv[1], kv[0]))]


def dashboard_stats(*, profile=None, today: Optional[date] = None) -> dict[str, int]:
    today = today or timezone.localdate()
    month_start = today.replace(day=1)

    totals = {}
    this_month = 0
    for form_type, registration in REGISTRY.items():
        qs = _scoped(registration, profile=profile)
        totals[form_type] = qs.count()
        this_month += qs.filter(**{f"{registration.date_field}__gte": month_start}).count()

    patient_sets = [_scoped(r, profile=profile).values("hospital_id") for r in REGISTRY.values()]
    total_patients = patient_sets[0].union(*patient_sets[1:]).count() if patient_sets else 0

    return {
        "cauti_cases": totals.get(FormType.CAUTI.value, 0),
        "clabsi_cases": totals.get(FormType.CLABSI.value, 0),
        "ssi_cases": totals.get(FormType.SSI.value, 0),
        "mdro_cases": totals.get(FormType.MDRO.value, 0),
        "this_month": this_month,
        "total_patients": total_patients,
    }


def recent_submissions(*, profile=None, limit: int = 10) -> list[dict[str, Any]]:
    """
    Latest CAUTI and CLABSI submissions merged, newest first.
    """
    merged = []
    for form_type in RECENT_FORM_TYPES:
        registration = REGISTRY[form_type]
        qs = _scoped(registration, profile=profile).select_related("submitted_by").order_by("-created_at")[:limit]
        for item in qs:
            merged.append(
                {
                    "id": item.id,
                    "form_id": item.form_number or item.id.hex[:8].upper(),
                    "form_type": form_type,
                    "patient_name": item.patient_name,
                    "department": item.department,
                    "ward_bed_number": item.ward_bed_number,
                    "submission_date": getattr(item, registration.date_field),
                    "review_status": item.review_status,
                    "submitted_by": item.submitted_by.full_name if item.submitted_by else "Unknown User",
                    "created_at": item.created_at,
                }
            )

    merged.sort(key=lambda row: row["created_at"], reverse=True)
    return merged[:limit]
