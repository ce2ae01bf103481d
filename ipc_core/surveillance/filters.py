import django_filters
from django.db.models import Q

from ipc_core.iam.constants import DepartmentType, ReviewStatus
from ipc_core.surveillance.constants import MdrOrganismType, MdroOutcome, SsiPriority, SsiStatus
from ipc_core.surveillance.models import CautiSurveillance, ClabsiSurveillance, MdroSurveillance, SsiCase


class SurveillanceRecordFilter(django_filters.FilterSet):
    department = django_filters.ChoiceFilter(choices=DepartmentType.choices)
    q = django_filters.CharFilter(method="filter_q")

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(patient_name__icontains=value)
            | Q(hospital_id__icontains=value)
            | Q(form_number__icontains=value)
        )


class CautiFilter(SurveillanceRecordFilter):
    review_status = django_filters.ChoiceFilter(choices=ReviewStatus.choices)
    date_from = django_filters.DateFilter(field_name="surveillance_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="surveillance_date", lookup_expr="lte")

    class Meta:
        model = CautiSurveillance
        fields = ["department", "review_status", "date_from", "date_to", "q"]


class ClabsiFilter(SurveillanceRecordFilter):
    review_status = django_filters.ChoiceFilter(choices=ReviewStatus.choices)
    date_from = django_filters.DateFilter(field_name="surveillance_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="surveillance_date", lookup_expr="lte")

    class Meta:
        model = ClabsiSurveillance
        fields = ["department", "review_status", "date_from", "date_to", "q"]


class MdroFilter(SurveillanceRecordFilter):
    review_status = django_filters.ChoiceFilter(choices=ReviewStatus.choices)
    mdr_organism_type = django_filters.ChoiceFilter(choices=MdrOrganismType.choices)
    outcome = django_filters.ChoiceFilter(choices=MdroOutcome.choices)
    date_from = django_filters.DateFilter(field_name="report_submission_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="report_submission_date", lookup_expr="lte")

    class Meta:
        model = MdroSurveillance
        fields = ["department", "review_status", "mdr_organism_type", "outcome", "date_from", "date_to", "q"]


class SsiCaseFilter(SurveillanceRecordFilter):
    current_status = django_filters.ChoiceFilter(choices=SsiStatus.choices)
    priority = django_filters.ChoiceFilter(choices=SsiPriority.choices)
    date_from = django_filters.DateFilter(field_name="suspicion_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="suspicion_date", lookup_expr="lte")

    class Meta:
        model = SsiCase
        fields = ["department", "current_status", "priority", "date_from", "date_to", "q"]
