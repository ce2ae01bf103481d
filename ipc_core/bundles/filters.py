import django_filters

from ipc_core.bundles.constants import ShiftType
from ipc_core.bundles.models import ClabsiBundleEntry
from ipc_core.iam.constants import DepartmentType


class ClabsiBundleEntryFilter(django_filters.FilterSet):
    patient_id = django_filters.CharFilter(method="filter_patient_id")
    department = django_filters.ChoiceFilter(choices=DepartmentType.choices)
    shift = django_filters.ChoiceFilter(choices=ShiftType.choices)
    date_from = django_filters.DateFilter(field_name="entry_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="entry_date", lookup_expr="lte")
    active = django_filters.BooleanFilter(field_name="discharge_date", lookup_expr="isnull")

    class Meta:
        model = ClabsiBundleEntry
        fields = ["patient_id", "department", "shift", "date_from", "date_to", "active"]

    def filter_patient_id(self, queryset, name, value):
        value = (value or "").strip().upper()
        return queryset.filter(patient_id=value) if value else queryset
