import django_filters

from ipc_core.iam.constants import DepartmentType, UserRole
from ipc_core.iam.models import UserProfile


class UserProfileFilter(django_filters.FilterSet):
    department = django_filters.ChoiceFilter(choices=DepartmentType.choices)
    role = django_filters.ChoiceFilter(choices=UserRole.choices)
    is_active = django_filters.BooleanFilter()
    linked = django_filters.BooleanFilter(field_name="user", lookup_expr="isnull", exclude=True)

    class Meta:
        model = UserProfile
        fields = ["department", "role", "is_active", "linked"]
