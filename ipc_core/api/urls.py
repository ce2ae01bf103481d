# ipc_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from ipc_core.analytics.api.views import (
    DashboardStatsView,
    DepartmentBreakdownView,
    MonthlyTrendsView,
    PathogenBreakdownView,
    RecentSubmissionsView,
)
from ipc_core.audit.api.views import AuditEventViewSet
from ipc_core.bundles.api.views import ClabsiBundleEntryViewSet
from ipc_core.iam.api.auth import LoginView, LogoutView, RefreshView
from ipc_core.iam.api.me import ChangePasswordView, MeView
from ipc_core.iam.api.session import SessionBootstrapView
from ipc_core.iam.api.users import UserAccountViewSet
from ipc_core.surveillance.api.views import CautiViewSet, ClabsiViewSet, MdroViewSet, SsiCaseViewSet

router = DefaultRouter()

router.register(r"cauti", CautiViewSet, basename="cauti")
router.register(r"clabsi", ClabsiViewSet, basename="clabsi")
router.register(r"clabsi-bundle", ClabsiBundleEntryViewSet, basename="clabsi-bundle")
router.register(r"mdro", MdroViewSet, basename="mdro")
router.register(r"ssi", SsiCaseViewSet, basename="ssi")
router.register(r"users", UserAccountViewSet, basename="users")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

urlpatterns = [
    # Auth + /me + session bootstrap
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("me/password/", ChangePasswordView.as_view(), name="me-password"),
    path("session/bootstrap/", SessionBootstrapView.as_view(), name="session-bootstrap"),

    # Aggregations
    path("analytics/trends/", MonthlyTrendsView.as_view(), name="analytics-trends"),
    path("analytics/departments/", DepartmentBreakdownView.as_view(), name="analytics-departments"),
    path("analytics/pathogens/", PathogenBreakdownView.as_view(), name="analytics-pathogens"),
    path("dashboard/stats/", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("dashboard/recent/", RecentSubmissionsView.as_view(), name="dashboard-recent"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
