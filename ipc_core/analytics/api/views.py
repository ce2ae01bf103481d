# ipc_core/analytics/api/views.py

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from ipc_core.analytics import selectors
from ipc_core.analytics.api.serializers import (
    AggregationQuerySerializer,
    DashboardStatsSerializer,
    DepartmentBreakdownSerializer,
    MonthlyTrendSerializer,
    PathogenBreakdownSerializer,
    RecentSubmissionSerializer,
)
from ipc_core.common.permissions import HasActiveProfile
from ipc_core.iam.access import can_access_form
from ipc_core.iam.session import get_session_context
from ipc_core.surveillance.registry import get_registration

AGGREGATION_PARAMS = [
    OpenApiParameter(name="form_type", type=OpenApiTypes.STR, location=OpenApiParameter.QUERY, required=True),
    OpenApiParameter(name="start_date", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False),
    OpenApiParameter(name="end_date", type=OpenApiTypes.DATE, location=OpenApiParameter.QUERY, required=False),
]


class AggregationView(APIView):
    """
    GET ?form_type=CAUTI&start_date=YYYY-MM-DD&end_date=YYYY-MM-DD
    """
    permission_classes = [HasActiveProfile]
    aggregate = None
    row_serializer = None

    def get(self, request):
        ser = AggregationQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        params = ser.validated_data

        profile = get_session_context(request).profile
        if not can_access_form(profile, params["form_type"]):
            raise PermissionDenied("You do not have permission to access this form.")

        rows = type(self).aggregate(
            registration=get_registration(params["form_type"]),
            start=params["start_date"],
            end=params["end_date"],
            profile=profile,
        )
        return Response(self.row_serializer(rows, many=True).data)


class MonthlyTrendsView(AggregationView):
    aggregate = staticmethod(selectors.monthly_trends)
    row_serializer = MonthlyTrendSerializer

    @extend_schema(parameters=AGGREGATION_PARAMS, responses={200: MonthlyTrendSerializer(many=True)}, tags=["Analytics"])
    def get(self, request):
        return super().get(request)


class DepartmentBreakdownView(AggregationView):
    aggregate = staticmethod(selectors.department_breakdown)
    row_serializer = DepartmentBreakdownSerializer

    @extend_schema(
        parameters=AGGREGATION_PARAMS,
        responses={200: DepartmentBreakdownSerializer(many=True)},
        tags=["Analytics"],
    )
    def get(self, request):
        return super().get(request)


class PathogenBreakdownView(AggregationView):
    aggregate = staticmethod(selectors.pathogen_breakdown)
    row_serializer = PathogenBreakdownSerializer

    @extend_schema(
        parameters=AGGREGATION_PARAMS,
        responses={200: PathogenBreakdownSerializer(many=True)},
        tags=["Analytics"],
    )
    def get(self, request):
        return super().get(request)


class DashboardStatsView(APIView):
    permission_classes = [HasActiveProfile]

    @extend_schema(responses={200: DashboardStatsSerializer}, tags=["Analytics"])
    def get(self, request):
        data = selectors.dashboard_stats(profile=get_session_context(request).profile)
        return Response(DashboardStatsSerializer(data).data)


class RecentSubmissionsView(APIView):
    permission_classes = [HasActiveProfile]
    max_limit = 50

    @extend_schema(
        parameters=[OpenApiParameter(name="limit", type=OpenApiTypes.INT, location=OpenApiParameter.QUERY, required=False)],
        responses={200: RecentSubmissionSerializer(many=True)},
        tags=["Analytics"],
    )
    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", 10))
        except ValueError:
            limit = 10
        limit = max(1, min(limit, self.max_limit))

        rows = selectors.recent_submissions(profile=get_session_context(request).profile, limit=limit)
        return Response(RecentSubmissionSerializer(rows, many=True).data)
