from __future__ import annotations

from rest_framework import serializers

from ipc_core.analytics.selectors import default_range
from ipc_core.surveillance.registry import REGISTRY


class AggregationQuerySerializer(serializers.Serializer):
    """
    Query params for the aggregation endpoints. Missing dates default to the
    last year up to today.
    """
    form_type = serializers.ChoiceField(choices=sorted(REGISTRY.keys()))
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        default_start, default_end = default_range()
        attrs.setdefault("end_date", default_end)
        attrs.setdefault("start_date", default_start)
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError({"start_date": "Start date must be on or before end date."})
        return attrs


class MonthlyTrendSerializer(serializers.Serializer):
    month = serializers.CharField()
    cases = serializers.IntegerField()


class DepartmentBreakdownSerializer(serializers.Serializer):
    department = serializers.CharField()
    department_name = serializers.CharField()
    cases = serializers.IntegerField()


class PathogenBreakdownSerializer(serializers.Serializer):
    pathogen = serializers.CharField()
    cases = serializers.IntegerField()


class DashboardStatsSerializer(serializers.Serializer):
    cauti_cases = serializers.IntegerField()
    clabsi_cases = serializers.IntegerField()
    ssi_cases = serializers.IntegerField()
    mdro_cases = serializers.IntegerField()
    this_month = serializers.IntegerField()
    total_patients = serializers.IntegerField()


class RecentSubmissionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    form_id = serializers.CharField()
    form_type = serializers.CharField()
    patient_name = serializers.CharField()
    department = serializers.CharField()
    ward_bed_number = serializers.CharField()
    submission_date = serializers.DateField(allow_null=True)
    review_status = serializers.CharField()
    submitted_by = serializers.CharField()
    created_at = serializers.DateTimeField()
