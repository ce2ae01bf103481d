# ipc_core/bundles/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from ipc_core.bundles.compliance import compliance_score, day_number, is_admission_shift, is_after_discharge
from ipc_core.bundles.constants import ADMISSION_COMPONENT, DischargeType, ShiftType
from ipc_core.bundles.models import ClabsiBundleEntry


class ClabsiBundleEntrySerializer(serializers.ModelSerializer):
    """
    Bundle entry submission. day_number and compliance_score are derived here;
    department and nurse name come from the submitting profile.
    """
    patient_id = serializers.CharField(max_length=64)
    discharge_shift = serializers.ChoiceField(choices=ShiftType.choices, required=False, allow_blank=True)
    discharge_type = serializers.ChoiceField(choices=DischargeType.choices, required=False, allow_blank=True)

    class Meta:
        model = ClabsiBundleEntry
        fields = [
            "id",
            "patient_id",
            "admission_date",
            "admission_shift",
            "discharge_date",
            "discharge_shift",
            "discharge_type",
            "entry_date",
            "shift",
            "day_number",
            "skin_prep_2chg",
            "dressing_change_daily",
            "patency_lumens",
            "hub_care_alcohol",
            "iv_tubing_change_daily",
            "compliance_score",
            "created_by",
            "department",
            "nurse_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "day_number",
            "compliance_score",
            "created_by",
            "department",
            "nurse_name",
            "created_at",
            "updated_at",
        ]

    def validate_patient_id(self, value):
        value = value.strip().upper()
        if not value:
            raise serializers.ValidationError("Patient ID is required.")
        return value

    def validate(self, attrs):
        admission_date = attrs["admission_date"]
        entry_date = attrs["entry_date"]
        discharge_date = attrs.get("discharge_date")

        if entry_date < admission_date:
            raise serializers.ValidationError({"entry_date": "Entry date cannot be before admission date."})
        if discharge_date and discharge_date < admission_date:
            raise serializers.ValidationError({"discharge_date": "Discharge date cannot be before admission date."})
        if is_after_discharge(entry_date=entry_date, discharge_date=discharge_date):
            raise serializers.ValidationError({"entry_date": "Entry date cannot be after discharge date."})

        if not is_admission_shift(
            entry_date=entry_date,
            shift=attrs["shift"],
            admission_date=admission_date,
            admission_shift=attrs["admission_shift"],
        ):
            attrs[ADMISSION_COMPONENT] = False

        day = day_number(admission_date, entry_date)
        attrs["day_number"] = day
        attrs["compliance_score"] = compliance_score(attrs, day=day)
        return attrs

    def build_payload(self, profile) -> dict:
        payload = dict(self.validated_data)
        payload["created_by"] = profile
        payload["department"] = profile.department
        payload["nurse_name"] = profile.full_name
        return payload


class DischargeRequestSerializer(serializers.Serializer):
    patient_id = serializers.CharField(max_length=64)
    discharge_date = serializers.DateField()
    discharge_shift = serializers.ChoiceField(choices=ShiftType.choices)
    discharge_type = serializers.ChoiceField(choices=DischargeType.choices)

    def validate_patient_id(self, value):
        return value.strip().upper()


class DischargeResponseSerializer(serializers.Serializer):
    patient_id = serializers.CharField()
    updated = serializers.IntegerField()


class PatientOverviewSerializer(serializers.Serializer):
    patient_id = serializers.CharField()
    admission_date = serializers.DateField()
    admission_shift = serializers.CharField()
    discharge_date = serializers.DateField(allow_null=True)
    discharge_shift = serializers.CharField(allow_blank=True)
    discharge_type = serializers.CharField(allow_blank=True)
    total_entries = serializers.IntegerField()
    overall_compliance = serializers.IntegerField()
    is_active = serializers.BooleanField()


class BundleStatsSerializer(serializers.Serializer):
    total_cases = serializers.IntegerField()
    active_cases = serializers.IntegerField()
    completed_cases = serializers.IntegerField()
    average_compliance = serializers.IntegerField()
    this_month_entries = serializers.IntegerField()
    low_compliance_cases = serializers.IntegerField()
    perfect_compliance_cases = serializers.IntegerField()


class ComponentComplianceSerializer(serializers.Serializer):
    completed = serializers.IntegerField()
    total = serializers.IntegerField()
    percentage = serializers.IntegerField()


class ComplianceBreakdownSerializer(serializers.Serializer):
    skin_prep = ComponentComplianceSerializer()
    dressing_change = ComponentComplianceSerializer()
    patency_check = ComponentComplianceSerializer()
    hub_care = ComponentComplianceSerializer()
    iv_tubing_change = ComponentComplianceSerializer()
