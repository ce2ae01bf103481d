# ipc_core/surveillance/api/serializers.py
from __future__ import annotations

from collections.abc import Mapping

from django.utils import timezone
from rest_framework import serializers
from rest_framework.settings import api_settings

from ipc_core.iam.constants import SURGICAL_DEPARTMENTS, DepartmentType, ReviewStatus
from ipc_core.surveillance.constants import (
    CAUTI_LAB_FLAGS,
    CAUTI_SYMPTOMS,
    Gender,
    MdrOrganismType,
    MdroOutcome,
    PrecautionType,
    SiteOfInfection,
    SsiPriority,
    SsiStatus,
    YesNo,
)
from ipc_core.surveillance.models import CautiSurveillance, ClabsiSurveillance, MdroSurveillance, SsiCase

SYMPTOM_REQUIRED_MSG = "Please select at least one sign or symptom."
LAB_FINDING_REQUIRED_MSG = "Please select at least one laboratory finding."

AGE_MAX = 150
# PositiveSmallIntegerField column
LUMENS_MAX = 32767

RECORD_READ_ONLY = [
    "id",
    "form_number",
    "submitted_by",
    "is_active",
    "created_at",
    "updated_at",
]
REVIEW_READ_ONLY = ["review_status", "review_notes", "reviewed_by", "reviewed_at"]


class CoercedIntegerField(serializers.Field):
    """
    Lenient integer input: blank, null or malformed values become 0.
    Negative numbers and values above max_value are rejected.
    """
    default_error_messages = {
        "negative": "Value cannot be negative.",
        "max_value": "Ensure this value is less than or equal to {max_value}.",
    }

    def __init__(self, *, max_value: int, **kwargs):
        self.max_value = max_value
        kwargs.setdefault("required", False)
        kwargs.setdefault("default", 0)
        super().__init__(**kwargs)

    def validate_empty_values(self, data):
        if data is None:
            return (True, 0)
        return super().validate_empty_values(data)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return 0
        try:
            value = int(float(str(data).strip()))
        except (TypeError, ValueError, OverflowError):
            return 0
        if value < 0:
            self.fail("negative")
        if value > self.max_value:
            self.fail("max_value", max_value=self.max_value)
        return value

    def to_representation(self, value):
        return int(value or 0)


class SubmissionSerializer(serializers.ModelSerializer):
    """
    Base for form submissions.

    build_payload() stamps the validated data with the submitter; forms with
    department_from_profile take the department from the profile instead of input.
    """
    department_from_profile = False
    review_tracked = True

    # (field, checklist keys, message) checked against the raw input so they
    # still report when other fields fail.
    checklist_rules: tuple = ()

    def _any_checked(self, field: str, keys, raw_value) -> bool:
        # same coercion as the stored checklist
        try:
            checklist = self.fields[field].run_validation(raw_value)
        except serializers.ValidationError:
            return False
        return isinstance(checklist, Mapping) and any(checklist.get(k) is True for k in keys)

    def to_internal_value(self, data):
        errors = {}
        attrs = None
        try:
            attrs = super().to_internal_value(data)
        except serializers.ValidationError as exc:
            if isinstance(exc.detail, Mapping):
                errors.update(exc.detail)
            else:
                errors[api_settings.NON_FIELD_ERRORS_KEY] = exc.detail

        raw = data if isinstance(data, Mapping) else {}
        for field, keys, message in self.checklist_rules:
            if field not in errors and not self._any_checked(field, keys, raw.get(field)):
                errors[field] = [message]

        if errors:
            raise serializers.ValidationError(errors)
        return attrs

    def build_payload(self, profile) -> dict:
        payload = dict(self.validated_data)
        payload["submitted_by"] = profile
        if self.department_from_profile or not payload.get("department"):
            payload["department"] = profile.department
        if self.review_tracked:
            payload["review_status"] = ReviewStatus.PENDING
        return payload


# -------------------------
# CAUTI
# -------------------------
class CautiSymptomsSerializer(serializers.Serializer):
    fever = serializers.BooleanField(default=False)
    rigors = serializers.BooleanField(default=False)
    hypotension = serializers.BooleanField(default=False)
    confusion_with_leukocytosis = serializers.BooleanField(default=False)
    costovertebral_pain = serializers.BooleanField(default=False)
    suprapubic_tenderness = serializers.BooleanField(default=False)
    testes_epididymis_prostate_pain = serializers.BooleanField(default=False)
    purulent_discharge = serializers.BooleanField(default=False)


class CautiLabFindingsSerializer(serializers.Serializer):
    clean_catch_voided = serializers.BooleanField(default=False)
    straight_catheter_specimen = serializers.BooleanField(default=False)
    iuc_specimen = serializers.BooleanField(default=False)
    culture_result = serializers.CharField(required=False, allow_blank=True, default="")
    organism_identified = serializers.CharField(required=False, allow_blank=True, default="")
    cfu_count = serializers.CharField(required=False, allow_blank=True, default="")
    antibiotic_sensitivity = serializers.CharField(required=False, allow_blank=True, default="")


class CautiSubmissionSerializer(SubmissionSerializer):
    department_from_profile = True
    checklist_rules = (
        ("symptoms", CAUTI_SYMPTOMS, SYMPTOM_REQUIRED_MSG),
        ("laboratory_findings", CAUTI_LAB_FLAGS, LAB_FINDING_REQUIRED_MSG),
    )

    age = CoercedIntegerField(max_value=AGE_MAX, error_messages={"negative": "Age cannot be negative"})
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True, allow_null=True)
    surveillance_date = serializers.DateField(default=timezone.localdate)
    symptoms = CautiSymptomsSerializer()
    laboratory_findings = CautiLabFindingsSerializer()

    class Meta:
        model = CautiSurveillance
        fields = [
            *RECORD_READ_ONLY,
            *REVIEW_READ_ONLY,
            "patient_name",
            "hospital_id",
            "department",
            "age",
            "gender",
            "ward_bed_number",
            "catheter_insertion_date",
            "catheter_removal_date",
            "reason_for_catheter",
            "catheter_type",
            "surveillance_date",
            "event_date",
            "symptoms",
            "laboratory_findings",
            "meets_cauti_criteria",
            "infection_preventable",
            "contributing_factors",
            "notes",
        ]
        read_only_fields = [*RECORD_READ_ONLY, *REVIEW_READ_ONLY, "department"]

    def validate_gender(self, value):
        return value or ""

    def validate(self, attrs):
        inserted = attrs.get("catheter_insertion_date")
        removed = attrs.get("catheter_removal_date")
        if inserted and removed and removed < inserted:
            raise serializers.ValidationError(
                {"catheter_removal_date": "Removal date cannot be before insertion date."}
            )
        return attrs


# -------------------------
# CLABSI
# -------------------------
class ClabsiSymptomsSerializer(serializers.Serializer):
    fever = serializers.BooleanField(default=False)
    chills = serializers.BooleanField(default=False)
    hypotension = serializers.BooleanField(default=False)
    altered_mental_status = serializers.BooleanField(default=False)
    line_site_inflammation = serializers.BooleanField(default=False)
    line_site_purulence = serializers.BooleanField(default=False)


class ClabsiLabFindingsSerializer(serializers.Serializer):
    blood_culture_date = serializers.DateField(required=False, allow_null=True, default=None)
    organism_identified = serializers.CharField(required=False, allow_blank=True, default="")
    culture_source = serializers.CharField(required=False, allow_blank=True, default="")
    antibiotic_sensitivity = serializers.CharField(required=False, allow_blank=True, default="")
    line_tip_culture = serializers.BooleanField(default=False)
    line_tip_result = serializers.CharField(required=False, allow_blank=True, default="")

    def to_internal_value(self, data):
        if isinstance(data, Mapping) and data.get("blood_culture_date") == "":
            data = {**data, "blood_culture_date": None}
        return super().to_internal_value(data)

    def validate_blood_culture_date(self, value):
        # stored inside a JSON column
        return value.isoformat() if value else None


class ClabsiSubmissionSerializer(SubmissionSerializer):
    patient_name = serializers.CharField(min_length=3, max_length=255)
    age = CoercedIntegerField(max_value=AGE_MAX, error_messages={"negative": "Age cannot be negative"})
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True, allow_null=True)
    number_of_lumens = CoercedIntegerField(
        max_value=LUMENS_MAX,
        error_messages={"negative": "Number of lumens cannot be negative"},
    )
    symptoms = ClabsiSymptomsSerializer()
    laboratory_findings = ClabsiLabFindingsSerializer()

    class Meta:
        model = ClabsiSurveillance
        fields = [
            *RECORD_READ_ONLY,
            *REVIEW_READ_ONLY,
            "patient_name",
            "hospital_id",
            "department",
            "age",
            "gender",
            "ward_bed_number",
            "line_insertion_date",
            "line_removal_date",
            "line_type",
            "insertion_site",
            "number_of_lumens",
            "reason_for_line",
            "surveillance_date",
            "bloodstream_infection_date",
            "symptoms",
            "laboratory_findings",
            "meets_clabsi_criteria",
            "secondary_bsi",
            "infection_preventable",
            "contributing_factors",
            "notes",
        ]
        read_only_fields = [*RECORD_READ_ONLY, *REVIEW_READ_ONLY]

    def validate_gender(self, value):
        return value or ""

    def validate(self, attrs):
        inserted = attrs.get("line_insertion_date")
        removed = attrs.get("line_removal_date")
        if inserted and removed and removed < inserted:
            raise serializers.ValidationError({"line_removal_date": "Removal date cannot be before insertion date."})
        return attrs


# -------------------------
# MDRO
# -------------------------
class MdroSubmissionSerializer(SubmissionSerializer):
    full_name = serializers.CharField(source="patient_name", min_length=3, max_length=255)
    age = CoercedIntegerField(max_value=AGE_MAX, error_messages={"negative": "Age cannot be negative"})
    sex = serializers.ChoiceField(choices=Gender.choices)
    department = serializers.ChoiceField(choices=DepartmentType.choices, required=False)
    site_of_infection = serializers.ChoiceField(choices=SiteOfInfection.choices)
    mdr_organism_type = serializers.ChoiceField(choices=MdrOrganismType.choices)
    outcome = serializers.ChoiceField(choices=MdroOutcome.choices)
    isolation_implemented = serializers.ChoiceField(choices=YesNo.choices, required=False, allow_blank=True)
    type_of_precaution = serializers.ChoiceField(choices=PrecautionType.choices, required=False, allow_blank=True)
    report_submission_date = serializers.DateField(default=timezone.localdate)
    risk_factors = serializers.DictField(required=False, default=dict)

    class Meta:
        model = MdroSurveillance
        fields = [
            *RECORD_READ_ONLY,
            *REVIEW_READ_ONLY,
            "hospital_id",
            "full_name",
            "age",
            "sex",
            "department",
            "ward_unit",
            "consultant_in_charge",
            "admission_date",
            "diagnosis",
            "site_of_infection",
            "sample_type",
            "sample_collection_date",
            "report_date",
            "pathogen_isolated",
            "antibiotic_resistant_to",
            "antibiotic_sensitive_to",
            "mdr_organism_type",
            "empiric_antibiotics",
            "empiric_antibiotics_start_date",
            "culture_specific_antibiotics",
            "date_modified",
            "isolation_implemented",
            "isolation_implementation_date",
            "type_of_precaution",
            "outcome",
            "outcome_date",
            "reported_by",
            "designation",
            "contact_info",
            "report_submission_date",
            "risk_factors",
        ]
        read_only_fields = [*RECORD_READ_ONLY, *REVIEW_READ_ONLY]

    def validate(self, attrs):
        admitted = attrs.get("admission_date")
        collected = attrs.get("sample_collection_date")
        if admitted and collected and collected < admitted:
            raise serializers.ValidationError(
                {"sample_collection_date": "Sample collection date cannot be before admission date."}
            )
        return attrs


# -------------------------
# SSI
# -------------------------
class SsiCaseSerializer(SubmissionSerializer):
    review_tracked = False

    patient_name = serializers.CharField(min_length=3, max_length=255)
    procedure_name = serializers.CharField(min_length=3, max_length=255)
    department = serializers.ChoiceField(
        choices=[(d.value, d.label) for d in SURGICAL_DEPARTMENTS],
        error_messages={"invalid_choice": "Please select a surgical department."},
    )
    priority = serializers.ChoiceField(choices=SsiPriority.choices, default=SsiPriority.MEDIUM)
    suspicion_date = serializers.DateField(default=timezone.localdate)

    class Meta:
        model = SsiCase
        fields = [
            *RECORD_READ_ONLY,
            "patient_name",
            "hospital_id",
            "department",
            "procedure_name",
            "procedure_date",
            "surgeon_name",
            "suspicion_date",
            "priority",
            "current_status",
            "status_notes",
        ]
        read_only_fields = [*RECORD_READ_ONLY, "current_status", "status_notes"]

    def build_payload(self, profile) -> dict:
        payload = super().build_payload(profile)
        payload["current_status"] = SsiStatus.SUSPECTED
        return payload


# -------------------------
# Workflow actions
# -------------------------
class ReviewRequestSerializer(serializers.Serializer):
    review_status = serializers.ChoiceField(
        choices=[
            (s.value, s.label)
            for s in (ReviewStatus.APPROVED, ReviewStatus.REJECTED, ReviewStatus.REQUIRES_REVISION)
        ]
    )
    review_notes = serializers.CharField(required=False, allow_blank=True, default="")


class SsiStatusUpdateSerializer(serializers.Serializer):
    current_status = serializers.ChoiceField(choices=SsiStatus.choices)
    status_notes = serializers.CharField(required=False, allow_blank=True, default="")
