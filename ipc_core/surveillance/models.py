# ipc_core/surveillance/models.py
from django.db import models

from ipc_core.common.models import UUIDModel
from ipc_core.iam.constants import DepartmentType, ReviewStatus
from ipc_core.surveillance.constants import (
    Gender,
    MdrOrganismType,
    MdroOutcome,
    PrecautionType,
    SiteOfInfection,
    SsiPriority,
    SsiStatus,
    YesNo,
)


class SurveillanceRecord(UUIDModel):
    """
    Fields shared by every surveillance form: patient reference, department,
    submitter. Rows are created by form submission only.
    """
    form_number = models.CharField(max_length=32, blank=True, default="", db_index=True)

    patient_name = models.CharField(max_length=255)
    hospital_id = models.CharField(max_length=64, db_index=True)
    department = models.CharField(max_length=32, choices=DepartmentType.choices, db_index=True)

    submitted_by = models.ForeignKey(
        "iam.UserProfile",
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        abstract = True


class ReviewedRecord(SurveillanceRecord):
    """
    Review workflow: pending -> approved | rejected | requires_revision.
    requires_revision may be reviewed again; approved / rejected are final.
    """
    review_status = models.CharField(
        max_length=32,
        choices=ReviewStatus.choices,
        default=ReviewStatus.PENDING,
        db_index=True,
    )
    review_notes = models.TextField(blank=True, default="")
    reviewed_by = models.ForeignKey(
        "iam.UserProfile",
        on_delete=models.SET_NULL,
        related_name="+",
        null=True,
        blank=True,
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True


class CautiSurveillance(ReviewedRecord):
    age = models.PositiveIntegerField(default=0)
    gender = models.CharField(max_length=16, choices=Gender.choices, blank=True, default="")
    ward_bed_number = models.CharField(max_length=64)

    catheter_insertion_date = models.DateField()
    catheter_removal_date = models.DateField(null=True, blank=True)
    reason_for_catheter = models.CharField(max_length=255, blank=True, default="")
    catheter_type = models.CharField(max_length=128, blank=True, default="")

    surveillance_date = models.DateField(db_index=True)
    event_date = models.DateField(null=True, blank=True)

    symptoms = models.JSONField(default=dict)
    laboratory_findings = models.JSONField(default=dict)

    meets_cauti_criteria = models.BooleanField(default=False)
    infection_preventable = models.BooleanField(null=True, blank=True)
    contributing_factors = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "surveillance_cauti"
        indexes = [
            models.Index(fields=["department", "created_at"], name="cauti_dept_created_idx"),
        ]


class ClabsiSurveillance(ReviewedRecord):
    age = models.PositiveIntegerField(default=0)
    gender = models.CharField(max_length=16, choices=Gender.choices, blank=True, default="")
    ward_bed_number = models.CharField(max_length=64)

    line_insertion_date = models.DateField()
    line_removal_date = models.DateField(null=True, blank=True)
    line_type = models.CharField(max_length=128)
    insertion_site = models.CharField(max_length=128)
    number_of_lumens = models.PositiveSmallIntegerField(default=0)
    reason_for_line = models.CharField(max_length=255, blank=True, default="")

    surveillance_date = models.DateField(db_index=True)
    bloodstream_infection_date = models.DateField(null=True, blank=True)

    symptoms = models.JSONField(default=dict)
    laboratory_findings = models.JSONField(default=dict)

    meets_clabsi_criteria = models.BooleanField(default=False)
    secondary_bsi = models.BooleanField(default=False)
    infection_preventable = models.BooleanField(null=True, blank=True)
    contributing_factors = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "surveillance_clabsi"
        indexes = [
            models.Index(fields=["department", "created_at"], name="clabsi_dept_created_idx"),
        ]


class MdroSurveillance(ReviewedRecord):
    age = models.PositiveIntegerField(default=0)
    sex = models.CharField(max_length=16, choices=Gender.choices)
    ward_unit = models.CharField(max_length=128)
    consultant_in_charge = models.CharField(max_length=255)
    admission_date = models.DateField()
    diagnosis = models.TextField()

    site_of_infection = models.CharField(max_length=32, choices=SiteOfInfection.choices)
    sample_type = models.CharField(max_length=128)
    sample_collection_date = models.DateField()
    report_date = models.DateField(db_index=True)
    pathogen_isolated = models.CharField(max_length=255, db_index=True)
    antibiotic_resistant_to = models.TextField()
    antibiotic_sensitive_to = models.TextField()
    mdr_organism_type = models.CharField(max_length=16, choices=MdrOrganismType.choices)

    empiric_antibiotics = models.TextField(blank=True, default="")
    empiric_antibiotics_start_date = models.DateField(null=True, blank=True)
    culture_specific_antibiotics = models.TextField(blank=True, default="")
    date_modified = models.DateField(null=True, blank=True)

    isolation_implemented = models.CharField(max_length=8, choices=YesNo.choices, blank=True, default="")
    isolation_implementation_date = models.DateField(null=True, blank=True)
    type_of_precaution = models.CharField(max_length=16, choices=PrecautionType.choices, blank=True, default="")

    outcome = models.CharField(max_length=64, choices=MdroOutcome.choices)
    outcome_date = models.DateField()

    reported_by = models.CharField(max_length=255)
    designation = models.CharField(max_length=128, blank=True, default="")
    contact_info = models.CharField(max_length=255, blank=True, default="")
    report_submission_date = models.DateField()

    risk_factors = models.JSONField(default=dict)

    class Meta:
        db_table = "surveillance_mdro"
        indexes = [
            models.Index(fields=["department", "created_at"], name="mdro_dept_created_idx"),
        ]


class SsiCase(SurveillanceRecord):
    """
    SSI watchlist case. Tracks its own clinical status instead of the review workflow.
    """
    procedure_name = models.CharField(max_length=255)
    procedure_date = models.DateField()
    surgeon_name = models.CharField(max_length=255, blank=True, default="")
    suspicion_date = models.DateField(db_index=True)

    priority = models.CharField(max_length=8, choices=SsiPriority.choices, default=SsiPriority.MEDIUM, db_index=True)
    current_status = models.CharField(
        max_length=32,
        choices=SsiStatus.choices,
        default=SsiStatus.SUSPECTED,
        db_index=True,
    )
    status_notes = models.TextField(blank=True, default="")

    class Meta:
        db_table = "surveillance_ssi_case"
        indexes = [
            models.Index(fields=["current_status", "priority", "suspicion_date"], name="ssi_watchlist_idx"),
        ]
