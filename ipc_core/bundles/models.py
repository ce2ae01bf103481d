# ipc_core/bundles/models.py
from django.db import models

from ipc_core.bundles.constants import DischargeType, ShiftType
from ipc_core.common.models import UUIDModel
from ipc_core.iam.constants import DepartmentType


class ClabsiBundleEntry(UUIDModel):
    """
    One CLABSI maintenance-bundle check for a patient on one shift.

    (patient_id, entry_date, shift) is unique by service-level lookup; there is
    no database constraint. Admission / discharge data is repeated on every
    entry of a patient.
    """
    patient_id = models.CharField(max_length=64, db_index=True)

    admission_date = models.DateField()
    admission_shift = models.CharField(max_length=1, choices=ShiftType.choices)
    discharge_date = models.DateField(null=True, blank=True)
    discharge_shift = models.CharField(max_length=1, choices=ShiftType.choices, blank=True, default="")
    discharge_type = models.CharField(max_length=16, choices=DischargeType.choices, blank=True, default="")

    entry_date = models.DateField(db_index=True)
    shift = models.CharField(max_length=1, choices=ShiftType.choices)
    day_number = models.PositiveSmallIntegerField(default=1)

    skin_prep_2chg = models.BooleanField(default=False)
    dressing_change_daily = models.BooleanField(default=False)
    patency_lumens = models.BooleanField(default=False)
    hub_care_alcohol = models.BooleanField(default=False)
    iv_tubing_change_daily = models.BooleanField(default=False)

    compliance_score = models.PositiveSmallIntegerField(default=0)

    created_by = models.ForeignKey(
        "iam.UserProfile",
        on_delete=models.SET_NULL,
        related_name="clabsi_bundle_entries",
        null=True,
        blank=True,
    )
    department = models.CharField(max_length=32, choices=DepartmentType.choices, db_index=True)
    nurse_name = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "bundles_clabsi_entry"
        indexes = [
            models.Index(fields=["patient_id", "entry_date", "shift"], name="bundle_patient_shift_idx"),
            models.Index(fields=["department", "entry_date"], name="bundle_dept_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.patient_id} {self.entry_date} {self.shift}"
