# ipc_core/bundles/services.py

from __future__ import annotations

import logging
from typing import Optional

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction

from ipc_core.audit.services import AuditService
from ipc_core.bundles.compliance import is_after_discharge
from ipc_core.bundles.models import ClabsiBundleEntry
from ipc_core.iam.access import is_administrator
from ipc_core.iam.constants import FormType
from ipc_core.surveillance.services import SubmissionRejected
from ipc_core.surveillance.validation import validate_submission

logger = logging.getLogger(__name__)

ADMISSION_MISMATCH_MSG = "Admission data does not match existing entries for this patient."
DELETE_FORBIDDEN_MSG = "Only the nurse who recorded this entry or an administrator can delete it."
AFTER_DISCHARGE_MSG = "Entry date cannot be after discharge date."


class DuplicateBundleEntry(ValidationError):
    pass


class BundleService:
    """
    CLABSI bundle entry writes.

    Notes:
    - (patient_id, entry_date, shift) uniqueness is checked before insert; a
      duplicate never reaches the database.
    - Discharge data is written onto every entry of the patient.
    """

    @staticmethod
    def _entry_exists(*, patient_id: str, entry_date, shift: str) -> bool:
        return ClabsiBundleEntry.objects.filter(patient_id=patient_id, entry_date=entry_date, shift=shift).exists()

    @staticmethod
    @transaction.atomic
    def create_entry(*, data, profile, actor_user_id: Optional[int]) -> ClabsiBundleEntry:
        result = validate_submission(FormType.CLABSI_BUNDLE.value, data, profile)
        if not result.is_valid:
            raise SubmissionRejected(result.errors)

        payload = result.payload
        patient_id = payload["patient_id"]

        if BundleService._entry_exists(patient_id=patient_id, entry_date=payload["entry_date"], shift=payload["shift"]):
            raise DuplicateBundleEntry(f"Entry for {payload['shift']} shift on this date already exists.")

        first = ClabsiBundleEntry.objects.filter(patient_id=patient_id).order_by("created_at").first()
        if first is not None and (
            first.admission_date != payload["admission_date"] or first.admission_shift != payload["admission_shift"]
        ):
            raise SubmissionRejected([("admission_date", ADMISSION_MISMATCH_MSG)])

        # a recorded discharge is carried onto every later entry of the patient
        if first is not None and first.discharge_date is not None:
            if is_after_discharge(entry_date=payload["entry_date"], discharge_date=first.discharge_date):
                raise SubmissionRejected([("entry_date", AFTER_DISCHARGE_MSG)])
            payload.update(
                discharge_date=first.discharge_date,
                discharge_shift=first.discharge_shift,
                discharge_type=first.discharge_type,
            )

        entry = ClabsiBundleEntry.objects.create(**payload)

        AuditService.log(
            event_code="bundle.entry_created",
            entity_type="ClabsiBundleEntry",
            entity_id=entry.id,
            actor_user_id=actor_user_id,
            metadata={
                "patient_id": entry.patient_id,
                "entry_date": entry.entry_date.isoformat(),
                "shift": entry.shift,
                "compliance_score": entry.compliance_score,
            },
        )
        logger.info(
            "Bundle entry %s day %s shift %s: %s%%",
            entry.patient_id,
            entry.day_number,
            entry.shift,
            entry.compliance_score,
        )
        return entry

    @staticmethod
    @transaction.atomic
    def record_discharge(
        *,
        patient_id: str,
        discharge_date,
        discharge_shift: str,
        discharge_type: str,
        actor_user_id: Optional[int],
    ) -> int:
        entries = ClabsiBundleEntry.objects.select_for_update().filter(patient_id=patient_id)
        first = entries.order_by("entry_date").first()
        if first is None:
            raise ValidationError({"patient_id": f"No bundle entries found for patient {patient_id}."})

        if discharge_date < first.admission_date:
            raise ValidationError({"discharge_date": "Discharge date cannot be before admission date."})
        if entries.filter(entry_date__gt=discharge_date).exists():
            raise ValidationError({"discharge_date": "Entries exist after this discharge date."})

        updated = entries.update(
            discharge_date=discharge_date,
            discharge_shift=discharge_shift,
            discharge_type=discharge_type,
        )

        AuditService.log(
            event_code="bundle.discharge_recorded",
            entity_type="ClabsiBundleEntry",
            entity_id=first.id,
            actor_user_id=actor_user_id,
            metadata={
                "patient_id": patient_id,
                "discharge_date": discharge_date.isoformat(),
                "discharge_type": discharge_type,
                "entries": updated,
            },
        )
        return updated

    @staticmethod
    @transaction.atomic
    def delete_entry(*, entry: ClabsiBundleEntry, profile, actor_user_id: Optional[int]) -> None:
        if not (entry.created_by_id == profile.id or is_administrator(profile)):
            raise PermissionDenied(DELETE_FORBIDDEN_MSG)

        entry_id = entry.id
        meta = {"patient_id": entry.patient_id, "entry_date": entry.entry_date.isoformat(), "shift": entry.shift}
        entry.delete()

        AuditService.log(
            event_code="bundle.entry_deleted",
            entity_type="ClabsiBundleEntry",
            entity_id=entry_id,
            actor_user_id=actor_user_id,
            metadata=meta,
        )
