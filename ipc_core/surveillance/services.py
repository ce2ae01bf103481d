# ipc_core/surveillance/services.py

from __future__ import annotations

import logging
import uuid
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from ipc_core.audit.services import AuditService
from ipc_core.iam.constants import ReviewStatus
from ipc_core.surveillance.constants import SSI_OPEN_STATUSES
from ipc_core.surveillance.models import SsiCase
from ipc_core.surveillance.registry import get_registration
from ipc_core.surveillance.validation import UNSUPPORTED_FORM_MSG, validate_submission

logger = logging.getLogger(__name__)

REVIEWABLE_STATUSES = (ReviewStatus.PENDING.value, ReviewStatus.REQUIRES_REVISION.value)
REVIEW_FINALIZED_MSG = "This submission has already been reviewed and can no longer change."
SSI_CLOSED_MSG = "This SSI case is closed and its status can no longer change."


class SubmissionRejected(ValidationError):
    """
    Carries the (field, message) pairs from the form validator.
    """

    def __init__(self, field_errors: list[tuple[str, str]]):
        self.field_errors = list(field_errors)
        super().__init__("Submission failed validation.", code="invalid")


def make_form_number(prefix: str, record_id: uuid.UUID, on_date=None) -> str:
    on_date = on_date or timezone.localdate()
    return f"{prefix}-{on_date:%Y%m%d}-{record_id.hex[:8].upper()}"


class SurveillanceService:
    """
    Write operations for surveillance records.

    Notes:
    - Submission validates first; nothing is inserted on failure.
    - Review is one-directional: pending / requires_revision -> approved | rejected | requires_revision.
    - SSI cases carry their own status instead of review; closed statuses are final.
    """

    @staticmethod
    @transaction.atomic
    def submit(*, form_type, data, profile, actor_user_id: Optional[int]):
        registration = get_registration(form_type)
        if registration is None:
            raise SubmissionRejected([("form_type", UNSUPPORTED_FORM_MSG)])

        result = validate_submission(registration.form_type, data, profile)
        if not result.is_valid:
            logger.info(
                "Rejected %s submission from profile %s: %s",
                registration.form_type,
                getattr(profile, "id", None),
                [f for f, _ in result.errors],
            )
            raise SubmissionRejected(result.errors)

        record_id = uuid.uuid4()
        record = registration.model.objects.create(
            id=record_id,
            form_number=make_form_number(registration.prefix, record_id),
            **result.payload,
        )

        AuditService.log(
            event_code=f"{registration.prefix.lower()}.submitted",
            entity_type=registration.model.__name__,
            entity_id=record.id,
            actor_user_id=actor_user_id,
            metadata={"form_number": record.form_number, "department": record.department},
        )
        logger.info("%s submitted: %s (%s)", registration.form_type, record.form_number, record.department)
        return record

    @staticmethod
    @transaction.atomic
    def review(*, record, review_status: str, review_notes: str, reviewer, actor_user_id: Optional[int]):
        record = type(record).objects.select_for_update().get(pk=record.pk)

        if record.review_status not in REVIEWABLE_STATUSES:
            raise ValidationError(REVIEW_FINALIZED_MSG)

        previous = record.review_status
        record.review_status = review_status
        record.review_notes = review_notes or ""
        record.reviewed_by = reviewer
        record.reviewed_at = timezone.now()
        record.save(update_fields=["review_status", "review_notes", "reviewed_by", "reviewed_at", "updated_at"])

        AuditService.log(
            event_code="surveillance.reviewed",
            entity_type=type(record).__name__,
            entity_id=record.id,
            actor_user_id=actor_user_id,
            metadata={"from": previous, "to": review_status, "form_number": record.form_number},
        )
        logger.info("%s reviewed: %s -> %s", record.form_number, previous, review_status)
        return record

    @staticmethod
    @transaction.atomic
    def update_ssi_status(*, case: SsiCase, current_status: str, status_notes: str, actor_user_id: Optional[int]):
        case = SsiCase.objects.select_for_update().get(pk=case.pk)

        if case.current_status not in SSI_OPEN_STATUSES:
            raise ValidationError(SSI_CLOSED_MSG)

        previous = case.current_status
        case.current_status = current_status
        if status_notes:
            case.status_notes = status_notes
        case.save(update_fields=["current_status", "status_notes", "updated_at"])

        AuditService.log(
            event_code="ssi.status_changed",
            entity_type="SsiCase",
            entity_id=case.id,
            actor_user_id=actor_user_id,
            metadata={"from": previous, "to": current_status},
        )
        return case
