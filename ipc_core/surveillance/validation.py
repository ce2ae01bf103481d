# ipc_core/surveillance/validation.py
"""
Form validation entry point.

validate_submission() runs the schema for one form type and either returns a
normalized payload (stamped with the submitter) or a flat list of
(field, message) pairs. Nothing is written to the database here.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from rest_framework.settings import api_settings

from ipc_core.bundles.api.serializers import ClabsiBundleEntrySerializer
from ipc_core.iam.constants import FormType
from ipc_core.surveillance.api.serializers import (
    CautiSubmissionSerializer,
    ClabsiSubmissionSerializer,
    MdroSubmissionSerializer,
    SsiCaseSerializer,
)

FORM_SERIALIZERS = {
    FormType.CAUTI.value: CautiSubmissionSerializer,
    FormType.CLABSI.value: ClabsiSubmissionSerializer,
    FormType.CLABSI_BUNDLE.value: ClabsiBundleEntrySerializer,
    FormType.MDRO.value: MdroSubmissionSerializer,
    FormType.SSI.value: SsiCaseSerializer,
}

UNSUPPORTED_FORM_MSG = "Unsupported form type."
PROFILE_MISSING_MSG = "An active user profile is required to submit forms."


@dataclass(frozen=True)
class FormValidationResult:
    is_valid: bool
    errors: list[tuple[str, str]] = field(default_factory=list)
    payload: Optional[dict[str, Any]] = None


def flatten_errors(detail, prefix: str = "") -> list[tuple[str, str]]:
    """
    DRF error detail (nested dicts / lists) -> [(dotted.field, message), ...]
    """
    out: list[tuple[str, str]] = []
    if isinstance(detail, Mapping):
        for key, value in detail.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            out.extend(flatten_errors(value, name))
    elif isinstance(detail, (list, tuple)):
        for item in detail:
            out.extend(flatten_errors(item, prefix))
    else:
        out.append((prefix or api_settings.NON_FIELD_ERRORS_KEY, str(detail)))
    return out


def validate_submission(form_type, data, profile) -> FormValidationResult:
    serializer_class = FORM_SERIALIZERS.get(str(form_type))
    if serializer_class is None:
        return FormValidationResult(is_valid=False, errors=[("form_type", UNSUPPORTED_FORM_MSG)])

    if profile is None or not profile.is_active:
        return FormValidationResult(is_valid=False, errors=[(api_settings.NON_FIELD_ERRORS_KEY, PROFILE_MISSING_MSG)])

    serializer = serializer_class(data=data, context={"profile": profile})
    if not serializer.is_valid():
        return FormValidationResult(is_valid=False, errors=flatten_errors(serializer.errors))

    return FormValidationResult(is_valid=True, payload=serializer.build_payload(profile))
