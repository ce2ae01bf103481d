# ipc_core/surveillance/registry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.db import models

from ipc_core.iam.constants import FormType
from ipc_core.surveillance.models import CautiSurveillance, ClabsiSurveillance, MdroSurveillance, SsiCase


@dataclass(frozen=True)
class FormRegistration:
    """
    Fixed per-form metadata. Aggregation and listing read table and column
    names from here, never from request input.
    """
    form_type: str
    model: type[models.Model]
    prefix: str
    date_field: str
    department_field: str = "department"
    pathogen_field: Optional[str] = None
    review_tracked: bool = True


REGISTRY: dict[str, FormRegistration] = {
    FormType.CAUTI.value: FormRegistration(
        form_type=FormType.CAUTI.value,
        model=CautiSurveillance,
        prefix="CAUTI",
        date_field="surveillance_date",
        pathogen_field="laboratory_findings__organism_identified",
    ),
    FormType.CLABSI.value: FormRegistration(
        form_type=FormType.CLABSI.value,
        model=ClabsiSurveillance,
        prefix="CLABSI",
        date_field="surveillance_date",
        pathogen_field="laboratory_findings__organism_identified",
    ),
    FormType.MDRO.value: FormRegistration(
        form_type=FormType.MDRO.value,
        model=MdroSurveillance,
        prefix="MDRO",
        date_field="report_submission_date",
        pathogen_field="pathogen_isolated",
    ),
    FormType.SSI.value: FormRegistration(
        form_type=FormType.SSI.value,
        model=SsiCase,
        prefix="SSI",
        date_field="suspicion_date",
        review_tracked=False,
    ),
}


def get_registration(form_type) -> FormRegistration | None:
    return REGISTRY.get(str(form_type))
