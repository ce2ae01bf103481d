# ipc_core/iam/access.py
"""
Form access resolution.

A non-privileged profile may open a form type only when BOTH its role and its
department list that form type. ADMIN / IPC_FOCAL / IPC_OFFICER skip the check.

The matrix below is the single source of truth; the RolePermission and
DepartmentPermission tables are seeded from it (manage.py ensure_form_permissions).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from ipc_core.iam.constants import (
    CROSS_DEPARTMENT_ROLES,
    FULL_ACCESS_ROLES,
    REVIEWER_ROLES,
    DepartmentType as D,
    FormType as F,
    UserRole as R,
)

ALL_FORMS = (F.CAUTI, F.CLABSI, F.SSI, F.VAP, F.HAP, F.MDRO, F.C_DIFF, F.MRSA, F.VRE, F.ESBL)
LAB_FORMS = (F.MDRO, F.C_DIFF, F.MRSA, F.VRE, F.ESBL)
SURGICAL_FORMS = (F.SSI, F.CAUTI, F.MDRO)
CRITICAL_CARE_FORMS = (F.CAUTI, F.CLABSI, F.VAP, F.MDRO)

ROLE_FORMS: dict[str, tuple[str, ...]] = {
    R.ADMIN: ALL_FORMS,
    R.IPC_FOCAL: ALL_FORMS,
    R.IPC_OFFICER: ALL_FORMS,
    R.IPC_COMMITTEE: ALL_FORMS,
    R.DEPARTMENT_HEAD: (F.CAUTI, F.CLABSI, F.SSI, F.VAP, F.HAP, F.MDRO),
    R.CONSULTANT: (F.CAUTI, F.CLABSI, F.SSI, F.VAP, F.HAP, F.MDRO),
    R.MEDICAL_OFFICER: (F.CAUTI, F.CLABSI, F.SSI, F.MDRO),
    R.STAFF_NURSE: (F.CAUTI, F.CLABSI, F.VAP),
    R.CHARGE_NURSE: (F.CAUTI, F.CLABSI, F.VAP, F.SSI),
    R.INFECTION_CONTROL_NURSE: (F.CAUTI, F.CLABSI, F.SSI, F.VAP, F.HAP, F.MDRO),
    R.LABORATORY_TECHNICIAN: LAB_FORMS,
    R.VIEWER: (),
}

DEPARTMENT_FORMS: dict[str, tuple[str, ...]] = {
    D.ICU: (F.CAUTI, F.CLABSI, F.VAP, F.HAP, F.MDRO),
    D.NICU: (F.CLABSI, F.VAP, F.MDRO),
    D.PICU: CRITICAL_CARE_FORMS,
    D.CCU: CRITICAL_CARE_FORMS,
    D.GENERAL_SURGERY: SURGICAL_FORMS,
    D.ORTHOPEDIC: SURGICAL_FORMS,
    D.CARDIAC_SURGERY: (F.SSI, F.CAUTI, F.CLABSI, F.MDRO),
    D.NEUROSURGERY: SURGICAL_FORMS,
    D.OBSTETRICS_GYNECOLOGY: SURGICAL_FORMS,
    D.PEDIATRICS: (F.CAUTI, F.MDRO),
    D.INTERNAL_MEDICINE: (F.CAUTI, F.MDRO),
    D.EMERGENCY: (F.CAUTI, F.MDRO),
    D.DIALYSIS: (F.CLABSI, F.MDRO),
    D.ONCOLOGY: (F.CAUTI, F.CLABSI, F.MDRO),
    D.BURNS_UNIT: SURGICAL_FORMS,
    D.LABORATORY: LAB_FORMS,
    D.RADIOLOGY: (F.MDRO,),
    D.PHARMACY: (F.MDRO,),
    D.IPC_COMMITTEE: ALL_FORMS,
}

# Forms that piggyback on another form's grant.
PARENT_FORM = {
    F.CLABSI_BUNDLE.value: F.CLABSI.value,
}


@dataclass(frozen=True)
class FormAccessMatrix:
    """
    role x form and department x form lookups, frozen at import.
    """
    by_role: Mapping[str, frozenset]
    by_department: Mapping[str, frozenset]

    @classmethod
    def build(
        cls,
        role_forms: Mapping[str, Iterable[str]],
        department_forms: Mapping[str, Iterable[str]],
    ) -> "FormAccessMatrix":
        return cls(
            by_role={str(k): frozenset(str(f) for f in v) for k, v in role_forms.items()},
            by_department={str(k): frozenset(str(f) for f in v) for k, v in department_forms.items()},
        )

    def role_allows(self, role: str, form_type: str) -> bool:
        return form_type in self.by_role.get(role, frozenset())

    def department_allows(self, department: str, form_type: str) -> bool:
        return form_type in self.by_department.get(department, frozenset())


MATRIX = FormAccessMatrix.build(ROLE_FORMS, DEPARTMENT_FORMS)


def _usable(profile) -> bool:
    return profile is not None and bool(getattr(profile, "is_active", False))


def _resolve_form(form_type) -> str | None:
    value = str(form_type) if form_type is not None else ""
    if value not in F.values:
        return None
    return str(PARENT_FORM.get(value, value))


def has_role(profile, *roles) -> bool:
    return _usable(profile) and profile.role in {str(r) for r in roles}


def can_access_form(profile, form_type, *, matrix: FormAccessMatrix = MATRIX) -> bool:
    """
    Fails closed: missing/inactive profile or unknown form type -> False.
    """
    if not _usable(profile):
        return False

    form = _resolve_form(form_type)
    if form is None:
        return False

    if profile.role in FULL_ACCESS_ROLES:
        return True

    return matrix.role_allows(profile.role, form) and matrix.department_allows(profile.department, form)


def accessible_forms(profile, *, matrix: FormAccessMatrix = MATRIX) -> list[str]:
    return [ft for ft in F.values if can_access_form(profile, ft, matrix=matrix)]


def has_department_access(profile, department) -> bool:
    if not _usable(profile):
        return False
    if profile.role in CROSS_DEPARTMENT_ROLES:
        return True
    return profile.department == str(department)


def can_manage_department_records(profile, department) -> bool:
    """
    Object writes follow read visibility: IPC roles act on every department's
    records, everyone else on their own department's.
    """
    return has_role(profile, *FULL_ACCESS_ROLES) or has_department_access(profile, department)


def can_review(profile) -> bool:
    return _usable(profile) and profile.role in REVIEWER_ROLES


def is_administrator(profile) -> bool:
    return has_role(profile, R.ADMIN)
