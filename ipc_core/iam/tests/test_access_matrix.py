# ipc_core/iam/tests/test_access_matrix.py
from types import SimpleNamespace

import pytest

from ipc_core.iam.access import (
    DEPARTMENT_FORMS,
    ROLE_FORMS,
    FormAccessMatrix,
    accessible_forms,
    can_access_form,
    can_manage_department_records,
    can_review,
    has_department_access,
)
from ipc_core.iam.constants import DepartmentType as D, FormType as F, UserRole as R


def profile(role, department, is_active=True):
    return SimpleNamespace(role=role.value, department=department.value, is_active=is_active)


def test_staff_nurse_in_icu_gets_role_and_department_intersection():
    p = profile(R.STAFF_NURSE, D.ICU)

    assert can_access_form(p, F.CAUTI)
    assert can_access_form(p, F.CLABSI)
    assert can_access_form(p, F.VAP)
    # ICU lists MDRO but the role does not
    assert not can_access_form(p, F.MDRO)
    # role lists nothing surgical and ICU lists no SSI
    assert not can_access_form(p, F.SSI)


def test_department_can_block_a_form_the_role_allows():
    p = profile(R.CONSULTANT, D.RADIOLOGY)

    assert can_access_form(p, F.MDRO)
    assert not can_access_form(p, F.CAUTI)


@pytest.mark.parametrize("role", [R.ADMIN, R.IPC_FOCAL, R.IPC_OFFICER])
def test_full_access_roles_skip_the_department_check(role):
    p = profile(role, D.PHARMACY)

    assert accessible_forms(p) == list(F.values)


def test_bundle_follows_clabsi_grant():
    assert can_access_form(profile(R.STAFF_NURSE, D.ICU), F.CLABSI_BUNDLE)
    assert not can_access_form(profile(R.STAFF_NURSE, D.PEDIATRICS), F.CLABSI_BUNDLE)


@pytest.mark.parametrize(
    "p, form",
    [
        (None, F.CAUTI),
        (profile(R.ADMIN, D.ICU, is_active=False), F.CAUTI),
        (profile(R.ADMIN, D.ICU), "NOT_A_FORM"),
        (profile(R.ADMIN, D.ICU), None),
        (profile(R.VIEWER, D.IPC_COMMITTEE), F.CAUTI),
    ],
)
def test_fails_closed(p, form):
    assert can_access_form(p, form) is False


def test_role_missing_from_matrix_has_no_grants():
    matrix = FormAccessMatrix.build({}, DEPARTMENT_FORMS)

    assert not can_access_form(profile(R.STAFF_NURSE, D.ICU), F.CAUTI, matrix=matrix)


def test_matrix_tables_only_name_known_values():
    assert set(map(str, ROLE_FORMS)) <= set(R.values)
    assert set(map(str, DEPARTMENT_FORMS)) <= set(D.values)
    for forms in [*ROLE_FORMS.values(), *DEPARTMENT_FORMS.values()]:
        assert set(map(str, forms)) <= set(F.values)


def test_department_visibility_and_review_rights():
    nurse = profile(R.STAFF_NURSE, D.ICU)
    focal = profile(R.IPC_FOCAL, D.IPC_COMMITTEE)
    officer = profile(R.IPC_OFFICER, D.IPC_COMMITTEE)

    assert has_department_access(nurse, D.ICU)
    assert not has_department_access(nurse, D.NICU)
    assert has_department_access(focal, D.NICU)

    assert not can_review(nurse)
    assert can_review(focal)
    assert can_review(officer)


def test_record_writes_follow_read_visibility():
    nurse = profile(R.STAFF_NURSE, D.ICU)
    officer = profile(R.IPC_OFFICER, D.IPC_COMMITTEE)

    # officers read every department, so they act on every department's records
    assert not has_department_access(officer, D.NICU)
    assert can_manage_department_records(officer, D.NICU)

    assert can_manage_department_records(nurse, D.ICU)
    assert not can_manage_department_records(nurse, D.NICU)
    assert not can_manage_department_records(profile(R.IPC_OFFICER, D.ICU, is_active=False), D.ICU)
