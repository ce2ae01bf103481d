# ipc_core/conftest.py
import itertools

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from ipc_core.iam.constants import DepartmentType, UserRole
from ipc_core.iam.models import UserProfile

DEFAULT_PASSWORD = "Ward-round-2024!"

_seq = itertools.count(1)


@pytest.fixture
def make_user(db):
    def _make(*, email=None, password=DEFAULT_PASSWORD, **extra):
        n = next(_seq)
        email = email or f"user{n}@hospital.test"
        User = get_user_model()
        return User.objects.create_user(username=email, email=email, password=password, **extra)

    return _make


@pytest.fixture
def make_profile(db, make_user):
    """
    Profile (linked to a fresh auth user unless linked=False).
    """

    def _make(
        *,
        role=UserRole.STAFF_NURSE,
        department=DepartmentType.ICU,
        is_active=True,
        full_name="Test Nurse",
        email=None,
        linked=True,
        password=DEFAULT_PASSWORD,
    ):
        email = email or f"staff{next(_seq)}@hospital.test"
        user = make_user(email=email, password=password) if linked else None
        return UserProfile.objects.create(
            user=user,
            email=email,
            full_name=full_name,
            role=role,
            department=department,
            is_active=is_active,
        )

    return _make


@pytest.fixture
def admin_profile(make_profile):
    return make_profile(role=UserRole.ADMIN, department=DepartmentType.IPC_COMMITTEE, full_name="Ada Admin")


@pytest.fixture
def officer_profile(make_profile):
    return make_profile(role=UserRole.IPC_OFFICER, department=DepartmentType.IPC_COMMITTEE, full_name="Omar Officer")


@pytest.fixture
def nurse_profile(make_profile):
    return make_profile(role=UserRole.STAFF_NURSE, department=DepartmentType.ICU, full_name="Nia Nurse")


@pytest.fixture
def client_for():
    def _client(profile_or_user=None):
        c = APIClient()
        if profile_or_user is not None:
            user = getattr(profile_or_user, "user", profile_or_user)
            c.force_authenticate(user=user)
        return c

    return _client


@pytest.fixture
def api_client(client_for, nurse_profile):
    return client_for(nurse_profile)


# -------------------------
# Form payloads
# -------------------------
@pytest.fixture
def cauti_payload():
    def _payload(**overrides):
        data = {
            "patient_name": "Ravi Kumar",
            "hospital_id": "HID-1001",
            "age": "54",
            "gender": "Male",
            "ward_bed_number": "ICU-4",
            "catheter_insertion_date": "2024-03-01",
            "reason_for_catheter": "Urinary retention",
            "surveillance_date": "2024-03-05",
            "symptoms": {"fever": True},
            "laboratory_findings": {"iuc_specimen": True, "organism_identified": "E. coli"},
            "meets_cauti_criteria": True,
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture
def clabsi_payload():
    def _payload(**overrides):
        data = {
            "patient_name": "Meera Shah",
            "hospital_id": "HID-2001",
            "department": DepartmentType.ICU.value,
            "age": 61,
            "ward_bed_number": "ICU-7",
            "line_insertion_date": "2024-03-02",
            "line_type": "CVC",
            "insertion_site": "Subclavian",
            "number_of_lumens": "3",
            "surveillance_date": "2024-03-08",
            "symptoms": {"fever": True, "chills": True},
            "laboratory_findings": {"blood_culture_date": "2024-03-07", "organism_identified": "S. aureus"},
            "meets_clabsi_criteria": True,
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture
def mdro_payload():
    def _payload(**overrides):
        data = {
            "hospital_id": "HID-3001",
            "full_name": "Anil Verma",
            "age": "47",
            "sex": "Male",
            "ward_unit": "MICU",
            "consultant_in_charge": "Dr. Rao",
            "admission_date": "2024-02-20",
            "diagnosis": "Pneumonia",
            "site_of_infection": "Respiratory",
            "sample_type": "Sputum",
            "sample_collection_date": "2024-02-22",
            "report_date": "2024-02-24",
            "pathogen_isolated": "Klebsiella pneumoniae",
            "antibiotic_resistant_to": "Meropenem",
            "antibiotic_sensitive_to": "Colistin",
            "mdr_organism_type": "CRE",
            "outcome": "Ongoing Treatment",
            "outcome_date": "2024-03-01",
            "reported_by": "Dr. Rao",
            "report_submission_date": "2024-02-25",
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture
def ssi_payload():
    def _payload(**overrides):
        data = {
            "patient_name": "Sunita Das",
            "hospital_id": "HID-4001",
            "department": DepartmentType.GENERAL_SURGERY.value,
            "procedure_name": "Appendectomy",
            "procedure_date": "2024-03-01",
            "suspicion_date": "2024-03-06",
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture
def bundle_payload():
    def _payload(**overrides):
        today = timezone.localdate()
        data = {
            "patient_id": "pt-100",
            "admission_date": today.isoformat(),
            "admission_shift": "M",
            "entry_date": today.isoformat(),
            "shift": "M",
            "skin_prep_2chg": True,
            "dressing_change_daily": True,
            "patency_lumens": True,
            "hub_care_alcohol": True,
            "iv_tubing_change_daily": False,
        }
        data.update(overrides)
        return data

    return _payload
