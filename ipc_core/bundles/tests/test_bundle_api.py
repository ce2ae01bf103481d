# ipc_core/bundles/tests/test_bundle_api.py
from datetime import timedelta

import pytest
from django.utils import timezone

from ipc_core.audit.models import AuditEvent
from ipc_core.bundles.models import ClabsiBundleEntry
from ipc_core.bundles.services import BundleService

pytestmark = pytest.mark.django_db

URL = "/api/v1/clabsi-bundle/"


def _days_ago(n):
    return (timezone.localdate() - timedelta(days=n)).isoformat()


@pytest.fixture
def record_entry(nurse_profile, bundle_payload):
    def _record(profile=None, **overrides):
        return BundleService.create_entry(
            data=bundle_payload(**overrides),
            profile=profile or nurse_profile,
            actor_user_id=None,
        )

    return _record


def test_create_entry_scores_and_stamps_nurse(client_for, nurse_profile, bundle_payload):
    res = client_for(nurse_profile).post(URL, bundle_payload(), format="json")

    assert res.status_code == 201, res.data
    assert res.data["patient_id"] == "PT-100"
    assert res.data["day_number"] == 1
    assert res.data["compliance_score"] == 80
    assert res.data["nurse_name"] == "Nia Nurse"
    assert res.data["department"] == "ICU"
    assert AuditEvent.objects.filter(event_code="bundle.entry_created").count() == 1


def test_skin_prep_only_counts_on_admission_shift(record_entry):
    admitted = _days_ago(1)

    entry = record_entry(admission_date=admitted, entry_date=admitted, shift="A", iv_tubing_change_daily=True)
    assert entry.skin_prep_2chg is False
    # day one, four of five
    assert entry.compliance_score == 80

    entry = record_entry(admission_date=admitted, entry_date=_days_ago(0), shift="M", iv_tubing_change_daily=True)
    assert entry.day_number == 2
    assert entry.compliance_score == 100


def test_duplicate_shift_is_rejected_without_insert(client_for, nurse_profile, bundle_payload, record_entry):
    record_entry()

    res = client_for(nurse_profile).post(URL, bundle_payload(patient_id="PT-100 "), format="json")

    assert res.status_code == 409
    assert res.data["error"]["message"] == "Entry for M shift on this date already exists."
    assert ClabsiBundleEntry.objects.count() == 1


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"entry_date": "2000-01-01"}, "entry_date"),
        ({"discharge_date": "2000-01-01"}, "discharge_date"),
        ({"shift": "X"}, "shift"),
        ({"patient_id": "   "}, "patient_id"),
    ],
)
def test_invalid_entries(client_for, nurse_profile, bundle_payload, overrides, field):
    res = client_for(nurse_profile).post(URL, bundle_payload(**overrides), format="json")

    assert res.status_code == 400
    assert field in {item["field"] for item in res.data["error"]["details"]["errors"]}
    assert ClabsiBundleEntry.objects.count() == 0


def test_admission_must_match_existing_entries(client_for, nurse_profile, bundle_payload, record_entry):
    record_entry()

    res = client_for(nurse_profile).post(
        URL,
        bundle_payload(admission_date=_days_ago(3), entry_date=_days_ago(0), shift="N"),
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"]["details"]["errors"][0]["field"] == "admission_date"


def test_nurse_outside_clabsi_grant_is_forbidden(client_for, make_profile, bundle_payload):
    peds = make_profile(department="PEDIATRICS")

    res = client_for(peds).post(URL, bundle_payload(), format="json")

    assert res.status_code == 403


def test_discharge_updates_every_entry(client_for, nurse_profile, record_entry):
    record_entry(admission_date=_days_ago(2), entry_date=_days_ago(2))
    record_entry(admission_date=_days_ago(2), entry_date=_days_ago(1))
    c = client_for(nurse_profile)

    res = c.post(
        f"{URL}discharge/",
        {"patient_id": "pt-100", "discharge_date": _days_ago(0), "discharge_shift": "A", "discharge_type": "discharged"},
        format="json",
    )

    assert res.status_code == 200
    assert res.data == {"patient_id": "PT-100", "updated": 2}
    assert set(ClabsiBundleEntry.objects.values_list("discharge_type", flat=True)) == {"discharged"}

    res = c.get(f"{URL}patients/")
    assert res.data[0]["is_active"] is False
    assert res.data[0]["total_entries"] == 2


def test_discharge_before_last_entry_is_rejected(client_for, nurse_profile, record_entry):
    record_entry(admission_date=_days_ago(2), entry_date=_days_ago(0))

    res = client_for(nurse_profile).post(
        f"{URL}discharge/",
        {"patient_id": "PT-100", "discharge_date": _days_ago(1), "discharge_shift": "N", "discharge_type": "deceased"},
        format="json",
    )

    assert res.status_code == 400
    assert "discharge_date" in res.data["error"]["details"]
    assert ClabsiBundleEntry.objects.filter(discharge_date__isnull=False).count() == 0


def test_discharge_unknown_patient(client_for, nurse_profile):
    res = client_for(nurse_profile).post(
        f"{URL}discharge/",
        {"patient_id": "PT-404", "discharge_date": _days_ago(0), "discharge_shift": "M", "discharge_type": "transferred"},
        format="json",
    )

    assert res.status_code == 400
    assert "patient_id" in res.data["error"]["details"]


def test_delete_is_limited_to_creator_or_admin(client_for, admin_profile, make_profile, record_entry):
    entry = record_entry()
    colleague = make_profile(department="ICU")

    res = client_for(colleague).delete(f"{URL}{entry.id}/")
    assert res.status_code == 403
    assert ClabsiBundleEntry.objects.filter(id=entry.id).exists()

    res = client_for(admin_profile).delete(f"{URL}{entry.id}/")
    assert res.status_code == 204
    assert not ClabsiBundleEntry.objects.filter(id=entry.id).exists()


def test_stats_and_breakdown(client_for, nurse_profile, make_profile, record_entry):
    admitted = _days_ago(1)
    # PT-100: day 1 at 100, day 2 at 50 -> 75
    record_entry(admission_date=admitted, entry_date=admitted, iv_tubing_change_daily=True)
    record_entry(
        admission_date=admitted,
        entry_date=_days_ago(0),
        hub_care_alcohol=False,
    )
    # PT-200: day 1 at 20
    record_entry(
        patient_id="pt-200",
        dressing_change_daily=False,
        patency_lumens=False,
        hub_care_alcohol=False,
    )
    # other department, invisible to the ICU nurse
    record_entry(profile=make_profile(department="NICU"), patient_id="pt-300")

    c = client_for(nurse_profile)

    stats = c.get(f"{URL}stats/").data
    assert stats["total_cases"] == 2
    assert stats["active_cases"] == 2
    assert stats["average_compliance"] == 48
    assert stats["low_compliance_cases"] == 1
    assert stats["perfect_compliance_cases"] == 0

    breakdown = c.get(f"{URL}breakdown/").data
    assert breakdown["skin_prep"] == {"completed": 2, "total": 2, "percentage": 100}
    assert breakdown["dressing_change"] == {"completed": 2, "total": 3, "percentage": 67}
    assert breakdown["iv_tubing_change"] == {"completed": 1, "total": 3, "percentage": 33}


def test_history_filter_by_patient(client_for, nurse_profile, record_entry):
    record_entry()
    record_entry(patient_id="pt-200")

    res = client_for(nurse_profile).get(URL, {"patient_id": "PT-200"})

    assert [row["patient_id"] for row in res.data["results"]] == ["PT-200"]


def test_entry_after_recorded_discharge_is_rejected(client_for, nurse_profile, bundle_payload, record_entry):
    admitted = _days_ago(5)
    record_entry(admission_date=admitted, entry_date=admitted)
    BundleService.record_discharge(
        patient_id="PT-100",
        discharge_date=timezone.localdate() - timedelta(days=3),
        discharge_shift="A",
        discharge_type="discharged",
        actor_user_id=None,
    )

    res = client_for(nurse_profile).post(
        URL,
        bundle_payload(admission_date=admitted, entry_date=_days_ago(0)),
        format="json",
    )

    assert res.status_code == 400
    assert res.data["error"]["details"]["errors"] == [
        {"field": "entry_date", "message": "Entry date cannot be after discharge date."}
    ]
    assert ClabsiBundleEntry.objects.count() == 1


def test_new_entry_inherits_recorded_discharge(client_for, nurse_profile, bundle_payload, record_entry):
    admitted = _days_ago(5)
    record_entry(admission_date=admitted, entry_date=admitted)
    BundleService.record_discharge(
        patient_id="PT-100",
        discharge_date=timezone.localdate() - timedelta(days=3),
        discharge_shift="A",
        discharge_type="transferred",
        actor_user_id=None,
    )

    res = client_for(nurse_profile).post(
        URL,
        bundle_payload(admission_date=admitted, entry_date=_days_ago(4), shift="N"),
        format="json",
    )

    assert res.status_code == 201, res.data
    assert res.data["discharge_date"] == _days_ago(3)
    assert res.data["discharge_type"] == "transferred"
    assert not ClabsiBundleEntry.objects.filter(discharge_date__isnull=True).exists()

    patients = client_for(nurse_profile).get(f"{URL}patients/").data
    assert [(p["patient_id"], p["total_entries"], p["is_active"]) for p in patients] == [("PT-100", 2, False)]


def test_patient_history_lists_entries_in_date_order(client_for, nurse_profile, make_profile, record_entry):
    admitted = _days_ago(1)
    record_entry(admission_date=admitted, entry_date=_days_ago(0), shift="M")
    record_entry(admission_date=admitted, entry_date=admitted, shift="N")
    record_entry(patient_id="pt-200")

    c = client_for(nurse_profile)
    res = c.get(f"{URL}patients/pt-100/history/")

    assert res.status_code == 200
    assert [(row["entry_date"], row["day_number"]) for row in res.data] == [(admitted, 1), (_days_ago(0), 2)]

    assert c.get(f"{URL}patients/PT-404/history/").status_code == 404
    # entries of another department stay hidden
    assert client_for(make_profile(department="NICU")).get(f"{URL}patients/PT-100/history/").status_code == 404
