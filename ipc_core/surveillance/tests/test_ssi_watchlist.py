# ipc_core/surveillance/tests/test_ssi_watchlist.py
import pytest

from ipc_core.surveillance.models import SsiCase
from ipc_core.surveillance.selectors import ssi_watchlist
from ipc_core.surveillance.services import SurveillanceService

pytestmark = pytest.mark.django_db


@pytest.fixture
def surgical_nurse(make_profile):
    return make_profile(role="CHARGE_NURSE", department="GENERAL_SURGERY")


@pytest.fixture
def make_case(officer_profile, ssi_payload):
    def _make(**overrides):
        return SurveillanceService.submit(
            form_type="SSI",
            data=ssi_payload(**overrides),
            profile=officer_profile,
            actor_user_id=None,
        )

    return _make


def test_watchlist_orders_by_priority_then_oldest_suspicion(make_case):
    low = make_case(priority="LOW", suspicion_date="2024-03-01")
    high_new = make_case(priority="HIGH", suspicion_date="2024-03-09")
    high_old = make_case(priority="HIGH", suspicion_date="2024-03-02")
    medium = make_case(suspicion_date="2024-03-01")

    assert list(ssi_watchlist()) == [high_old, high_new, medium, low]


def test_closed_cases_leave_the_watchlist(client_for, admin_profile, make_case):
    open_case = make_case(hospital_id="HID-open")
    closed = make_case(hospital_id="HID-closed")
    client_for(admin_profile).post(
        f"/api/v1/ssi/{closed.id}/status/",
        {"current_status": "CLOSED_RECOVERED", "status_notes": "Wound healed."},
        format="json",
    )

    res = client_for(admin_profile).get("/api/v1/ssi/watchlist/")

    assert res.status_code == 200
    assert [row["id"] for row in res.data["results"]] == [str(open_case.id)]


def test_status_moves_and_closed_is_final(client_for, admin_profile, make_case):
    case = make_case()
    c = client_for(admin_profile)

    res = c.post(f"/api/v1/ssi/{case.id}/status/", {"current_status": "CONFIRMED"}, format="json")
    assert res.status_code == 200
    assert res.data["current_status"] == "CONFIRMED"

    res = c.post(f"/api/v1/ssi/{case.id}/status/", {"current_status": "NOT_AN_SSI"}, format="json")
    assert res.status_code == 200

    res = c.post(f"/api/v1/ssi/{case.id}/status/", {"current_status": "SUSPECTED"}, format="json")
    assert res.status_code == 409
    assert SsiCase.objects.get(id=case.id).current_status == "NOT_AN_SSI"


def test_surgical_nurse_submits_and_sees_own_department(client_for, surgical_nurse, make_case, ssi_payload):
    make_case(department="ORTHOPEDIC", hospital_id="HID-ortho")
    c = client_for(surgical_nurse)

    res = c.post("/api/v1/ssi/", ssi_payload(priority="HIGH"), format="json")
    assert res.status_code == 201, res.data
    assert res.data["current_status"] == "SUSPECTED"

    res = c.get("/api/v1/ssi/watchlist/")
    assert [row["hospital_id"] for row in res.data["results"]] == ["HID-4001"]


def test_ward_nurse_has_no_ssi_access(client_for, nurse_profile, ssi_payload):
    c = client_for(nurse_profile)

    assert c.get("/api/v1/ssi/watchlist/").status_code == 403
    assert c.post("/api/v1/ssi/", ssi_payload(), format="json").status_code == 403


def test_officer_updates_status_for_any_department_on_the_watchlist(client_for, officer_profile, make_case):
    case = make_case(department="ORTHOPEDIC")
    c = client_for(officer_profile)

    assert [row["id"] for row in c.get("/api/v1/ssi/watchlist/").data["results"]] == [str(case.id)]

    res = c.post(f"/api/v1/ssi/{case.id}/status/", {"current_status": "CONFIRMED"}, format="json")

    assert res.status_code == 200, res.data
    assert SsiCase.objects.get(id=case.id).current_status == "CONFIRMED"


def test_surgical_nurse_cannot_update_another_departments_case(client_for, surgical_nurse, make_case):
    case = make_case(department="ORTHOPEDIC")

    res = client_for(surgical_nurse).post(
        f"/api/v1/ssi/{case.id}/status/",
        {"current_status": "CONFIRMED"},
        format="json",
    )

    assert res.status_code == 404
    assert SsiCase.objects.get(id=case.id).current_status == "SUSPECTED"
