# ipc_core/surveillance/tests/test_review_workflow.py
import pytest

from ipc_core.audit.models import AuditEvent
from ipc_core.surveillance.services import SurveillanceService

pytestmark = pytest.mark.django_db


@pytest.fixture
def cauti_record(nurse_profile, cauti_payload):
    return SurveillanceService.submit(form_type="CAUTI", data=cauti_payload(), profile=nurse_profile, actor_user_id=None)


def _review(client, record, status, notes=""):
    return client.post(
        f"/api/v1/cauti/{record.id}/review/",
        {"review_status": status, "review_notes": notes},
        format="json",
    )


def test_submitter_cannot_review(client_for, nurse_profile, cauti_record):
    res = _review(client_for(nurse_profile), cauti_record, "approved")

    assert res.status_code == 403
    assert res.data["error"]["message"] == "Only IPC reviewers can review submissions."


def test_officer_approves(client_for, officer_profile, cauti_record):
    res = _review(client_for(officer_profile), cauti_record, "approved", "Meets criteria.")

    assert res.status_code == 200
    assert res.data["review_status"] == "approved"
    assert res.data["review_notes"] == "Meets criteria."
    assert res.data["reviewed_by"] == officer_profile.id
    assert res.data["reviewed_at"]

    ev = AuditEvent.objects.get(event_code="surveillance.reviewed")
    assert ev.metadata["from"] == "pending"
    assert ev.metadata["to"] == "approved"


@pytest.mark.parametrize("final", ["approved", "rejected"])
def test_final_decisions_cannot_change(client_for, officer_profile, cauti_record, final):
    c = client_for(officer_profile)
    _review(c, cauti_record, final)

    res = _review(c, cauti_record, "requires_revision")

    assert res.status_code == 409
    cauti_record.refresh_from_db()
    assert cauti_record.review_status == final


def test_requires_revision_can_be_reviewed_again(client_for, officer_profile, cauti_record):
    c = client_for(officer_profile)

    assert _review(c, cauti_record, "requires_revision").status_code == 200
    res = _review(c, cauti_record, "approved")

    assert res.status_code == 200
    assert res.data["review_status"] == "approved"


def test_review_cannot_go_back_to_pending(client_for, officer_profile, cauti_record):
    res = _review(client_for(officer_profile), cauti_record, "pending")

    assert res.status_code == 400
    assert "review_status" in res.data["error"]["details"]


def test_review_status_filter(client_for, officer_profile, nurse_profile, cauti_payload, cauti_record):
    other = SurveillanceService.submit(
        form_type="CAUTI",
        data=cauti_payload(hospital_id="HID-77"),
        profile=nurse_profile,
        actor_user_id=None,
    )
    c = client_for(officer_profile)
    _review(c, other, "rejected")

    res = c.get("/api/v1/cauti/", {"review_status": "pending"})

    assert [row["id"] for row in res.data["results"]] == [str(cauti_record.id)]
