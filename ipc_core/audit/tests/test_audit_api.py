# ipc_core/audit/tests/test_audit_api.py
import uuid

import pytest

from ipc_core.audit.models import AuditEvent
from ipc_core.audit.services import AuditService

pytestmark = pytest.mark.django_db


def test_log_persists_event():
    entity_id = uuid.uuid4()

    record = AuditService.log(
        event_code="cauti.submitted",
        entity_type="CautiSurveillance",
        entity_id=entity_id,
        actor_user_id=None,
    )

    assert record.metadata == {}
    ev = AuditEvent.objects.get()
    assert ev.entity_id == entity_id
    assert ev.event_code == "cauti.submitted"


def test_audit_list_is_admin_only_and_filterable(client_for, admin_profile, nurse_profile):
    target = uuid.uuid4()
    AuditService.log(event_code="a.one", entity_type="X", entity_id=target, actor_user_id=admin_profile.user_id)
    AuditService.log(event_code="a.two", entity_type="X", entity_id=uuid.uuid4(), actor_user_id=nurse_profile.user_id)

    assert client_for(nurse_profile).get("/api/v1/audit/events/").status_code == 403

    admin = client_for(admin_profile)
    res = admin.get("/api/v1/audit/events/", {"entity_id": str(target)})
    assert res.status_code == 200
    assert [row["event_code"] for row in res.data["results"]] == ["a.one"]

    res = admin.get("/api/v1/audit/events/", {"actor_user_id": str(nurse_profile.user_id)})
    assert [row["event_code"] for row in res.data["results"]] == ["a.two"]


def test_audit_list_rejects_bad_filters(client_for, admin_profile):
    admin = client_for(admin_profile)

    assert admin.get("/api/v1/audit/events/", {"entity_id": "nope"}).status_code == 400
    assert admin.get("/api/v1/audit/events/", {"actor_user_id": "x"}).status_code == 400
