# ipc_core/analytics/tests/test_aggregations.py
import pytest
from django.utils import timezone

from ipc_core.analytics.selectors import default_range
from ipc_core.surveillance.services import SurveillanceService

pytestmark = pytest.mark.django_db

Q1 = {"start_date": "2024-01-01", "end_date": "2024-03-31"}


@pytest.fixture
def nicu_nurse(make_profile):
    return make_profile(department="NICU", full_name="Noor Nicu")


@pytest.fixture
def seeded(nurse_profile, nicu_nurse, officer_profile, cauti_payload, clabsi_payload, mdro_payload, ssi_payload):
    def submit(form_type, data, profile):
        return SurveillanceService.submit(form_type=form_type, data=data, profile=profile, actor_user_id=None)

    def cauti_lab(organism):
        return {"iuc_specimen": True, "organism_identified": organism}

    submit("CAUTI", cauti_payload(surveillance_date="2024-01-15", laboratory_findings=cauti_lab("E. coli")), nurse_profile)
    submit("CAUTI", cauti_payload(surveillance_date="2024-03-02", laboratory_findings=cauti_lab("E. coli ")), nurse_profile)
    submit(
        "CAUTI",
        cauti_payload(hospital_id="HID-N1", surveillance_date="2024-03-20", laboratory_findings=cauti_lab("Candida")),
        nicu_nurse,
    )
    # outside the range
    submit("CAUTI", cauti_payload(surveillance_date="2023-12-31", laboratory_findings=cauti_lab("Proteus")), nurse_profile)

    submit("CLABSI", clabsi_payload(), nurse_profile)
    submit("MDRO", mdro_payload(department="ICU", report_submission_date="2024-02-10"), officer_profile)
    submit("SSI", ssi_payload(suspicion_date="2024-03-06"), officer_profile)


def test_monthly_trends_fill_empty_months(client_for, officer_profile, seeded):
    res = client_for(officer_profile).get("/api/v1/analytics/trends/", {"form_type": "CAUTI", **Q1})

    assert res.status_code == 200
    assert res.data == [
        {"month": "2024-01", "cases": 1},
        {"month": "2024-02", "cases": 0},
        {"month": "2024-03", "cases": 2},
    ]


def test_trends_are_department_scoped_for_ward_staff(client_for, nurse_profile, seeded):
    res = client_for(nurse_profile).get("/api/v1/analytics/trends/", {"form_type": "CAUTI", **Q1})

    assert [row["cases"] for row in res.data] == [1, 0, 1]


def test_department_breakdown(client_for, officer_profile, seeded):
    res = client_for(officer_profile).get("/api/v1/analytics/departments/", {"form_type": "CAUTI", **Q1})

    assert res.data == [
        {"department": "ICU", "department_name": "Intensive Care Unit", "cases": 2},
        {"department": "NICU", "department_name": "Neonatal ICU", "cases": 1},
    ]


def test_pathogen_breakdown_merges_trimmed_names(client_for, officer_profile, seeded):
    c = client_for(officer_profile)

    res = c.get("/api/v1/analytics/pathogens/", {"form_type": "CAUTI", **Q1})
    assert res.data == [{"pathogen": "E. coli", "cases": 2}, {"pathogen": "Candida", "cases": 1}]

    res = c.get("/api/v1/analytics/pathogens/", {"form_type": "MDRO", **Q1})
    assert res.data == [{"pathogen": "Klebsiella pneumoniae", "cases": 1}]

    res = c.get("/api/v1/analytics/pathogens/", {"form_type": "SSI", **Q1})
    assert res.data == []


@pytest.mark.parametrize(
    "params",
    [
        {"form_type": "VAP"},
        {"form_type": "CAUTI", "start_date": "2024-05-01", "end_date": "2024-04-01"},
        {"form_type": "CAUTI", "start_date": "yesterday"},
        {},
    ],
)
def test_bad_query_params(client_for, officer_profile, params):
    res = client_for(officer_profile).get("/api/v1/analytics/trends/", params)

    assert res.status_code == 400


def test_aggregation_respects_form_access(client_for, nurse_profile):
    res = client_for(nurse_profile).get("/api/v1/analytics/trends/", {"form_type": "MDRO"})

    assert res.status_code == 403


def test_default_range_covers_last_year(client_for, officer_profile, cauti_payload):
    SurveillanceService.submit(
        form_type="CAUTI",
        data=cauti_payload(surveillance_date=timezone.localdate().isoformat()),
        profile=officer_profile,
        actor_user_id=None,
    )

    res = client_for(officer_profile).get("/api/v1/analytics/trends/", {"form_type": "CAUTI"})

    start, end = default_range()
    assert res.data[0]["month"] == start.strftime("%Y-%m")
    assert res.data[-1]["month"] == end.strftime("%Y-%m")
    assert res.data[-1]["cases"] == 1


def test_dashboard_stats(client_for, officer_profile, nurse_profile, cauti_payload, seeded):
    SurveillanceService.submit(
        form_type="CAUTI",
        data=cauti_payload(hospital_id="HID-NEW", surveillance_date=timezone.localdate().isoformat()),
        profile=nurse_profile,
        actor_user_id=None,
    )

    res = client_for(officer_profile).get("/api/v1/dashboard/stats/")

    assert res.status_code == 200
    assert res.data == {
        "cauti_cases": 5,
        "clabsi_cases": 1,
        "ssi_cases": 1,
        "mdro_cases": 1,
        "this_month": 1,
        # HID-1001, HID-N1, HID-NEW, HID-2001, HID-3001, HID-4001
        "total_patients": 6,
    }

    res = client_for(nurse_profile).get("/api/v1/dashboard/stats/")
    assert res.data["cauti_cases"] == 4
    assert res.data["ssi_cases"] == 0


def test_recent_submissions(client_for, officer_profile, seeded):
    res = client_for(officer_profile).get("/api/v1/dashboard/recent/", {"limit": "3"})

    assert res.status_code == 200
    assert len(res.data) == 3
    newest = res.data[0]
    assert newest["form_type"] == "CLABSI"
    assert newest["form_id"].startswith("CLABSI-")
    assert newest["submitted_by"] == "Nia Nurse"
    assert {row["form_type"] for row in res.data[1:]} == {"CAUTI"}


def test_recent_submission_without_submitter(client_for, officer_profile, nurse_profile, cauti_payload):
    record = SurveillanceService.submit(form_type="CAUTI", data=cauti_payload(), profile=nurse_profile, actor_user_id=None)
    type(record).objects.filter(id=record.id).update(submitted_by=None, form_number="")

    res = client_for(officer_profile).get("/api/v1/dashboard/recent/")

    assert res.data[0]["submitted_by"] == "Unknown User"
    assert res.data[0]["form_id"] == record.id.hex[:8].upper()
