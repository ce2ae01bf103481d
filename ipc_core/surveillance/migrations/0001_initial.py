import uuid

import django.db.models.deletion
from django.db import migrations, models


DEPARTMENT_CHOICES = [
    ("ICU", "Intensive Care Unit"),
    ("NICU", "Neonatal ICU"),
    ("PICU", "Pediatric ICU"),
    ("CCU", "Cardiac Care Unit"),
    ("GENERAL_SURGERY", "General Surgery"),
    ("ORTHOPEDIC", "Orthopedic"),
    ("CARDIAC_SURGERY", "Cardiac Surgery"),
    ("NEUROSURGERY", "Neurosurgery"),
    ("OBSTETRICS_GYNECOLOGY", "Obstetrics & Gynecology"),
    ("PEDIATRICS", "Pediatrics"),
    ("INTERNAL_MEDICINE", "Internal Medicine"),
    ("EMERGENCY", "Emergency Department"),
    ("DIALYSIS", "Dialysis Unit"),
    ("ONCOLOGY", "Oncology"),
    ("BURNS_UNIT", "Burns Unit"),
    ("LABORATORY", "Laboratory"),
    ("RADIOLOGY", "Radiology"),
    ("PHARMACY", "Pharmacy"),
    ("IPC_COMMITTEE", "IPC Committee"),
]

REVIEW_STATUS_CHOICES = [
    ("pending", "Pending"),
    ("approved", "Approved"),
    ("rejected", "Rejected"),
    ("requires_revision", "Requires Revision"),
]

GENDER_CHOICES = [("Male", "Male"), ("Female", "Female")]


def _base_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
        ("form_number", models.CharField(blank=True, db_index=True, default="", max_length=32)),
        ("patient_name", models.CharField(max_length=255)),
        ("hospital_id", models.CharField(db_index=True, max_length=64)),
        ("department", models.CharField(choices=DEPARTMENT_CHOICES, db_index=True, max_length=32)),
        ("is_active", models.BooleanField(default=True)),
        (
            "submitted_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="iam.userprofile",
            ),
        ),
    ]


def _review_fields():
    return [
        (
            "review_status",
            models.CharField(choices=REVIEW_STATUS_CHOICES, db_index=True, default="pending", max_length=32),
        ),
        ("review_notes", models.TextField(blank=True, default="")),
        ("reviewed_at", models.DateTimeField(blank=True, null=True)),
        (
            "reviewed_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="iam.userprofile",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("iam", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CautiSurveillance",
            fields=_base_fields()
            + _review_fields()
            + [
                ("age", models.PositiveIntegerField(default=0)),
                ("gender", models.CharField(blank=True, choices=GENDER_CHOICES, default="", max_length=16)),
                ("ward_bed_number", models.CharField(max_length=64)),
                ("catheter_insertion_date", models.DateField()),
                ("catheter_removal_date", models.DateField(blank=True, null=True)),
                ("reason_for_catheter", models.CharField(blank=True, default="", max_length=255)),
                ("catheter_type", models.CharField(blank=True, default="", max_length=128)),
                ("surveillance_date", models.DateField(db_index=True)),
                ("event_date", models.DateField(blank=True, null=True)),
                ("symptoms", models.JSONField(default=dict)),
                ("laboratory_findings", models.JSONField(default=dict)),
                ("meets_cauti_criteria", models.BooleanField(default=False)),
                ("infection_preventable", models.BooleanField(blank=True, null=True)),
                ("contributing_factors", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "surveillance_cauti",
                "indexes": [
                    models.Index(fields=["department", "created_at"], name="cauti_dept_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ClabsiSurveillance",
            fields=_base_fields()
            + _review_fields()
            + [
                ("age", models.PositiveIntegerField(default=0)),
                ("gender", models.CharField(blank=True, choices=GENDER_CHOICES, default="", max_length=16)),
                ("ward_bed_number", models.CharField(max_length=64)),
                ("line_insertion_date", models.DateField()),
                ("line_removal_date", models.DateField(blank=True, null=True)),
                ("line_type", models.CharField(max_length=128)),
                ("insertion_site", models.CharField(max_length=128)),
                ("number_of_lumens", models.PositiveSmallIntegerField(default=0)),
                ("reason_for_line", models.CharField(blank=True, default="", max_length=255)),
                ("surveillance_date", models.DateField(db_index=True)),
                ("bloodstream_infection_date", models.DateField(blank=True, null=True)),
                ("symptoms", models.JSONField(default=dict)),
                ("laboratory_findings", models.JSONField(default=dict)),
                ("meets_clabsi_criteria", models.BooleanField(default=False)),
                ("secondary_bsi", models.BooleanField(default=False)),
                ("infection_preventable", models.BooleanField(blank=True, null=True)),
                ("contributing_factors", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "surveillance_clabsi",
                "indexes": [
                    models.Index(fields=["department", "created_at"], name="clabsi_dept_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MdroSurveillance",
            fields=_base_fields()
            + _review_fields()
            + [
                ("age", models.PositiveIntegerField(default=0)),
                ("sex", models.CharField(choices=GENDER_CHOICES, max_length=16)),
                ("ward_unit", models.CharField(max_length=128)),
                ("consultant_in_charge", models.CharField(max_length=255)),
                ("admission_date", models.DateField()),
                ("diagnosis", models.TextField()),
                (
                    "site_of_infection",
                    models.CharField(
                        choices=[
                            ("Respiratory", "Respiratory"),
                            ("Urinary", "Urinary"),
                            ("Wound", "Wound"),
                            ("Blood", "Blood"),
                            ("Other", "Other"),
                        ],
                        max_length=32,
                    ),
                ),
                ("sample_type", models.CharField(max_length=128)),
                ("sample_collection_date", models.DateField()),
                ("report_date", models.DateField(db_index=True)),
                ("pathogen_isolated", models.CharField(db_index=True, max_length=255)),
                ("antibiotic_resistant_to", models.TextField()),
                ("antibiotic_sensitive_to", models.TextField()),
                (
                    "mdr_organism_type",
                    models.CharField(
                        choices=[
                            ("MRSA", "MRSA"),
                            ("ESBL", "ESBL"),
                            ("CRE", "CRE"),
                            ("VRE", "VRE"),
                            ("MDR-TB", "MDR-TB"),
                            ("Other", "Other"),
                        ],
                        max_length=16,
                    ),
                ),
                ("empiric_antibiotics", models.TextField(blank=True, default="")),
                ("empiric_antibiotics_start_date", models.DateField(blank=True, null=True)),
                ("culture_specific_antibiotics", models.TextField(blank=True, default="")),
                ("date_modified", models.DateField(blank=True, null=True)),
                (
                    "isolation_implemented",
                    models.CharField(blank=True, choices=[("Yes", "Yes"), ("No", "No")], default="", max_length=8),
                ),
                ("isolation_implementation_date", models.DateField(blank=True, null=True)),
                (
                    "type_of_precaution",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Contact", "Contact"),
                            ("Droplet", "Droplet"),
                            ("Airborne", "Airborne"),
                            ("Other", "Other"),
                        ],
                        default="",
                        max_length=16,
                    ),
                ),
                (
                    "outcome",
                    models.CharField(
                        choices=[
                            ("Recovered", "Recovered"),
                            ("Ongoing Treatment", "Ongoing Treatment"),
                            ("Expired", "Expired"),
                            ("Discharged Against Medical Advice", "Discharged Against Medical Advice"),
                        ],
                        max_length=64,
                    ),
                ),
                ("outcome_date", models.DateField()),
                ("reported_by", models.CharField(max_length=255)),
                ("designation", models.CharField(blank=True, default="", max_length=128)),
                ("contact_info", models.CharField(blank=True, default="", max_length=255)),
                ("report_submission_date", models.DateField()),
                ("risk_factors", models.JSONField(default=dict)),
            ],
            options={
                "db_table": "surveillance_mdro",
                "indexes": [
                    models.Index(fields=["department", "created_at"], name="mdro_dept_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="SsiCase",
            fields=_base_fields()
            + [
                ("procedure_name", models.CharField(max_length=255)),
                ("procedure_date", models.DateField()),
                ("surgeon_name", models.CharField(blank=True, default="", max_length=255)),
                ("suspicion_date", models.DateField(db_index=True)),
                (
                    "priority",
                    models.CharField(
                        choices=[("HIGH", "High"), ("MEDIUM", "Medium"), ("LOW", "Low")],
                        db_index=True,
                        default="MEDIUM",
                        max_length=8,
                    ),
                ),
                (
                    "current_status",
                    models.CharField(
                        choices=[
                            ("SUSPECTED", "Suspected"),
                            ("CONFIRMED", "Confirmed"),
                            ("CLOSED_RECOVERED", "Closed (Recovered)"),
                            ("CLOSED_DECEASED", "Closed (Deceased)"),
                            ("NOT_AN_SSI", "Not an SSI"),
                        ],
                        db_index=True,
                        default="SUSPECTED",
                        max_length=32,
                    ),
                ),
                ("status_notes", models.TextField(blank=True, default="")),
            ],
            options={
                "db_table": "surveillance_ssi_case",
                "indexes": [
                    models.Index(
                        fields=["current_status", "priority", "suspicion_date"],
                        name="ssi_watchlist_idx",
                    ),
                ],
            },
        ),
    ]
