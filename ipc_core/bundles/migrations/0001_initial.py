import uuid

import django.db.models.deletion
from django.db import migrations, models


SHIFT_CHOICES = [("M", "Morning"), ("A", "Afternoon"), ("N", "Night")]

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


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("iam", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ClabsiBundleEntry",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("patient_id", models.CharField(db_index=True, max_length=64)),
                ("admission_date", models.DateField()),
                ("admission_shift", models.CharField(choices=SHIFT_CHOICES, max_length=1)),
                ("discharge_date", models.DateField(blank=True, null=True)),
                ("discharge_shift", models.CharField(blank=True, choices=SHIFT_CHOICES, default="", max_length=1)),
                (
                    "discharge_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("discharged", "Discharged"),
                            ("deceased", "Deceased"),
                            ("transferred", "Transferred"),
                        ],
                        default="",
                        max_length=16,
                    ),
                ),
                ("entry_date", models.DateField(db_index=True)),
                ("shift", models.CharField(choices=SHIFT_CHOICES, max_length=1)),
                ("day_number", models.PositiveSmallIntegerField(default=1)),
                ("skin_prep_2chg", models.BooleanField(default=False)),
                ("dressing_change_daily", models.BooleanField(default=False)),
                ("patency_lumens", models.BooleanField(default=False)),
                ("hub_care_alcohol", models.BooleanField(default=False)),
                ("iv_tubing_change_daily", models.BooleanField(default=False)),
                ("compliance_score", models.PositiveSmallIntegerField(default=0)),
                ("department", models.CharField(choices=DEPARTMENT_CHOICES, db_index=True, max_length=32)),
                ("nurse_name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="clabsi_bundle_entries",
                        to="iam.userprofile",
                    ),
                ),
            ],
            options={
                "db_table": "bundles_clabsi_entry",
                "indexes": [
                    models.Index(fields=["patient_id", "entry_date", "shift"], name="bundle_patient_shift_idx"),
                    models.Index(fields=["department", "entry_date"], name="bundle_dept_date_idx"),
                ],
            },
        ),
    ]
