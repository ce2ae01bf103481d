import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


ROLE_CHOICES = [
    ("ADMIN", "Administrator"),
    ("IPC_FOCAL", "IPC Focal Person"),
    ("IPC_OFFICER", "IPC Officer"),
    ("IPC_COMMITTEE", "IPC Committee Member"),
    ("DEPARTMENT_HEAD", "Department Head"),
    ("CONSULTANT", "Consultant"),
    ("MEDICAL_OFFICER", "Medical Officer"),
    ("STAFF_NURSE", "Staff Nurse"),
    ("CHARGE_NURSE", "Charge Nurse"),
    ("INFECTION_CONTROL_NURSE", "Infection Control Nurse"),
    ("LABORATORY_TECHNICIAN", "Laboratory Technician"),
    ("VIEWER", "Viewer"),
]

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

FORM_TYPE_CHOICES = [
    ("CAUTI", "Catheter-Associated UTI"),
    ("CLABSI", "Central Line-Associated BSI"),
    ("CLABSI_BUNDLE", "CLABSI Bundle Compliance"),
    ("SSI", "Surgical Site Infection"),
    ("VAP", "Ventilator-Associated Pneumonia"),
    ("HAP", "Hospital-Acquired Pneumonia"),
    ("MDRO", "Multi-Drug Resistant Organism"),
    ("C_DIFF", "C. difficile Infection"),
    ("MRSA", "MRSA Surveillance"),
    ("VRE", "VRE Surveillance"),
    ("ESBL", "ESBL Surveillance"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("full_name", models.CharField(max_length=255)),
                ("employee_id", models.CharField(blank=True, default="", max_length=64)),
                ("phone", models.CharField(blank=True, default="", max_length=32)),
                ("role", models.CharField(choices=ROLE_CHOICES, db_index=True, default="VIEWER", max_length=32)),
                ("department", models.CharField(choices=DEPARTMENT_CHOICES, db_index=True, max_length=32)),
                ("is_active", models.BooleanField(default=True)),
                ("avatar_url", models.URLField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ipc_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "iam_user_profile",
                "indexes": [
                    models.Index(fields=["department", "role"], name="iam_profile_dept_role_idx"),
                    models.Index(fields=["is_active"], name="iam_profile_active_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RolePermission",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("role", models.CharField(choices=ROLE_CHOICES, max_length=32)),
                ("form_type", models.CharField(choices=FORM_TYPE_CHOICES, max_length=32)),
                ("can_create", models.BooleanField(default=False)),
                ("can_read", models.BooleanField(default=False)),
                ("can_update", models.BooleanField(default=False)),
                ("can_delete", models.BooleanField(default=False)),
                ("can_approve", models.BooleanField(default=False)),
                ("can_export", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "iam_role_permission",
                "constraints": [
                    models.UniqueConstraint(fields=("role", "form_type"), name="uq_role_form_type"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DepartmentPermission",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("department", models.CharField(choices=DEPARTMENT_CHOICES, max_length=32)),
                ("form_type", models.CharField(choices=FORM_TYPE_CHOICES, max_length=32)),
                ("can_create", models.BooleanField(default=False)),
                ("can_read", models.BooleanField(default=False)),
                ("can_update", models.BooleanField(default=False)),
                ("can_delete", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "iam_department_permission",
                "constraints": [
                    models.UniqueConstraint(fields=("department", "form_type"), name="uq_department_form_type"),
                ],
            },
        ),
    ]
