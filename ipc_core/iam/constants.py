# ipc_core/iam/constants.py
from django.db import models


class UserRole(models.TextChoices):
    ADMIN = "ADMIN", "Administrator"
    IPC_FOCAL = "IPC_FOCAL", "IPC Focal Person"
    IPC_OFFICER = "IPC_OFFICER", "IPC Officer"
    IPC_COMMITTEE = "IPC_COMMITTEE", "IPC Committee Member"
    DEPARTMENT_HEAD = "DEPARTMENT_HEAD", "Department Head"
    CONSULTANT = "CONSULTANT", "Consultant"
    MEDICAL_OFFICER = "MEDICAL_OFFICER", "Medical Officer"
    STAFF_NURSE = "STAFF_NURSE", "Staff Nurse"
    CHARGE_NURSE = "CHARGE_NURSE", "Charge Nurse"
    INFECTION_CONTROL_NURSE = "INFECTION_CONTROL_NURSE", "Infection Control Nurse"
    LABORATORY_TECHNICIAN = "LABORATORY_TECHNICIAN", "Laboratory Technician"
    VIEWER = "VIEWER", "Viewer"


class DepartmentType(models.TextChoices):
    ICU = "ICU", "Intensive Care Unit"
    NICU = "NICU", "Neonatal ICU"
    PICU = "PICU", "Pediatric ICU"
    CCU = "CCU", "Cardiac Care Unit"
    GENERAL_SURGERY = "GENERAL_SURGERY", "General Surgery"
    ORTHOPEDIC = "ORTHOPEDIC", "Orthopedic"
    CARDIAC_SURGERY = "CARDIAC_SURGERY", "Cardiac Surgery"
    NEUROSURGERY = "NEUROSURGERY", "Neurosurgery"
    OBSTETRICS_GYNECOLOGY = "OBSTETRICS_GYNECOLOGY", "Obstetrics & Gynecology"
    PEDIATRICS = "PEDIATRICS", "Pediatrics"
    INTERNAL_MEDICINE = "INTERNAL_MEDICINE", "Internal Medicine"
    EMERGENCY = "EMERGENCY", "Emergency Department"
    DIALYSIS = "DIALYSIS", "Dialysis Unit"
    ONCOLOGY = "ONCOLOGY", "Oncology"
    BURNS_UNIT = "BURNS_UNIT", "Burns Unit"
    LABORATORY = "LABORATORY", "Laboratory"
    RADIOLOGY = "RADIOLOGY", "Radiology"
    PHARMACY = "PHARMACY", "Pharmacy"
    IPC_COMMITTEE = "IPC_COMMITTEE", "IPC Committee"


class FormType(models.TextChoices):
    CAUTI = "CAUTI", "Catheter-Associated UTI"
    CLABSI = "CLABSI", "Central Line-Associated BSI"
    CLABSI_BUNDLE = "CLABSI_BUNDLE", "CLABSI Bundle Compliance"
    SSI = "SSI", "Surgical Site Infection"
    VAP = "VAP", "Ventilator-Associated Pneumonia"
    HAP = "HAP", "Hospital-Acquired Pneumonia"
    MDRO = "MDRO", "Multi-Drug Resistant Organism"
    C_DIFF = "C_DIFF", "C. difficile Infection"
    MRSA = "MRSA", "MRSA Surveillance"
    VRE = "VRE", "VRE Surveillance"
    ESBL = "ESBL", "ESBL Surveillance"


class ReviewStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"
    REQUIRES_REVISION = "requires_revision", "Requires Revision"


# Roles that bypass the role/department intersection entirely.
FULL_ACCESS_ROLES = frozenset({UserRole.ADMIN.value, UserRole.IPC_FOCAL.value, UserRole.IPC_OFFICER.value})

# Roles that may see every department's data.
CROSS_DEPARTMENT_ROLES = frozenset({UserRole.ADMIN.value, UserRole.IPC_FOCAL.value})

# Roles allowed to move a record out of "pending".
REVIEWER_ROLES = frozenset({UserRole.ADMIN.value, UserRole.IPC_FOCAL.value, UserRole.IPC_OFFICER.value})

SURGICAL_DEPARTMENTS = (
    DepartmentType.GENERAL_SURGERY,
    DepartmentType.OBSTETRICS_GYNECOLOGY,
    DepartmentType.ORTHOPEDIC,
    DepartmentType.CARDIAC_SURGERY,
    DepartmentType.NEUROSURGERY,
)
