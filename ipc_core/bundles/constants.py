from django.db import models


class ShiftType(models.TextChoices):
    MORNING = "M", "Morning"
    AFTERNOON = "A", "Afternoon"
    NIGHT = "N", "Night"


class DischargeType(models.TextChoices):
    DISCHARGED = "discharged", "Discharged"
    DECEASED = "deceased", "Deceased"
    TRANSFERRED = "transferred", "Transferred"


# Skin prep with 2% CHG is only expected on the admission shift.
ADMISSION_COMPONENT = "skin_prep_2chg"
DAILY_COMPONENTS = (
    "dressing_change_daily",
    "patency_lumens",
    "hub_care_alcohol",
    "iv_tubing_change_daily",
)
BUNDLE_COMPONENTS = (ADMISSION_COMPONENT, *DAILY_COMPONENTS)

COMPONENT_LABELS = {
    "skin_prep_2chg": "skin_prep",
    "dressing_change_daily": "dressing_change",
    "patency_lumens": "patency_check",
    "hub_care_alcohol": "hub_care",
    "iv_tubing_change_daily": "iv_tubing_change",
}

LOW_COMPLIANCE_THRESHOLD = 60
PERFECT_COMPLIANCE = 100
