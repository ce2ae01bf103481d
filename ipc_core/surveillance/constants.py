from django.db import models


class Gender(models.TextChoices):
    MALE = "Male", "Male"
    FEMALE = "Female", "Female"


class SiteOfInfection(models.TextChoices):
    RESPIRATORY = "Respiratory", "Respiratory"
    URINARY = "Urinary", "Urinary"
    WOUND = "Wound", "Wound"
    BLOOD = "Blood", "Blood"
    OTHER = "Other", "Other"


class MdrOrganismType(models.TextChoices):
    MRSA = "MRSA", "MRSA"
    ESBL = "ESBL", "ESBL"
    CRE = "CRE", "CRE"
    VRE = "VRE", "VRE"
    MDR_TB = "MDR-TB", "MDR-TB"
    OTHER = "Other", "Other"


class MdroOutcome(models.TextChoices):
    RECOVERED = "Recovered", "Recovered"
    ONGOING_TREATMENT = "Ongoing Treatment", "Ongoing Treatment"
    EXPIRED = "Expired", "Expired"
    DAMA = "Discharged Against Medical Advice", "Discharged Against Medical Advice"


class YesNo(models.TextChoices):
    YES = "Yes", "Yes"
    NO = "No", "No"


class PrecautionType(models.TextChoices):
    CONTACT = "Contact", "Contact"
    DROPLET = "Droplet", "Droplet"
    AIRBORNE = "Airborne", "Airborne"
    OTHER = "Other", "Other"


class SsiPriority(models.TextChoices):
    HIGH = "HIGH", "High"
    MEDIUM = "MEDIUM", "Medium"
    LOW = "LOW", "Low"


class SsiStatus(models.TextChoices):
    SUSPECTED = "SUSPECTED", "Suspected"
    CONFIRMED = "CONFIRMED", "Confirmed"
    CLOSED_RECOVERED = "CLOSED_RECOVERED", "Closed (Recovered)"
    CLOSED_DECEASED = "CLOSED_DECEASED", "Closed (Deceased)"
    NOT_AN_SSI = "NOT_AN_SSI", "Not an SSI"


SSI_OPEN_STATUSES = (SsiStatus.SUSPECTED.value, SsiStatus.CONFIRMED.value)

# Checklist keys stored in the symptoms / laboratory_findings JSON columns.
CAUTI_SYMPTOMS = (
    "fever",
    "rigors",
    "hypotension",
    "confusion_with_leukocytosis",
    "costovertebral_pain",
    "suprapubic_tenderness",
    "testes_epididymis_prostate_pain",
    "purulent_discharge",
)
CAUTI_LAB_FLAGS = (
    "clean_catch_voided",
    "straight_catheter_specimen",
    "iuc_specimen",
)
CAUTI_LAB_DETAILS = (
    "culture_result",
    "organism_identified",
    "cfu_count",
    "antibiotic_sensitivity",
)

CLABSI_SYMPTOMS = (
    "fever",
    "chills",
    "hypotension",
    "altered_mental_status",
    "line_site_inflammation",
    "line_site_purulence",
)
CLABSI_LAB_DETAILS = (
    "organism_identified",
    "culture_source",
    "antibiotic_sensitivity",
    "line_tip_result",
)
CLABSI_LAB_DATES = ("blood_culture_date",)
CLABSI_LAB_FLAGS = ("line_tip_culture",)
