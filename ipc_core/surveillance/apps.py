from django.apps import AppConfig


class SurveillanceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ipc_core.surveillance"
    verbose_name = "Infection surveillance"
