from django.apps import AppConfig


class BundlesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ipc_core.bundles"
    verbose_name = "CLABSI bundle compliance"
