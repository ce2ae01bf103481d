from django.contrib import admin

from ipc_core.bundles.models import ClabsiBundleEntry


@admin.register(ClabsiBundleEntry)
class ClabsiBundleEntryAdmin(admin.ModelAdmin):
    list_display = ("patient_id", "entry_date", "shift", "day_number", "compliance_score", "department", "nurse_name")
    list_filter = ("department", "shift", "discharge_type")
    search_fields = ("patient_id", "nurse_name")
    readonly_fields = ("day_number", "compliance_score", "created_by", "created_at", "updated_at")
    ordering = ("-entry_date", "patient_id")
