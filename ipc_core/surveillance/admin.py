# ipc_core/surveillance/admin.py
from django.contrib import admin

from ipc_core.surveillance.models import CautiSurveillance, ClabsiSurveillance, MdroSurveillance, SsiCase


class ReviewedRecordAdmin(admin.ModelAdmin):
    list_display = ("form_number", "patient_name", "hospital_id", "department", "review_status", "created_at")
    list_filter = ("department", "review_status")
    search_fields = ("form_number", "patient_name", "hospital_id")
    readonly_fields = ("form_number", "submitted_by", "reviewed_by", "reviewed_at", "created_at", "updated_at")
    ordering = ("-created_at",)


@admin.register(CautiSurveillance)
class CautiSurveillanceAdmin(ReviewedRecordAdmin):
    pass


@admin.register(ClabsiSurveillance)
class ClabsiSurveillanceAdmin(ReviewedRecordAdmin):
    pass


@admin.register(MdroSurveillance)
class MdroSurveillanceAdmin(ReviewedRecordAdmin):
    list_display = ("form_number", "patient_name", "pathogen_isolated", "mdr_organism_type", "department", "review_status")
    list_filter = ("department", "review_status", "mdr_organism_type", "outcome")


@admin.register(SsiCase)
class SsiCaseAdmin(admin.ModelAdmin):
    list_display = ("form_number", "patient_name", "procedure_name", "department", "priority", "current_status", "suspicion_date")
    list_filter = ("department", "priority", "current_status")
    search_fields = ("form_number", "patient_name", "hospital_id", "procedure_name")
    ordering = ("-suspicion_date",)
