# ipc_core/bundles/api/views.py
from __future__ import annotations

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.response import Response

from ipc_core.bundles.api.serializers import (
    BundleStatsSerializer,
    ClabsiBundleEntrySerializer,
    ComplianceBreakdownSerializer,
    DischargeRequestSerializer,
    DischargeResponseSerializer,
    PatientOverviewSerializer,
)
from ipc_core.bundles.filters import ClabsiBundleEntryFilter
from ipc_core.bundles.selectors import (
    bundle_stats,
    component_breakdown,
    patient_history,
    patient_overview,
    scoped_entries,
)
from ipc_core.bundles.services import BundleService, DuplicateBundleEntry
from ipc_core.common.api.exceptions import ConflictError, validation_payload
from ipc_core.common.permissions import FormAccessPermission
from ipc_core.iam.constants import FormType
from ipc_core.iam.session import get_session_context
from ipc_core.surveillance.api.views import rejected_to_drf
from ipc_core.surveillance.services import SubmissionRejected


class ClabsiBundleEntryViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    CLABSI bundle compliance entries.

    list / retrieve:  GET    /clabsi-bundle/[{id}/]
    create:           POST   /clabsi-bundle/
    destroy:          DELETE /clabsi-bundle/{id}/       creator or administrator
    patients:         GET    /clabsi-bundle/patients/
    history:          GET    /clabsi-bundle/patients/{patient_id}/history/
    stats:            GET    /clabsi-bundle/stats/
    breakdown:        GET    /clabsi-bundle/breakdown/
    discharge:        POST   /clabsi-bundle/discharge/
    """
    permission_classes = [FormAccessPermission]
    form_type = FormType.CLABSI_BUNDLE.value
    serializer_class = ClabsiBundleEntrySerializer
    filterset_class = ClabsiBundleEntryFilter
    ordering_fields = ["entry_date", "created_at", "compliance_score"]

    def get_queryset(self):
        return scoped_entries(profile=get_session_context(self.request).profile)

    def create(self, request):
        ctx = get_session_context(request)
        try:
            entry = BundleService.create_entry(data=request.data, profile=ctx.profile, actor_user_id=request.user.id)
        except SubmissionRejected as e:
            raise rejected_to_drf(e)
        except DuplicateBundleEntry as e:
            raise ConflictError(detail=validation_payload(e))

        return Response(ClabsiBundleEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        entry = self.get_object()
        try:
            BundleService.delete_entry(
                entry=entry,
                profile=get_session_context(request).profile,
                actor_user_id=request.user.id,
            )
        except DjangoPermissionDenied as e:
            raise PermissionDenied(str(e))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: PatientOverviewSerializer(many=True)})
    @action(detail=False, methods=["get"])
    def patients(self, request):
        rows = patient_overview(profile=get_session_context(request).profile)
        return Response(PatientOverviewSerializer(rows, many=True).data)

    @extend_schema(responses={200: ClabsiBundleEntrySerializer(many=True)})
    @action(detail=False, methods=["get"], url_path=r"patients/(?P<patient_id>[^/.]+)/history")
    def history(self, request, patient_id=None):
        entries = patient_history(profile=get_session_context(request).profile, patient_id=patient_id.strip().upper())
        if not entries.exists():
            raise NotFound(f"No bundle entries found for patient {patient_id}.")
        return Response(ClabsiBundleEntrySerializer(entries, many=True).data)

    @extend_schema(responses={200: BundleStatsSerializer})
    @action(detail=False, methods=["get"])
    def stats(self, request):
        data = bundle_stats(profile=get_session_context(request).profile)
        return Response(BundleStatsSerializer(data).data)

    @extend_schema(responses={200: ComplianceBreakdownSerializer})
    @action(detail=False, methods=["get"])
    def breakdown(self, request):
        data = component_breakdown(profile=get_session_context(request).profile)
        return Response(ComplianceBreakdownSerializer(data).data)

    @extend_schema(request=DischargeRequestSerializer, responses={200: DischargeResponseSerializer})
    @action(detail=False, methods=["post"])
    def discharge(self, request):
        ser = DischargeRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        patient_id = ser.validated_data["patient_id"]

        # department scoping: the caller must see this patient's entries
        if not scoped_entries(profile=get_session_context(request).profile).filter(patient_id=patient_id).exists():
            raise ValidationError({"patient_id": f"No bundle entries found for patient {patient_id}."})

        try:
            updated = BundleService.record_discharge(actor_user_id=request.user.id, **ser.validated_data)
        except DjangoValidationError as e:
            raise ValidationError(validation_payload(e))

        return Response({"patient_id": patient_id, "updated": updated}, status=status.HTTP_200_OK)
