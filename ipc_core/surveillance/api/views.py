# ipc_core/surveillance/api/views.py
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from ipc_core.common.api.exceptions import ConflictError, validation_payload
from ipc_core.common.api.pagination import paginate
from ipc_core.common.permissions import FormAccessPermission
from ipc_core.iam.constants import FormType
from ipc_core.iam.session import get_session_context
from ipc_core.surveillance.api.serializers import (
    CautiSubmissionSerializer,
    ClabsiSubmissionSerializer,
    MdroSubmissionSerializer,
    ReviewRequestSerializer,
    SsiCaseSerializer,
    SsiStatusUpdateSerializer,
)
from ipc_core.surveillance.filters import CautiFilter, ClabsiFilter, MdroFilter, SsiCaseFilter
from ipc_core.surveillance.selectors import scoped_records, ssi_watchlist
from ipc_core.surveillance.services import SubmissionRejected, SurveillanceService


def rejected_to_drf(exc: SubmissionRejected) -> ValidationError:
    return ValidationError(
        {
            "detail": "Submission failed validation.",
            "errors": [{"field": f, "message": m} for f, m in exc.field_errors],
        }
    )


class SurveillanceRecordViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Base for one surveillance form.

    list / retrieve:  GET  /<form>/[{id}/]
    create:           POST /<form>/           -> validated submission
    """
    permission_classes = [FormAccessPermission]
    form_type: str = ""
    search_fields = ["patient_name", "hospital_id", "form_number"]
    ordering_fields = ["created_at", "department"]

    def get_queryset(self):
        model = self.get_serializer_class().Meta.model
        return scoped_records(model, profile=get_session_context(self.request).profile)

    def create(self, request):
        ctx = get_session_context(request)
        try:
            record = SurveillanceService.submit(
                form_type=self.form_type,
                data=request.data,
                profile=ctx.profile,
                actor_user_id=request.user.id,
            )
        except SubmissionRejected as e:
            raise rejected_to_drf(e)

        return Response(self.get_serializer(record).data, status=status.HTTP_201_CREATED)


class ReviewedRecordViewSet(SurveillanceRecordViewSet):
    """
    review:  POST /<form>/{id}/review/   (IPC reviewers only)
    """
    ordering_fields = ["created_at", "department", "review_status"]

    @extend_schema(request=ReviewRequestSerializer)
    @action(detail=True, methods=["post"])
    def review(self, request, pk=None):
        record = self.get_object()
        ser = ReviewRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            record = SurveillanceService.review(
                record=record,
                review_status=ser.validated_data["review_status"],
                review_notes=ser.validated_data.get("review_notes", ""),
                reviewer=get_session_context(request).profile,
                actor_user_id=request.user.id,
            )
        except DjangoValidationError as e:
            raise ConflictError(detail=validation_payload(e))

        return Response(self.get_serializer(record).data, status=status.HTTP_200_OK)


class CautiViewSet(ReviewedRecordViewSet):
    form_type = FormType.CAUTI.value
    serializer_class = CautiSubmissionSerializer
    filterset_class = CautiFilter


class ClabsiViewSet(ReviewedRecordViewSet):
    form_type = FormType.CLABSI.value
    serializer_class = ClabsiSubmissionSerializer
    filterset_class = ClabsiFilter


class MdroViewSet(ReviewedRecordViewSet):
    form_type = FormType.MDRO.value
    serializer_class = MdroSubmissionSerializer
    filterset_class = MdroFilter
    search_fields = ["patient_name", "hospital_id", "form_number", "pathogen_isolated"]


class SsiCaseViewSet(SurveillanceRecordViewSet):
    """
    SSI cases.

    watchlist:  GET  /ssi/watchlist/     open cases, HIGH -> LOW, oldest suspicion first
    status:     POST /ssi/{id}/status/
    """
    form_type = FormType.SSI.value
    serializer_class = SsiCaseSerializer
    filterset_class = SsiCaseFilter
    ordering_fields = ["created_at", "suspicion_date", "priority"]

    @extend_schema(responses={200: SsiCaseSerializer(many=True)})
    @action(detail=False, methods=["get"])
    def watchlist(self, request):
        qs = ssi_watchlist(profile=get_session_context(request).profile)
        return paginate(request, qs, SsiCaseSerializer)

    @extend_schema(request=SsiStatusUpdateSerializer, responses={200: SsiCaseSerializer})
    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):
        case = self.get_object()
        ser = SsiStatusUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            case = SurveillanceService.update_ssi_status(
                case=case,
                current_status=ser.validated_data["current_status"],
                status_notes=ser.validated_data.get("status_notes", ""),
                actor_user_id=request.user.id,
            )
        except DjangoValidationError as e:
            raise ConflictError(detail=validation_payload(e))

        return Response(SsiCaseSerializer(case).data, status=status.HTTP_200_OK)
