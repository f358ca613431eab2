# legal_documents/views.py
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema

from core.permissions import ReadOnlyOrAdmin
from .filters import LegalDocumentFilter
from .logic import store
from .models import LegalDocument
from .serializers import LegalDocumentSerializer, LegalDocumentUpdateSerializer

include_deleted_param = openapi.Parameter(
    "include_deleted",
    openapi.IN_QUERY,
    description="Also list soft-deleted records.",
    type=openapi.TYPE_BOOLEAN,
)


def wants_deleted(request) -> bool:
    return (request.query_params.get("include_deleted") or "").lower() in {"1", "true", "yes"}


class LegalDocumentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    Tax-form records a host collects from the organisations it hosts.

    All writes go through the record store; DELETE is a soft delete and a
    deleted record stays reachable by id.
    """
    serializer_class = LegalDocumentSerializer
    permission_classes = [ReadOnlyOrAdmin]
    queryset = LegalDocument.objects.none()  # for schema generation

    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = LegalDocumentFilter
    ordering_fields = ["created_at", "updated_at", "fiscal_year", "request_status", "id"]
    ordering = ["created_at", "id"]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return LegalDocument.objects.none()
        if self.action == "list" and not wants_deleted(self.request):
            return LegalDocument.objects.all()
        # Direct lookups (and writes) reach soft-deleted records too
        return LegalDocument.all_objects.all()

    @swagger_auto_schema(
        operation_summary="List legal documents",
        manual_parameters=[include_deleted_param],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @swagger_auto_schema(
        operation_summary="Create a legal document request",
        request_body=LegalDocumentSerializer,
        responses={201: LegalDocumentSerializer},
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        doc = store.create(
            fiscal_year=data.get("fiscal_year"),
            requesting_org_id=data.get("requesting_org_id"),
            subject_org_id=data.get("subject_org_id"),
            document_type=data.get("document_type"),
            document_link=data.get("document_link"),
        )
        return Response(self.get_serializer(doc).data, status=status.HTTP_201_CREATED)

    @swagger_auto_schema(
        operation_summary="Update request status / document link",
        request_body=LegalDocumentUpdateSerializer,
        responses={200: LegalDocumentSerializer},
    )
    def partial_update(self, request, *args, **kwargs):
        doc = self.get_object()
        # Unknown or immutable keys are passed through so the store can reject them.
        fields = {key: request.data[key] for key in request.data}
        store.update(doc, fields)
        return Response(self.get_serializer(doc).data)

    @swagger_auto_schema(operation_summary="Soft-delete a legal document")
    def destroy(self, request, *args, **kwargs):
        store.soft_delete(self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @swagger_auto_schema(operation_summary="Restore a soft-deleted legal document")
    @action(detail=True, methods=["post"])
    def restore(self, request, *args, **kwargs):
        doc = store.restore(self.get_object())
        return Response(self.get_serializer(doc).data)
