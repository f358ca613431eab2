# orgs/views.py
from __future__ import annotations

import logging

from rest_framework import decorators, exceptions, filters, response, viewsets
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema

from core.permissions import ReadOnlyOrAdmin
from legal_documents.filters import LegalDocumentFilter
from legal_documents.logic import queries
from legal_documents.serializers import LegalDocumentSerializer
from legal_documents.views import include_deleted_param, wants_deleted

from .filters import OrgFilter
from .models import Org
from .serializers import OrgSerializer

log = logging.getLogger(__name__)


class OrgViewSet(viewsets.ModelViewSet):
    """
    Organisation directory.
    - DELETE soft-deletes; the org stays reachable by id and keeps its records
    - hosted-legal-documents / legal-documents list the active records on either side
    """
    serializer_class = OrgSerializer
    permission_classes = [ReadOnlyOrAdmin]
    queryset = Org.objects.none()  # for schema generation
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = OrgFilter
    search_fields = ["name"]
    ordering_fields = ["name", "created_at", "id"]
    ordering = ["name", "id"]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Org.objects.none()
        if self.action == "list" and not wants_deleted(self.request):
            return Org.objects.all()
        return Org.all_objects.all()

    @swagger_auto_schema(operation_summary="List organisations", manual_parameters=[include_deleted_param])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def perform_destroy(self, instance):
        instance.soft_delete()
        log.info("Org soft-deleted org=%s", instance.pk)

    @swagger_auto_schema(operation_summary="Restore a soft-deleted organisation")
    @decorators.action(detail=True, methods=["post"])
    def restore(self, request, *args, **kwargs):
        org = self.get_object()
        org.restore()
        log.info("Org restored org=%s", org.pk)
        return response.Response(self.get_serializer(org).data)

    @swagger_auto_schema(operation_summary="Legal documents this organisation collects as host")
    @decorators.action(detail=True, methods=["get"], url_path="hosted-legal-documents")
    def hosted_legal_documents(self, request, *args, **kwargs):
        org = self.get_object()
        docs = self._filter_documents(request, queries.find_by_requesting_org(org.pk))
        return response.Response(LegalDocumentSerializer(docs, many=True).data)

    @swagger_auto_schema(operation_summary="Legal documents about this organisation")
    @decorators.action(detail=True, methods=["get"], url_path="legal-documents")
    def legal_documents(self, request, *args, **kwargs):
        org = self.get_object()
        docs = self._filter_documents(request, queries.find_by_subject_org(org.pk))
        return response.Response(LegalDocumentSerializer(docs, many=True).data)

    @staticmethod
    def _filter_documents(request, queryset):
        # Same query parameters as /api/legal-documents/ (fiscal_year, request_status, ...)
        filterset = LegalDocumentFilter(request.query_params, queryset=queryset, request=request)
        if not filterset.is_valid():
            raise exceptions.ValidationError(filterset.errors)
        return filterset.qs
