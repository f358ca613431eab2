"""
URL configuration for config project.
"""
from django.contrib import admin
from django.urls import path, include

# --- DRF / API ---
from rest_framework.routers import DefaultRouter
from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

from orgs.views import OrgViewSet
from legal_documents.views import LegalDocumentViewSet
from core.views import health_view

# DRF router (API)
router = DefaultRouter()
router.register(r"orgs", OrgViewSet, basename="org")
router.register(r"legal-documents", LegalDocumentViewSet, basename="legal-document")

schema_view = get_schema_view(
    openapi.Info(
        title="Legal Documents API",
        default_version="v1",
        description="Tax-form requests a host collects from the organisations it hosts.",
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

urlpatterns = [
    # ---------- Admin ----------
    path("admin/", admin.site.urls),

    # ---------- API ----------
    path("api/", include(router.urls)),
    path("api/health/", health_view, name="health-check"),

    # ---------- API docs ----------
    path("swagger/", schema_view.with_ui("swagger", cache_timeout=0), name="schema-swagger-ui"),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
]
