# legal_documents/logic/queries.py
from __future__ import annotations

from orgs import directory
from orgs.models import Org

from ..models import LegalDocument


def _scoped(qs, fiscal_year=None, request_status=None):
    if fiscal_year is not None:
        qs = qs.filter(fiscal_year=fiscal_year)
    if request_status is not None:
        qs = qs.filter(request_status=request_status)
    return qs.order_by("created_at", "id")


def find_by_requesting_org(org_id, fiscal_year=None, request_status=None):
    """Active records the given host is collecting, oldest first."""
    qs = LegalDocument.objects.filter(requesting_org_id=org_id)
    return _scoped(qs, fiscal_year, request_status)


def find_by_subject_org(org_id, fiscal_year=None, request_status=None):
    """Active records about the given organisation, oldest first."""
    qs = LegalDocument.objects.filter(subject_org_id=org_id)
    return _scoped(qs, fiscal_year, request_status)


def find_for_year(document_type, fiscal_year, subject_org_id) -> LegalDocument | None:
    """Latest active document of a type for one organisation and year."""
    return (
        LegalDocument.objects
        .filter(document_type=document_type, fiscal_year=fiscal_year, subject_org_id=subject_org_id)
        .order_by("-created_at", "-id")
        .first()
    )


def get_requesting_org(record: LegalDocument) -> Org:
    return directory.get(record.requesting_org_id)


def get_subject_org(record: LegalDocument) -> Org:
    return directory.get(record.subject_org_id)
