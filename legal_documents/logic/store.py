# legal_documents/logic/store.py
"""
Write path for legal documents.

Every operation validates before it touches the database and runs in its own
transaction, so a failure leaves no partial row behind.
"""
from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from core.errors import NotFoundError, ValidationError

from ..models import LegalDocument
from . import workflow
from .references import resolve_references
from .validation import (
    validate_document_link,
    validate_fields,
    validate_fiscal_year,
)

log = logging.getLogger(__name__)


def create(
    fiscal_year,
    requesting_org_id,
    subject_org_id,
    document_type=None,
    document_link=None,
) -> LegalDocument:
    """Create a record in the initial NOT_REQUESTED state."""
    year, doc_type, requesting_org, subject_org = validate_new(
        fiscal_year, requesting_org_id, subject_org_id, document_type, document_link
    )

    with transaction.atomic():
        doc = LegalDocument(
            fiscal_year=year,
            document_type=doc_type,
            request_status=workflow.INITIAL_STATUS,
            document_link=document_link,
            requesting_org=requesting_org,
            subject_org=subject_org,
        )
        doc.save()

    log.info(
        "Legal document created doc=%s year=%s host=%s org=%s",
        doc.pk, doc.fiscal_year, doc.requesting_org_id, doc.subject_org_id,
    )
    return doc


def validate_new(
    fiscal_year,
    requesting_org_id,
    subject_org_id,
    document_type=None,
    document_link=None,
):
    """
    Run every creation check without writing anything.

    Returns ``(fiscal_year, document_type, requesting_org, subject_org)``.
    """
    year = validate_fiscal_year(fiscal_year)
    doc_type = workflow.validate_document_type(document_type or workflow.DEFAULT_DOCUMENT_TYPE)
    validate_document_link(document_link)
    requesting_org, subject_org = resolve_references(requesting_org_id, subject_org_id)
    return year, doc_type, requesting_org, subject_org


def get(record_id) -> LegalDocument:
    """Direct lookup by id. Soft-deleted records are returned too."""
    try:
        return LegalDocument.all_objects.get(pk=record_id)
    except (LegalDocument.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Legal document {record_id!r} does not exist.") from None


def update(record: LegalDocument, fields: dict) -> LegalDocument:
    """
    Apply a partial update to ``record`` and persist it.

    The new values are set on ``record`` before validation, so after a
    rejected update the caller's instance still shows them; ``reload`` brings
    back what is stored.
    """
    if record.pk is None:
        raise NotFoundError("Legal document has not been saved.")
    if not fields:
        return record

    immutable = sorted(set(fields) - set(LegalDocument.MUTABLE_FIELDS))
    if immutable:
        raise ValidationError(
            f"Cannot change {', '.join(immutable)} after creation.", field=immutable[0]
        )

    for name, value in fields.items():
        setattr(record, name, value)

    try:
        cleaned = validate_fields(fields)
        with transaction.atomic():
            current = _locked(record.pk)
            if "request_status" in cleaned:
                workflow.validate_transition(current.request_status, cleaned["request_status"])
            for name, value in cleaned.items():
                setattr(current, name, value)
            current.save(update_fields=[*cleaned, "updated_at"])
    except ValidationError as exc:
        log.warning("Legal document update rejected doc=%s: %s", record.pk, exc.message)
        raise

    if "request_status" in cleaned:
        log.info("Legal document doc=%s status=%s", record.pk, cleaned["request_status"])
    reload(record)
    return record


def soft_delete(record: LegalDocument) -> LegalDocument:
    """Hide the record from default reads. Referenced orgs are left alone."""
    now = timezone.now()
    with transaction.atomic():
        current = _locked(record.pk)
        if current.deleted_at is None:
            LegalDocument.all_objects.filter(pk=current.pk).update(deleted_at=now, updated_at=now)
            log.info("Legal document soft-deleted doc=%s", current.pk)
    reload(record)
    return record


def restore(record: LegalDocument) -> LegalDocument:
    with transaction.atomic():
        current = _locked(record.pk)
        if current.deleted_at is not None:
            validate_fiscal_year(current.fiscal_year)
            LegalDocument.all_objects.filter(pk=current.pk).update(
                deleted_at=None, updated_at=timezone.now()
            )
            log.info("Legal document restored doc=%s", current.pk)
    reload(record)
    return record


def reload(record: LegalDocument) -> LegalDocument:
    """Re-read the stored state into ``record``, whatever state its orgs are in."""
    try:
        record.refresh_from_db()
    except LegalDocument.DoesNotExist:
        raise NotFoundError(f"Legal document {record.pk!r} does not exist.") from None
    return record


def _locked(record_id) -> LegalDocument:
    try:
        return LegalDocument.all_objects.select_for_update().get(pk=record_id)
    except (LegalDocument.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Legal document {record_id!r} does not exist.") from None
