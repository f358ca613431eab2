# legal_documents/logic/validation.py
"""Checks run before every write of a LegalDocument."""
from __future__ import annotations

from core.errors import ValidationError

from ..models import MIN_FISCAL_YEAR
from . import workflow


def validate_fiscal_year(value) -> int:
    if value is None or value == "":
        raise ValidationError("Fiscal year is required.", field="fiscal_year")
    if isinstance(value, str):
        text = value.strip()
        # str.isdigit() alone is true for "²", which int() refuses
        if not (text.isascii() and text.isdigit()):
            raise ValidationError(f"{value!r} is not a valid fiscal year.", field="fiscal_year")
        year = int(text)
    elif isinstance(value, int) and not isinstance(value, bool):
        year = value
    else:
        raise ValidationError(f"{value!r} is not a valid fiscal year.", field="fiscal_year")
    if year < MIN_FISCAL_YEAR:
        raise ValidationError(
            f"Fiscal year must be {MIN_FISCAL_YEAR} or later (got {year}).",
            field="fiscal_year",
        )
    return year


def validate_document_link(value):
    if value is not None and not isinstance(value, str):
        raise ValidationError("Document link must be a string.", field="document_link")
    return value


def validate_org_id(value, field: str):
    if value is None or value == "":
        raise ValidationError("This organisation reference is required.", field=field)
    return value


# Per-field checks shared by save(), store.update() and QuerySet.update().
FIELD_VALIDATORS = {
    "fiscal_year": validate_fiscal_year,
    "request_status": workflow.validate_status,
    "document_type": workflow.validate_document_type,
    "document_link": validate_document_link,
}


def validate_fields(fields: dict) -> dict:
    """Validate a partial mapping of field values; returns the cleaned mapping."""
    cleaned = dict(fields)
    for name, value in fields.items():
        check = FIELD_VALIDATORS.get(name)
        if check is not None:
            cleaned[name] = check(value)
        elif name in ("requesting_org", "subject_org", "requesting_org_id", "subject_org_id"):
            validate_org_id(value, name.removesuffix("_id"))
    return cleaned


def validate_document(doc) -> None:
    """Validate every invariant of ``doc`` as it would be written."""
    doc.fiscal_year = validate_fiscal_year(doc.fiscal_year)
    workflow.validate_document_type(doc.document_type)
    workflow.validate_status(doc.request_status)
    validate_document_link(doc.document_link)
    validate_org_id(doc.requesting_org_id, "requesting_org")
    validate_org_id(doc.subject_org_id, "subject_org")
    if doc._state.adding and not _references_attached(doc):
        from .references import resolve_references

        resolve_references(doc.requesting_org_id, doc.subject_org_id)


def _references_attached(doc) -> bool:
    # Org instances handed to the constructor were already resolved by the caller.
    for name in ("requesting_org", "subject_org"):
        field = doc._meta.get_field(name)
        if not field.is_cached(doc) or getattr(doc, name).pk is None:
            return False
    return True
