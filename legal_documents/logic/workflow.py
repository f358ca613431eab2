# legal_documents/logic/workflow.py
"""
Request status workflow.

The status field is a value domain, not a state machine: any known status may
be set at any time. Deployments can add statuses (and document types) through
``settings.LEGAL_DOCUMENTS`` and can opt into a stricter policy by listing the
allowed moves in ``STATUS_TRANSITIONS``::

    LEGAL_DOCUMENTS = {
        "EXTRA_REQUEST_STATUSES": ["ERROR"],
        "STATUS_TRANSITIONS": {
            "NOT_REQUESTED": ["REQUESTED"],
            "REQUESTED": ["RECEIVED", "ERROR"],
            "ERROR": ["REQUESTED"],
        },
    }
"""
from __future__ import annotations

from django.conf import settings

from core.errors import ValidationError

from ..models import LegalDocument

RequestStatus = LegalDocument.RequestStatus
DocumentType = LegalDocument.DocumentType

INITIAL_STATUS = RequestStatus.NOT_REQUESTED
DEFAULT_DOCUMENT_TYPE = DocumentType.US_TAX_FORM


def _config() -> dict:
    return getattr(settings, "LEGAL_DOCUMENTS", None) or {}


def allowed_statuses() -> frozenset[str]:
    extra = _config().get("EXTRA_REQUEST_STATUSES") or ()
    return frozenset(RequestStatus.values) | frozenset(extra)


def allowed_document_types() -> frozenset[str]:
    extra = _config().get("EXTRA_DOCUMENT_TYPES") or ()
    return frozenset(DocumentType.values) | frozenset(extra)


def transition_policy() -> dict[str, frozenset[str]] | None:
    raw = _config().get("STATUS_TRANSITIONS")
    if not raw:
        return None
    return {state: frozenset(targets) for state, targets in raw.items()}


def validate_status(value) -> str:
    if not isinstance(value, str) or value not in allowed_statuses():
        raise ValidationError(
            f"{value!r} is not a valid request status. "
            f"Expected one of: {', '.join(sorted(allowed_statuses()))}.",
            field="request_status",
        )
    return value


def validate_document_type(value) -> str:
    if not isinstance(value, str) or value not in allowed_document_types():
        raise ValidationError(
            f"{value!r} is not a valid document type. "
            f"Expected one of: {', '.join(sorted(allowed_document_types()))}.",
            field="document_type",
        )
    return value


def validate_transition(current: str | None, new: str) -> str:
    """Check ``new`` is a known status and, under a strict policy, a permitted move."""
    validate_status(new)
    policy = transition_policy()
    if policy is None or current is None or current == new:
        return new
    if new not in policy.get(current, frozenset()):
        raise ValidationError(
            f"Cannot move request status from {current} to {new}.",
            field="request_status",
        )
    return new
