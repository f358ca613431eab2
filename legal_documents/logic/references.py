# legal_documents/logic/references.py
"""
Resolution of the two organisation references a legal document carries.

An org counts as existing in any lifecycle state short of being physically
removed. Nothing here (or anywhere else) reacts to org deletion: the records
outlive the soft delete of either party.
"""
from __future__ import annotations

from core.errors import ReferentialError
from orgs import directory

from .validation import validate_org_id


def resolve_org(org_id, field: str):
    validate_org_id(org_id, field)
    if not directory.exists(org_id):
        raise ReferentialError(f"Organisation {org_id!r} does not exist.", field=field)
    return directory.get(org_id)


def resolve_references(requesting_org_id, subject_org_id):
    """Return ``(requesting_org, subject_org)``; both ids must resolve."""
    # Both ids must be present before either is looked up.
    validate_org_id(requesting_org_id, "requesting_org")
    validate_org_id(subject_org_id, "subject_org")
    return (
        resolve_org(requesting_org_id, "requesting_org"),
        resolve_org(subject_org_id, "subject_org"),
    )
