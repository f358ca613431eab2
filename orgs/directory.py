# orgs/directory.py
"""
Read-only view of organisations for code that references them by id.

Lookups here ignore the soft-delete flag: an org that was soft-deleted still
"exists" for anybody holding a reference to it. Only a physically removed row
is reported as missing.
"""
from __future__ import annotations

from core.errors import NotFoundError

from .models import Org


def exists(org_id) -> bool:
    if org_id is None:
        return False
    try:
        return Org.all_objects.filter(pk=org_id).exists()
    except (ValueError, TypeError):
        return False


def get(org_id) -> Org:
    try:
        return Org.all_objects.get(pk=org_id)
    except (Org.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Organisation {org_id!r} does not exist.", field="org") from None
