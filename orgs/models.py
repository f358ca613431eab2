from __future__ import annotations

from django.db import models
from django.utils import timezone


class OrgQuerySet(models.QuerySet):
    def active(self):
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        return self.filter(deleted_at__isnull=False)

    def soft_delete(self) -> int:
        now = timezone.now()
        return self.active().update(deleted_at=now, updated_at=now)


class ActiveOrgManager(models.Manager.from_queryset(OrgQuerySet)):
    """Default manager: hides soft-deleted organisations."""

    def get_queryset(self):
        return super().get_queryset().active()


class Org(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)
    # Soft delete only. Anything referencing an org must keep loading after this is set.
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = ActiveOrgManager()
    all_objects = OrgQuerySet.as_manager()

    class Meta:
        ordering = ("name", "id")
        # Relations (and refresh_from_db) resolve through the unfiltered manager
        base_manager_name = "all_objects"

    def __str__(self) -> str:  # pragma: no cover
        return self.name

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        if self.deleted_at is None:
            self.deleted_at = timezone.now()
            self.save(update_fields=["deleted_at", "updated_at"])

    def restore(self) -> None:
        if self.deleted_at is not None:
            self.deleted_at = None
            self.save(update_fields=["deleted_at", "updated_at"])

    def delete(self, using=None, keep_parents=False):
        self.soft_delete()
        return 0, {}

    def hard_delete(self, using=None, keep_parents=False):
        # Refused by the database (PROTECT) while legal documents still point here.
        return super().delete(using=using, keep_parents=keep_parents)
