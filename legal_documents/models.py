from __future__ import annotations

from django.db import models
from django.utils import timezone

from orgs.models import Org

# Earliest fiscal year the tax-form regime is tracked for.
MIN_FISCAL_YEAR = 2015


class LegalDocumentQuerySet(models.QuerySet):
    def active(self):
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        return self.filter(deleted_at__isnull=False)

    def update(self, **kwargs):
        # Bulk updates skip save(); run the same field checks here.
        from .logic.validation import validate_fields

        validate_fields(kwargs)
        return super().update(**kwargs)

    def bulk_create(self, objs, *args, **kwargs):
        from .logic.validation import validate_document

        objs = list(objs)
        for doc in objs:
            validate_document(doc)
        return super().bulk_create(objs, *args, **kwargs)


class ActiveLegalDocumentManager(models.Manager.from_queryset(LegalDocumentQuerySet)):
    def get_queryset(self):
        return super().get_queryset().active()


class LegalDocument(models.Model):
    class RequestStatus(models.TextChoices):
        NOT_REQUESTED = "NOT_REQUESTED", "Not requested"
        REQUESTED = "REQUESTED", "Requested"
        RECEIVED = "RECEIVED", "Received"

    class DocumentType(models.TextChoices):
        US_TAX_FORM = "US_TAX_FORM", "US tax form"

    fiscal_year = models.PositiveIntegerField()
    document_type = models.CharField(
        max_length=32,
        choices=DocumentType.choices,
        default=DocumentType.US_TAX_FORM,
    )
    request_status = models.CharField(
        max_length=32,
        choices=RequestStatus.choices,
        default=RequestStatus.NOT_REQUESTED,
    )
    # Pointer into the external document store; the file itself never lives here.
    document_link = models.TextField(blank=True, null=True)

    # Plain references: deleting (soft or otherwise) an org must never remove a
    # tax record, and a physical delete of a referenced org is refused.
    requesting_org = models.ForeignKey(
        Org,
        on_delete=models.PROTECT,
        related_name="hosted_legal_documents",
    )
    subject_org = models.ForeignKey(
        Org,
        on_delete=models.PROTECT,
        related_name="legal_documents",
    )

    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = ActiveLegalDocumentManager()
    all_objects = LegalDocumentQuerySet.as_manager()

    # Fields the collection workflow may change after creation.
    MUTABLE_FIELDS = ("request_status", "document_link", "document_type", "fiscal_year")

    class Meta:
        ordering = ("created_at", "id")
        base_manager_name = "all_objects"
        indexes = [
            models.Index(fields=["requesting_org", "fiscal_year"], name="legaldoc_host_year_idx"),
            models.Index(fields=["subject_org", "fiscal_year"], name="legaldoc_subject_year_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(fiscal_year__gte=MIN_FISCAL_YEAR),
                name="legaldoc_fiscal_year_min",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.get_document_type_display()} {self.fiscal_year} ({self.request_status})"

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def save(self, *args, **kwargs):
        from .logic.validation import validate_document

        validate_document(self)
        super().save(*args, **kwargs)

    def delete(self, using=None, keep_parents=False):
        # Tax records are kept for audit; "delete" only hides them.
        if self.deleted_at is None:
            self.deleted_at = timezone.now()
            super().save(update_fields=["deleted_at", "updated_at"])
        return 0, {}
