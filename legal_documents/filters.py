# legal_documents/filters.py
import django_filters
from .models import LegalDocument
from .logic import workflow


class LegalDocumentFilter(django_filters.FilterSet):
    requesting_org = django_filters.NumberFilter(
        field_name="requesting_org_id",
        label="Host organisation",
        help_text="ID of the organisation collecting the document."
    )
    subject_org = django_filters.NumberFilter(
        field_name="subject_org_id",
        label="Organisation",
        help_text="ID of the organisation the document is about."
    )
    fiscal_year = django_filters.NumberFilter(
        field_name="fiscal_year",
        label="Fiscal year",
    )
    request_status = django_filters.MultipleChoiceFilter(
        choices=[],
        label="Request status",
        help_text="Repeat the parameter for multiple values, e.g. ?request_status=REQUESTED&request_status=RECEIVED."
    )
    document_type = django_filters.ChoiceFilter(
        choices=[],
        label="Document type",
    )
    updated_after = django_filters.IsoDateTimeFilter(
        field_name="updated_at",
        lookup_expr="gte",
        label="Updated after",
        help_text="ISO 8601 datetime (e.g. 2025-08-12T15:00:00Z)."
    )
    updated_before = django_filters.IsoDateTimeFilter(
        field_name="updated_at",
        lookup_expr="lte",
        label="Updated before",
        help_text="ISO 8601 datetime (e.g. 2025-08-12T23:59:59Z)."
    )

    class Meta:
        model = LegalDocument
        fields = ["requesting_org", "subject_org", "fiscal_year", "request_status", "document_type"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Configured extra statuses/types are filterable too
        self.filters["request_status"].extra["choices"] = [(s, s) for s in sorted(workflow.allowed_statuses())]
        self.filters["document_type"].extra["choices"] = [(t, t) for t in sorted(workflow.allowed_document_types())]
