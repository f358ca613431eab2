from django import forms
from django.contrib import admin, messages

from core.errors import DomainError
from orgs.models import Org
from .logic import store, workflow
from .logic.validation import validate_fields
from .models import LegalDocument


class LegalDocumentAdminForm(forms.ModelForm):
    class Meta:
        model = LegalDocument
        fields = ["fiscal_year", "document_type", "request_status", "document_link", "requesting_org", "subject_org"]
        widgets = {
            "document_link": forms.TextInput(attrs={"style": "min-width: 40em;"}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ("requesting_org", "subject_org"):
            if name in self.fields:
                self.fields[name].queryset = Org.all_objects.all()

    def clean(self):
        cleaned = super().clean()
        try:
            if self.instance.pk:
                changed = {n: cleaned.get(n) for n in self.changed_data if n in LegalDocument.MUTABLE_FIELDS}
                validate_fields(changed)
                if "request_status" in changed:
                    workflow.validate_transition(self.initial.get("request_status"), changed["request_status"])
                return cleaned
            store.validate_new(
                fiscal_year=cleaned.get("fiscal_year"),
                requesting_org_id=getattr(cleaned.get("requesting_org"), "pk", None),
                subject_org_id=getattr(cleaned.get("subject_org"), "pk", None),
                document_type=cleaned.get("document_type"),
            )
        except DomainError as exc:
            raise forms.ValidationError({exc.field: exc.message} if exc.field in self.fields else exc.message)
        return cleaned


@admin.register(LegalDocument)
class LegalDocumentAdmin(admin.ModelAdmin):
    form = LegalDocumentAdminForm
    list_display = ("id", "fiscal_year", "document_type", "request_status", "requesting_org", "subject_org", "deleted_at")
    search_fields = ("requesting_org__name", "subject_org__name", "document_link")
    list_filter = ("request_status", "document_type", "fiscal_year")
    readonly_fields = ("created_at", "updated_at", "deleted_at")
    actions = ["soft_delete_selected"]

    def get_queryset(self, request):
        return LegalDocument.all_objects.select_related("requesting_org", "subject_org")

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            # Both parties are fixed once the record exists
            return (*self.readonly_fields, "requesting_org", "subject_org")
        return self.readonly_fields

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop("delete_selected", None)
        return actions

    def save_model(self, request, obj, form, change):
        if not change:
            saved = store.create(
                fiscal_year=obj.fiscal_year,
                requesting_org_id=obj.requesting_org_id,
                subject_org_id=obj.subject_org_id,
                document_type=obj.document_type,
                document_link=obj.document_link,
            )
            obj.pk = saved.pk
            obj._state.adding = False
            store.reload(obj)
            if form.cleaned_data.get("request_status") not in (None, "", obj.request_status):
                store.update(obj, {"request_status": form.cleaned_data["request_status"]})
            return
        fields = {name: getattr(obj, name) for name in form.changed_data if name in LegalDocument.MUTABLE_FIELDS}
        store.update(obj, fields)

    def delete_model(self, request, obj):
        store.soft_delete(obj)

    @admin.action(description="Soft-delete selected legal documents")
    def soft_delete_selected(self, request, queryset):
        for doc in queryset.filter(deleted_at__isnull=True):
            store.soft_delete(doc)
        self.message_user(request, "Selected legal documents were soft-deleted.", messages.SUCCESS)
