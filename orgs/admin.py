from django.contrib import admin

from .models import Org


class DeletedFilter(admin.SimpleListFilter):
    title = "deleted"
    parameter_name = "deleted"

    def lookups(self, request, model_admin):
        return [("no", "Active"), ("yes", "Deleted")]

    def queryset(self, request, queryset):
        if self.value() == "yes":
            return queryset.deleted()
        if self.value() == "no":
            return queryset.active()
        return queryset


@admin.register(Org)
class OrgAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_at", "deleted_at")
    search_fields = ("name",)
    list_filter = (DeletedFilter,)
    readonly_fields = ("created_at", "updated_at", "deleted_at")
    actions = ["soft_delete_selected", "restore_selected"]

    def get_queryset(self, request):
        # Admin shows soft-deleted orgs as well
        return Org.all_objects.all()

    def get_actions(self, request):
        actions = super().get_actions(request)
        # The stock bulk action would physically delete rows
        actions.pop("delete_selected", None)
        return actions

    @admin.action(description="Soft-delete selected organisations")
    def soft_delete_selected(self, request, queryset):
        count = queryset.soft_delete()
        self.message_user(request, f"{count} organisation(s) soft-deleted.")

    @admin.action(description="Restore selected organisations")
    def restore_selected(self, request, queryset):
        count = queryset.deleted().update(deleted_at=None)
        self.message_user(request, f"{count} organisation(s) restored.")
