from rest_framework import serializers

from .models import LegalDocument


class LegalDocumentSerializer(serializers.ModelSerializer):
    # Everything below is checked by the store (membership in the configured
    # sets, year floor, org resolution), so the serializer only shapes data.
    fiscal_year = serializers.IntegerField(required=False, allow_null=True)
    document_type = serializers.CharField(required=False, allow_null=True)
    request_status = serializers.CharField(read_only=True)
    requesting_org = serializers.IntegerField(source="requesting_org_id", required=False, allow_null=True)
    subject_org = serializers.IntegerField(source="subject_org_id", required=False, allow_null=True)

    class Meta:
        model = LegalDocument
        fields = [
            "id", "fiscal_year", "document_type", "request_status", "document_link",
            "requesting_org", "subject_org", "created_at", "updated_at", "deleted_at",
        ]
        read_only_fields = ["created_at", "updated_at", "deleted_at"]


class LegalDocumentUpdateSerializer(serializers.Serializer):
    """PATCH body: only the fields the collection workflow may change."""
    request_status = serializers.CharField(required=False)
    document_link = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    document_type = serializers.CharField(required=False)
    fiscal_year = serializers.IntegerField(required=False)
