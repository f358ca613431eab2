# orgs/serializers.py
from rest_framework import serializers
from .models import Org

class OrgSerializer(serializers.ModelSerializer):
    is_deleted = serializers.BooleanField(read_only=True)

    class Meta:
        model = Org
        fields = ["id", "name", "description", "created_at", "updated_at", "deleted_at", "is_deleted"]
        read_only_fields = ["created_at", "updated_at", "deleted_at"]
