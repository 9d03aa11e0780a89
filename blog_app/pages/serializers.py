from rest_framework import serializers
from .models import PageDetails

class PageDetailsSerializer(serializers.ModelSerializer):
    class Meta:
        model = PageDetails
        fields = ["slug", "view_count", "likes", "created_at", "updated_at"]
        read_only_fields = fields
