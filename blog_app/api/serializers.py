from rest_framework import serializers
from django.conf import settings
from pages.models import PageDetails


class PageCountersSerializer(serializers.ModelSerializer):
    class Meta:
        model = PageDetails
        fields = ["slug", "view_count", "likes"]
        read_only_fields = fields


class LikeRequestSerializer(serializers.Serializer):
    """Schema for the like endpoint request body."""
    increment = serializers.IntegerField(
        min_value=1,
        default=1,
        help_text="Number of likes to add in one request.",
    )

    def validate_increment(self, value):
        max_likes = int(getattr(settings, "MAX_LIKES_PER_REQUEST", 5))
        if value > max_likes:
            raise serializers.ValidationError(
                f"At most {max_likes} likes can be added per request."
            )
        return value

