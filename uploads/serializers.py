from django.conf import settings
from rest_framework import serializers


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.FileField()
    item_id = serializers.IntegerField(required=False)

    def validate_file(self, value):
        content_type = getattr(value, "content_type", "") or ""
        if not content_type.startswith("image/"):
            raise serializers.ValidationError("Please choose an image file")
        if value.size > settings.IMAGE_MAX_UPLOAD_SIZE:
            raise serializers.ValidationError("Image is too large")
        return value
