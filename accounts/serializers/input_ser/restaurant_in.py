from rest_framework import serializers

from accounts.models import Restaurant, Branch, DeliveryArea, DEFAULT_WORKING_HOURS


class RestaurantSerializer(serializers.ModelSerializer):
    """
    Dashboard form. `username` has no unique validator here: a clash is
    reported as 409 by the view when the insert or update fails.
    """
    username = serializers.RegexField(r"^[a-zA-Z0-9_-]+$", max_length=64)

    class Meta:
        model = Restaurant
        fields = [
            "id", "name", "username", "description",
            "cover_image_url", "cover_image_public_id", "logo_url", "logo_public_id",
            "phone", "whatsapp_phone", "delivery_phone", "complaints_phone",
            "email", "address", "facebook_url", "instagram_url", "working_hours",
            "created_at", "updated_at",
        ]
        read_only_fields = [
            "id", "cover_image_url", "cover_image_public_id", "logo_url", "logo_public_id",
            "created_at", "updated_at",
        ]


class FooterSerializer(serializers.ModelSerializer):
    class Meta:
        model = Restaurant
        fields = ["address", "email", "facebook_url", "instagram_url", "working_hours"]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["working_hours"] = data["working_hours"] or DEFAULT_WORKING_HOURS
        return data


class DeliveryAreaSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliveryArea
        fields = ["id", "branch", "name", "delivery_price", "is_active", "display_order"]
        read_only_fields = ["branch"]

    def validate_delivery_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Delivery price cannot be negative")
        return value


class BranchSerializer(serializers.ModelSerializer):
    delivery_areas = DeliveryAreaSerializer(many=True, read_only=True)

    class Meta:
        model = Branch
        fields = [
            "id", "name", "address", "phone", "whatsapp_phone", "delivery_phone",
            "working_hours", "is_active", "display_order", "delivery_areas",
        ]
