from rest_framework import serializers

from menu.models import Category, MenuItem, Size, Extra


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "display_order"]


class SizeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Size
        fields = ["id", "menu_item", "name", "price", "display_order"]
        read_only_fields = ["menu_item"]

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value


class MenuItemSerializer(serializers.ModelSerializer):
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), allow_null=True, required=False
    )
    sizes = SizeSerializer(many=True, read_only=True)

    class Meta:
        model = MenuItem
        fields = [
            "id", "category", "name", "description", "price",
            "image_url", "image_public_id", "is_available", "display_order", "sizes",
        ]
        read_only_fields = ["image_url", "image_public_id"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        restaurant = self.context.get("restaurant")
        if restaurant is not None:
            # only the owner's own categories can be assigned
            self.fields["category"].queryset = Category.objects.filter(restaurant=restaurant)

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value


class ExtraSerializer(serializers.ModelSerializer):
    class Meta:
        model = Extra
        fields = ["id", "name", "price", "is_available", "display_order"]

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value
