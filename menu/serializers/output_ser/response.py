from rest_framework import serializers

from accounts.models import Restaurant, Branch, DeliveryArea
from menu.models import Category, MenuItem, Size, Extra
from uploads.cloudinary import cover_url, logo_url, menu_item_urls


class PublicRestaurantSerializer(serializers.ModelSerializer):
    cover_image = serializers.SerializerMethodField()
    logo = serializers.SerializerMethodField()
    working_hours = serializers.CharField(source="display_working_hours")

    class Meta:
        model = Restaurant
        fields = [
            "id", "name", "username", "description",
            "cover_image_url", "cover_image", "logo_url", "logo",
            "phone", "whatsapp_phone", "delivery_phone", "complaints_phone",
            "email", "address", "facebook_url", "instagram_url", "working_hours",
        ]

    def get_cover_image(self, obj):
        return cover_url(obj.cover_image_url)

    def get_logo(self, obj):
        return logo_url(obj.logo_url)


class CategoryOutSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "display_order"]


class SizeOutSerializer(serializers.ModelSerializer):
    class Meta:
        model = Size
        fields = ["id", "name", "price", "display_order"]


class MenuItemOutSerializer(serializers.ModelSerializer):
    """Sizes come from the storefront's sizes_by_item index passed in context."""
    sizes = serializers.SerializerMethodField()
    images = serializers.SerializerMethodField()

    class Meta:
        model = MenuItem
        fields = [
            "id", "category_id", "name", "description", "price",
            "image_url", "images", "is_available", "display_order", "sizes",
        ]

    def get_sizes(self, obj):
        sizes = self.context.get("sizes_by_item", {}).get(obj.id, [])
        return SizeOutSerializer(sizes, many=True).data

    def get_images(self, obj):
        return menu_item_urls(obj.image_url)


class ExtraOutSerializer(serializers.ModelSerializer):
    class Meta:
        model = Extra
        fields = ["id", "name", "price", "display_order"]


class DeliveryAreaOutSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliveryArea
        fields = ["id", "branch_id", "name", "delivery_price", "display_order"]


class BranchOutSerializer(serializers.ModelSerializer):
    delivery_areas = serializers.SerializerMethodField()

    class Meta:
        model = Branch
        fields = [
            "id", "name", "address", "phone", "whatsapp_phone", "delivery_phone",
            "working_hours", "display_order", "delivery_areas",
        ]

    def get_delivery_areas(self, obj):
        areas = self.context.get("areas_by_branch", {}).get(obj.id, [])
        return DeliveryAreaOutSerializer(areas, many=True).data


def serialize_storefront(storefront, is_owner=False):
    context = {
        "sizes_by_item": storefront.sizes_by_item,
        "areas_by_branch": storefront.areas_by_branch,
    }
    data = {
        "restaurant": PublicRestaurantSerializer(storefront.restaurant).data,
        "categories": CategoryOutSerializer(storefront.categories, many=True).data,
        "menu_items": MenuItemOutSerializer(storefront.items, many=True, context=context).data,
        "extras": ExtraOutSerializer(storefront.extras, many=True).data,
        "branches": BranchOutSerializer(storefront.branches, many=True, context=context).data,
        "is_owner": is_owner,
    }
    if storefront.error:
        data["detail"] = storefront.error
    return data
