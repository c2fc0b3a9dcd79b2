from rest_framework import serializers
from ..models import Order


class OrderSerializer(serializers.ModelSerializer):
    class Meta:
        model = Order
        fields = [
            "id", "customer_name", "customer_phone", "notes", "items",
            "total_price", "status", "is_confirmed", "created_at", "updated_at",
        ]
        read_only_fields = fields


class OrderUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES, required=False)
    is_confirmed = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide status or is_confirmed.")
        return attrs
