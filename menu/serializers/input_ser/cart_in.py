from rest_framework import serializers


class CartItemInputSerializer(serializers.Serializer):
    """
    Drives the product configuration dialog:
    {"menu_item_id": 1, "size_id": 2, "extra_ids": [3, 4], "quantity": 2}
    """
    menu_item_id = serializers.IntegerField()
    size_id = serializers.IntegerField(required=False, allow_null=True)
    extra_ids = serializers.ListField(
        child=serializers.IntegerField(), required=False, allow_empty=True
    )
    quantity = serializers.IntegerField(required=False, default=1)


class CartRemoveSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    size_id = serializers.IntegerField(required=False, allow_null=True)
    # comma separated extra ids, as returned in each line's "key"
    extras_key = serializers.RegexField(
        r"^\d+(,\d+)*$", required=False, allow_blank=True, default=""
    )


class CartSelectionSerializer(serializers.Serializer):
    branch_id = serializers.IntegerField(required=False, allow_null=True)
    area_id = serializers.IntegerField(required=False, allow_null=True)


class CheckoutSerializer(CartSelectionSerializer):
    # blanks allowed, missing fields are reported together by the dispatcher
    name = serializers.CharField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
