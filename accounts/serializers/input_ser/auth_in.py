from rest_framework import serializers


class SignUpSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    confirm_password = serializers.CharField(write_only=True, trim_whitespace=False, required=False)
    username = serializers.CharField(required=False, allow_blank=True, default="")
    restaurant_name = serializers.CharField(required=False, allow_blank=True, default="")


class SignInSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class ConfirmEmailSerializer(serializers.Serializer):
    token = serializers.CharField()


class ResendConfirmationSerializer(serializers.Serializer):
    email = serializers.EmailField()


class RefreshSerializer(serializers.Serializer):
    refresh = serializers.CharField()
