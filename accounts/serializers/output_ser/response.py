from rest_framework import serializers


class UserInfoSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    email_confirmed = serializers.BooleanField()


class TokenPairSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class SignUpResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    needs_email_confirmation = serializers.BooleanField()
    user = UserInfoSerializer()
    tokens = TokenPairSerializer(required=False)
    username = serializers.CharField(allow_null=True, required=False)


class SignInResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    refresh = serializers.CharField()
    access = serializers.CharField()
    user = UserInfoSerializer()
    username = serializers.CharField(allow_null=True)
    restaurant_created = serializers.BooleanField()


class SessionSerializer(serializers.Serializer):
    is_authenticated = serializers.BooleanField()
    user = UserInfoSerializer(allow_null=True)
    username = serializers.CharField(allow_null=True)


class BootstrapResponseSerializer(serializers.Serializer):
    created = serializers.BooleanField()
    username = serializers.CharField(allow_null=True)
    error = serializers.CharField(allow_null=True)
