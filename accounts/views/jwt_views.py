from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError

from accounts.serializers.input_ser.auth_in import RefreshSerializer
from accounts.services import identity


class RefreshTokenView(APIView):
    """
    POST /api/accounts/refresh/
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(request=RefreshSerializer)
    def post(self, request):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        refresh_token = serializer.validated_data["refresh"]

        try:
            refresh = RefreshToken(refresh_token)
            return Response({
                "access": str(refresh.access_token),
                "refresh": refresh_token  # same one
            })
        except TokenError:
            return Response({"detail": "Invalid or expired refresh"}, status=status.HTTP_401_UNAUTHORIZED)


class SignOutView(APIView):
    """
    POST /api/accounts/sign-out/
    Blacklists the refresh token; the access token simply expires.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(request=RefreshSerializer)
    def post(self, request):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if not identity.sign_out(serializer.validated_data["refresh"]):
            return Response({"detail": "Invalid token"}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"message": "Signed out"})
