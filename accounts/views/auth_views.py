import logging

from drf_spectacular.utils import extend_schema, OpenApiResponse
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import User
from accounts.serializers.input_ser.auth_in import (
    SignUpSerializer, SignInSerializer, ConfirmEmailSerializer, ResendConfirmationSerializer,
)
from accounts.serializers.output_ser.response import (
    SignUpResponseSerializer, SignInResponseSerializer, SessionSerializer, BootstrapResponseSerializer,
)
from accounts.services import identity
from accounts.services.bootstrap import ensure_restaurant_exists, NO_PENDING_DATA
from accounts.services.session import SessionContext
from accounts.utils.errors import (
    AuthProviderError, EMAIL_NOT_CONFIRMED, map_sign_in_error, map_sign_up_error,
)
from authflow.services import (
    _issue_jwt_for_user, verify_confirmation_token, InvalidConfirmationToken,
)

logger = logging.getLogger(__name__)


def user_info(user):
    return {"id": user.pk, "email": user.email, "email_confirmed": user.email_confirmed}


def run_bootstrap(user):
    """Bootstrap after a successful authentication; a missing staged row is not a failure."""
    result = ensure_restaurant_exists(user)
    if result.error and result.error != NO_PENDING_DATA:
        logger.warning("restaurant bootstrap failed for user %s: %s", user.pk, result.error)
    return result


class SignUpView(APIView):
    """
    POST /api/accounts/sign-up/
    Creates the owner and stages the restaurant. When confirmation is required
    a link is mailed and no tokens are returned.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=SignUpSerializer, responses={201: SignUpResponseSerializer})
    def post(self, request):
        serializer = SignUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        errors = identity.validate_sign_up(
            data["email"], data["password"], data.get("confirm_password"),
            data["username"].strip(), data["restaurant_name"],
        )
        if errors:
            return Response(
                {"detail": next(iter(errors.values())), "errors": errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            user, needs_confirmation = identity.sign_up(
                data["email"], data["password"], data["username"].strip(), data["restaurant_name"],
            )
        except AuthProviderError as exc:
            return Response({"detail": map_sign_up_error(exc.message)}, status=status.HTTP_400_BAD_REQUEST)

        body = {
            "needs_email_confirmation": needs_confirmation,
            "user": user_info(user),
        }
        if needs_confirmation:
            body["message"] = "Account created, check your email to confirm it"
        else:
            result = run_bootstrap(user)
            body["message"] = "Account created"
            body["tokens"] = _issue_jwt_for_user(user)
            body["username"] = result.username
        return Response(body, status=status.HTTP_201_CREATED)


class ConfirmEmailView(APIView):
    """
    POST /api/accounts/confirm-email/
    Token from the mailed link. Confirms, signs the owner in and bootstraps.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=ConfirmEmailSerializer, responses={200: SignInResponseSerializer})
    def post(self, request):
        serializer = ConfirmEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = verify_confirmation_token(serializer.validated_data["token"])
        except InvalidConfirmationToken as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        identity.confirm_email(user)
        result = run_bootstrap(user)
        token = _issue_jwt_for_user(user)
        return Response({
            "message": "Email confirmed",
            "refresh": token["refresh"],
            "access": token["access"],
            "user": user_info(user),
            "username": result.username,
            "restaurant_created": result.created,
        }, status=status.HTTP_200_OK)


class ResendConfirmationView(APIView):
    """
    POST /api/accounts/confirm-email/resend/
    Always answers the same way so it does not reveal which addresses are registered.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=ResendConfirmationSerializer)
    def post(self, request):
        serializer = ResendConfirmationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = User.objects.filter(
            email__iexact=serializer.validated_data["email"], email_confirmed=False
        ).first()
        if user is not None:
            identity.send_confirmation_email(user)
        return Response({"message": "If the account exists a new link has been sent"})


class SignInView(APIView):
    """
    POST /api/accounts/sign-in/
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        request=SignInSerializer,
        responses={200: SignInResponseSerializer,
                   401: OpenApiResponse(description="Incorrect login credentials"),
                   403: OpenApiResponse(description="Email not confirmed")},
    )
    def post(self, request):
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user, token = identity.sign_in(
                serializer.validated_data["email"], serializer.validated_data["password"]
            )
        except AuthProviderError as exc:
            code = status.HTTP_403_FORBIDDEN if exc.message == EMAIL_NOT_CONFIRMED else status.HTTP_401_UNAUTHORIZED
            return Response({"detail": map_sign_in_error(exc.message)}, status=code)

        result = run_bootstrap(user)
        return Response({
            "message": "Signed in",
            "refresh": token["refresh"],
            "access": token["access"],
            "user": user_info(user),
            "username": result.username,
            "restaurant_created": result.created,
        }, status=status.HTTP_200_OK)


class SessionView(APIView):
    """
    GET /api/accounts/session/
    Who is signed in and which storefront they own.
    """
    permission_classes = [permissions.AllowAny]

    @extend_schema(responses=SessionSerializer)
    def get(self, request):
        return Response(SessionContext.from_request(request).to_dict())


class BootstrapView(APIView):
    """
    POST /api/accounts/bootstrap/
    Idempotent; creates the restaurant from the staged sign-up data if needed.
    """
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(request=None, responses=BootstrapResponseSerializer)
    def post(self, request):
        result = run_bootstrap(request.user)
        return Response({
            "created": result.created,
            "username": result.username,
            "error": result.error,
        }, status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK)
