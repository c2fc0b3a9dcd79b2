import jwt
import datetime
from django.conf import settings
from rest_framework_simplejwt.tokens import RefreshToken
from accounts.models import User

EMAIL_CONFIRM_PURPOSE = "email_confirm"


class InvalidConfirmationToken(Exception):
    pass


def _issue_jwt_for_user(user: User):
    refresh = RefreshToken.for_user(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


def create_confirmation_token(user: User, expires_in=None) -> str:
    """
    Signed HS256 token mailed to a new owner so they can prove the address.
    - expires_in: seconds, defaults to EMAIL_CONFIRMATION_TOKEN_LIFETIME
    """
    if expires_in is None:
        expires_in = settings.EMAIL_CONFIRMATION_TOKEN_LIFETIME
    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "user_id": user.pk,
        "email": user.email,
        "purpose": EMAIL_CONFIRM_PURPOSE,
        "iat": now,
        "exp": now + datetime.timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")


def verify_confirmation_token(token: str) -> User:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise InvalidConfirmationToken("Confirmation link expired")
    except jwt.InvalidTokenError:
        raise InvalidConfirmationToken("Invalid confirmation link")

    if payload.get("purpose") != EMAIL_CONFIRM_PURPOSE:
        raise InvalidConfirmationToken("Invalid confirmation link")

    user = User.objects.filter(pk=payload.get("user_id"), email=payload.get("email")).first()
    if user is None:
        raise InvalidConfirmationToken("Invalid confirmation link")
    return user


def confirmation_link(token: str) -> str:
    return f"{settings.SITE_URL}/auth?confirm={token}"
