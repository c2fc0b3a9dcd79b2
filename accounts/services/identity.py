import logging
import re

from django.conf import settings
from django.contrib.auth import authenticate
from django.core.mail import send_mail
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.models import User, PendingRestaurant, USERNAME_PATTERN
from accounts.utils.errors import (
    AuthProviderError, ALREADY_REGISTERED, EMAIL_NOT_CONFIRMED, INVALID_CREDENTIALS,
)
from authflow.services import (
    _issue_jwt_for_user, create_confirmation_token, confirmation_link,
)

logger = logging.getLogger(__name__)

_username_re = re.compile(USERNAME_PATTERN)


def validate_sign_up(email, password, confirm_password, username, restaurant_name):
    """
    Returns a dict of field -> message, empty when the form is acceptable.
    """
    errors = {}
    if not email:
        errors["email"] = "Email is required"
    if not username:
        errors["username"] = "Username is required"
    elif not _username_re.match(username):
        errors["username"] = "Username may only contain letters, numbers, underscores and hyphens"
    if not restaurant_name or not restaurant_name.strip():
        errors["restaurant_name"] = "Restaurant name is required"
    if confirm_password is not None and password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"
    if not password or len(password) < settings.MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
    return errors


@transaction.atomic
def sign_up(email, password, username, restaurant_name):
    """
    Create the owner account and stage the restaurant for bootstrap.
    Returns (user, needs_email_confirmation).
    """
    email = User.objects.normalize_email(email).strip()
    if User.objects.filter(email__iexact=email).exists():
        raise AuthProviderError(ALREADY_REGISTERED, field="email")

    needs_confirmation = settings.ACCOUNT_EMAIL_CONFIRMATION_REQUIRED
    user = User.objects.create_user(
        email=email,
        password=password,
        email_confirmed=not needs_confirmation,
    )
    PendingRestaurant.objects.update_or_create(
        user=user,
        defaults={"username": username, "restaurant_name": restaurant_name.strip()},
    )

    if needs_confirmation:
        transaction.on_commit(lambda: send_confirmation_email(user))
    return user, needs_confirmation


def send_confirmation_email(user):
    link = confirmation_link(create_confirmation_token(user))
    send_mail(
        subject="Confirm your email",
        message=f"Confirm your restaurant account by opening this link:\n{link}",
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info("confirmation email sent to user %s", user.pk)


def confirm_email(user):
    if not user.email_confirmed:
        user.email_confirmed = True
        user.save(update_fields=["email_confirmed"])
    return user


def sign_in(email, password):
    """
    Returns (user, tokens). Raises AuthProviderError with the raw provider message.
    """
    user = authenticate(username=(email or "").strip(), password=password)
    if user is None:
        raise AuthProviderError(INVALID_CREDENTIALS)
    if not user.email_confirmed:
        raise AuthProviderError(EMAIL_NOT_CONFIRMED)
    return user, _issue_jwt_for_user(user)


def sign_out(refresh_token):
    """Blacklist the refresh token. Returns False when it was already unusable."""
    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError:
        return False
    return True
