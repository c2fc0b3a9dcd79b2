import pytest
from django.urls import reverse
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.models import User, Restaurant, PendingRestaurant
from accounts.tests.utils import authenticate
from authflow.services import (
    create_confirmation_token, verify_confirmation_token, InvalidConfirmationToken,
)

SIGN_UP_DATA = {
    "email": "new@example.com",
    "password": "secret123",
    "confirm_password": "secret123",
    "username": "burger-spot",
    "restaurant_name": "Burger Spot",
}


@pytest.mark.django_db
def test_sign_up_stages_restaurant_and_mails_link(api_client, mailoutbox, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        res = api_client.post(reverse("sign-up"), SIGN_UP_DATA, format="json")

    assert res.status_code == 201
    assert res.data["needs_email_confirmation"] is True
    assert "tokens" not in res.data

    user = User.objects.get(email="new@example.com")
    assert user.email_confirmed is False
    pending = PendingRestaurant.objects.get(user=user)
    assert pending.username == "burger-spot"
    assert not Restaurant.objects.filter(owner=user).exists()

    assert len(mailoutbox) == 1
    assert mailoutbox[0].to == ["new@example.com"]
    assert "/auth?confirm=" in mailoutbox[0].body


@pytest.mark.django_db
def test_sign_up_without_confirmation_bootstraps(api_client, settings):
    settings.ACCOUNT_EMAIL_CONFIRMATION_REQUIRED = False

    res = api_client.post(reverse("sign-up"), SIGN_UP_DATA, format="json")

    assert res.status_code == 201
    assert res.data["needs_email_confirmation"] is False
    assert res.data["username"] == "burger-spot"
    assert "access" in res.data["tokens"]
    assert Restaurant.objects.filter(username="burger-spot").exists()


@pytest.mark.django_db
def test_sign_up_rejects_invalid_form(api_client):
    data = {**SIGN_UP_DATA, "username": "bad name!", "confirm_password": "other123"}

    res = api_client.post(reverse("sign-up"), data, format="json")

    assert res.status_code == 400
    assert set(res.data["errors"]) == {"username", "confirm_password"}
    assert not User.objects.filter(email="new@example.com").exists()


@pytest.mark.django_db
def test_sign_up_duplicate_email(api_client, user_factory):
    user_factory(email="new@example.com")

    res = api_client.post(reverse("sign-up"), SIGN_UP_DATA, format="json")

    assert res.status_code == 400
    assert res.data["detail"] == "This email is already registered"


@pytest.mark.django_db
def test_confirm_email_signs_in_and_bootstraps(api_client, user_factory, pending_restaurant_factory):
    user = user_factory(email_confirmed=False)
    pending_restaurant_factory(user=user, username="pizza-place", restaurant_name="Pizza Place")

    res = api_client.post(
        reverse("confirm-email"), {"token": create_confirmation_token(user)}, format="json"
    )

    assert res.status_code == 200
    assert res.data["restaurant_created"] is True
    assert res.data["username"] == "pizza-place"
    assert "access" in res.data
    user.refresh_from_db()
    assert user.email_confirmed is True


@pytest.mark.django_db
def test_confirmation_token_checks(user_factory):
    user = user_factory()

    assert verify_confirmation_token(create_confirmation_token(user)) == user
    with pytest.raises(InvalidConfirmationToken, match="expired"):
        verify_confirmation_token(create_confirmation_token(user, expires_in=-10))
    with pytest.raises(InvalidConfirmationToken):
        verify_confirmation_token("not-a-token")
    # an access token is signed with the same key but has no confirmation purpose
    with pytest.raises(InvalidConfirmationToken):
        verify_confirmation_token(str(RefreshToken.for_user(user).access_token))


@pytest.mark.django_db
def test_resend_confirmation_does_not_reveal_accounts(api_client, user_factory, mailoutbox):
    user_factory(email="waiting@example.com", email_confirmed=False)

    res = api_client.post(reverse("confirm-email-resend"), {"email": "waiting@example.com"}, format="json")
    missing = api_client.post(reverse("confirm-email-resend"), {"email": "nobody@example.com"}, format="json")

    assert res.status_code == missing.status_code == 200
    assert res.data == missing.data
    assert len(mailoutbox) == 1


@pytest.mark.django_db
def test_sign_in_returns_tokens_and_username(api_client, restaurant, owner):
    res = api_client.post(
        reverse("sign-in"), {"email": "owner@example.com", "password": "secret123"}, format="json"
    )

    assert res.status_code == 200
    assert res.data["username"] == "test-restaurant"
    assert res.data["restaurant_created"] is False
    assert res.data["access"]
    assert res.data["refresh"]


@pytest.mark.django_db
def test_sign_in_wrong_password(api_client, owner):
    res = api_client.post(
        reverse("sign-in"), {"email": "owner@example.com", "password": "wrong-pass"}, format="json"
    )

    assert res.status_code == 401
    assert res.data["detail"] == "Incorrect login credentials"


@pytest.mark.django_db
def test_sign_in_unconfirmed_email(api_client, user_factory):
    user_factory(email="pending@example.com", email_confirmed=False)

    res = api_client.post(
        reverse("sign-in"), {"email": "pending@example.com", "password": "secret123"}, format="json"
    )

    assert res.status_code == 403
    assert res.data["detail"] == "Please confirm your email first"


@pytest.mark.django_db
def test_session_endpoint(api_client, owner, restaurant):
    anonymous = api_client.get(reverse("session"))
    assert anonymous.data["is_authenticated"] is False

    authenticate(api_client, owner)
    res = api_client.get(reverse("session"))

    assert res.status_code == 200
    assert res.data["is_authenticated"] is True
    assert res.data["user"]["email"] == "owner@example.com"
    assert res.data["username"] == "test-restaurant"


@pytest.mark.django_db
def test_bootstrap_endpoint(api_client, user_factory, pending_restaurant_factory):
    user = user_factory()
    pending_restaurant_factory(user=user, username="cafe-one", restaurant_name="Cafe One")
    authenticate(api_client, user)

    first = api_client.post(reverse("bootstrap"))
    second = api_client.post(reverse("bootstrap"))

    assert first.status_code == 201
    assert first.data["username"] == "cafe-one"
    assert second.status_code == 200
    assert second.data["created"] is False
    assert second.data["username"] == "cafe-one"


@pytest.mark.django_db
def test_refresh_and_sign_out(api_client, owner):
    refresh = str(RefreshToken.for_user(owner))

    res = api_client.post(reverse("refresh"), {"refresh": refresh}, format="json")
    assert res.status_code == 200
    assert res.data["access"]

    authenticate(api_client, owner)
    res = api_client.post(reverse("sign-out"), {"refresh": refresh}, format="json")
    assert res.status_code == 200

    res = api_client.post(reverse("sign-out"), {"refresh": refresh}, format="json")
    assert res.status_code == 400
