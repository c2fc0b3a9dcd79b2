import pytest

from accounts.models import Restaurant, PendingRestaurant
from accounts.services import bootstrap
from accounts.services.bootstrap import ensure_restaurant_exists, NO_PENDING_DATA
from accounts.services.session import SessionContext


@pytest.mark.django_db
def test_bootstrap_creates_restaurant_from_pending(user_factory, pending_restaurant_factory):
    user = user_factory()
    pending_restaurant_factory(user=user, username="grill-house", restaurant_name="Grill House")

    result = ensure_restaurant_exists(user)

    assert result.created is True
    assert result.username == "grill-house"
    assert result.error is None
    restaurant = Restaurant.objects.get(owner=user)
    assert restaurant.name == "Grill House"
    assert restaurant.description == "Grill House restaurant - serving the finest dishes"
    assert not PendingRestaurant.objects.filter(user=user).exists()


@pytest.mark.django_db
def test_bootstrap_is_idempotent(restaurant, owner):
    result = ensure_restaurant_exists(owner)

    assert result.created is False
    assert result.username == "test-restaurant"
    assert Restaurant.objects.filter(owner=owner).count() == 1


@pytest.mark.django_db
def test_bootstrap_without_pending_data(user_factory):
    result = ensure_restaurant_exists(user_factory())

    assert result.created is False
    assert result.username is None
    assert result.error == NO_PENDING_DATA


@pytest.mark.django_db
def test_bootstrap_lost_race_is_reported_as_success(monkeypatch, restaurant, owner, pending_restaurant_factory):
    # another request created the restaurant between the lookup and the insert
    pending_restaurant_factory(user=owner, username="other-name", restaurant_name="Other")
    monkeypatch.setattr(bootstrap, "_existing_username", lambda user: None)

    result = ensure_restaurant_exists(owner)

    assert result.created is False
    assert result.username == "test-restaurant"
    assert result.error is None
    assert not PendingRestaurant.objects.filter(user=owner).exists()
    assert Restaurant.objects.filter(owner=owner).count() == 1


@pytest.mark.django_db
def test_session_context_caches_username(django_assert_num_queries, restaurant, owner):
    context = SessionContext(owner)

    with django_assert_num_queries(1):
        assert context.username == "test-restaurant"
        assert context.username == "test-restaurant"

    Restaurant.objects.filter(pk=restaurant.pk).update(username="renamed")
    assert context.username == "test-restaurant"
    assert context.refresh() == "renamed"


def test_session_context_for_anonymous_user():
    from django.contrib.auth.models import AnonymousUser

    context = SessionContext(AnonymousUser())

    assert context.to_dict() == {"is_authenticated": False, "user": None, "username": None}
