import pytest
from decimal import Decimal
from django.urls import reverse

from accounts.models import Restaurant, Branch, DeliveryArea, DEFAULT_WORKING_HOURS
from accounts.tests.utils import authenticate


@pytest.mark.django_db
def test_create_restaurant_from_dashboard(api_client, user_factory):
    user = user_factory()
    authenticate(api_client, user)

    res = api_client.post(
        reverse("restaurant-create"),
        {"name": "Koshary King", "username": "koshary-king", "whatsapp_phone": "+201001112222"},
        format="json",
    )

    assert res.status_code == 201
    assert Restaurant.objects.get(owner=user).username == "koshary-king"


@pytest.mark.django_db
def test_create_restaurant_username_taken(api_client, user_factory, restaurant):
    authenticate(api_client, user_factory())

    res = api_client.post(
        reverse("restaurant-create"), {"name": "Copy", "username": "test-restaurant"}, format="json"
    )

    assert res.status_code == 409
    assert res.data["detail"] == "This username is already taken"


@pytest.mark.django_db
def test_create_second_restaurant_rejected(owner_client):
    res = owner_client.post(
        reverse("restaurant-create"), {"name": "Second", "username": "second"}, format="json"
    )

    assert res.status_code == 400


@pytest.mark.django_db
def test_update_restaurant(owner_client, restaurant):
    url = reverse("restaurant-detail", kwargs={"username": restaurant.username})

    res = owner_client.patch(url, {"name": "Renamed", "cover_image_url": "https://evil.example/x.jpg"}, format="json")

    assert res.status_code == 200
    restaurant.refresh_from_db()
    assert restaurant.name == "Renamed"
    # image fields are only written by the upload endpoint
    assert restaurant.cover_image_url == ""


@pytest.mark.django_db
def test_update_username_conflict(owner_client, restaurant, restaurant_factory):
    restaurant_factory(username="taken")
    url = reverse("restaurant-detail", kwargs={"username": restaurant.username})

    res = owner_client.patch(url, {"username": "taken"}, format="json")

    assert res.status_code == 409
    restaurant.refresh_from_db()
    assert restaurant.username == "test-restaurant"


@pytest.mark.django_db
def test_other_owner_cannot_see_restaurant(api_client, restaurant, user_factory):
    authenticate(api_client, user_factory())

    res = api_client.get(reverse("restaurant-detail", kwargs={"username": restaurant.username}))

    assert res.status_code == 404


@pytest.mark.django_db
def test_management_requires_authentication(api_client, restaurant):
    res = api_client.get(reverse("restaurant-detail", kwargs={"username": restaurant.username}))

    assert res.status_code == 401


@pytest.mark.django_db
def test_footer_defaults_working_hours(owner_client, restaurant):
    url = reverse("restaurant-footer", kwargs={"username": restaurant.username})

    res = owner_client.get(url)
    assert res.data["working_hours"] == DEFAULT_WORKING_HOURS

    res = owner_client.patch(url, {"working_hours": "Daily 12 PM - 2 AM", "address": "1 Nile St"}, format="json")
    assert res.status_code == 200
    assert res.data["working_hours"] == "Daily 12 PM - 2 AM"
    restaurant.refresh_from_db()
    assert restaurant.address == "1 Nile St"


@pytest.mark.django_db
def test_branch_and_area_crud(owner_client, restaurant):
    branches_url = reverse("branches", kwargs={"username": restaurant.username})

    res = owner_client.post(branches_url, {"name": "Maadi", "whatsapp_phone": "+201234"}, format="json")
    assert res.status_code == 201
    branch_id = res.data["id"]
    assert Branch.objects.get(pk=branch_id).restaurant == restaurant

    areas_url = reverse("delivery-areas", kwargs={"username": restaurant.username, "branch_pk": branch_id})
    res = owner_client.post(areas_url, {"name": "Degla", "delivery_price": "20.00"}, format="json")
    assert res.status_code == 201
    assert DeliveryArea.objects.get(pk=res.data["id"]).delivery_price == Decimal("20.00")

    res = owner_client.get(branches_url)
    assert res.status_code == 200
    assert [area["name"] for area in res.data[0]["delivery_areas"]] == ["Degla"]

    res = owner_client.delete(reverse("branch-detail", kwargs={"username": restaurant.username, "pk": branch_id}))
    assert res.status_code == 204
    assert not DeliveryArea.objects.exists()


@pytest.mark.django_db
def test_negative_delivery_price_rejected(owner_client, restaurant, branch):
    url = reverse("delivery-areas", kwargs={"username": restaurant.username, "branch_pk": branch.pk})

    res = owner_client.post(url, {"name": "Nowhere", "delivery_price": "-1"}, format="json")

    assert res.status_code == 400


@pytest.mark.django_db
def test_areas_of_foreign_branch_are_hidden(owner_client, restaurant, branch_factory):
    foreign = branch_factory()
    url = reverse("delivery-areas", kwargs={"username": restaurant.username, "branch_pk": foreign.pk})

    assert owner_client.get(url).status_code == 404
    assert owner_client.post(url, {"name": "X", "delivery_price": "1"}, format="json").status_code == 404
