import pytest
from decimal import Decimal
from django.db import DatabaseError
from django.urls import reverse

from menu.services import StorefrontService, index_by, LOAD_ERROR_DETAIL


@pytest.mark.django_db
def test_storefront_lists_public_data(api_client, restaurant, sized_item, menu_item, extras,
                                      branch, delivery_area, menu_item_factory, branch_factory):
    menu_item_factory(restaurant=restaurant, name="Sold out", is_available=False)
    branch_factory(restaurant=restaurant, name="Closed", is_active=False)

    res = api_client.get(reverse("storefront", kwargs={"username": restaurant.username}))

    assert res.status_code == 200
    assert res.data["restaurant"]["name"] == "Test Restaurant"
    assert res.data["restaurant"]["working_hours"] == "Daily from 9 AM to 11 PM"
    assert res.data["is_owner"] is False
    assert "detail" not in res.data

    names = {item["name"] for item in res.data["menu_items"]}
    assert names == {"Mandi", "Shawarma"}
    mandi = next(item for item in res.data["menu_items"] if item["name"] == "Mandi")
    assert [size["name"] for size in mandi["sizes"]] == ["Small", "Large"]

    assert [extra["name"] for extra in res.data["extras"]] == ["Cheese", "Sauce"]
    assert [b["name"] for b in res.data["branches"]] == ["Main Branch"]
    assert res.data["branches"][0]["delivery_areas"][0]["name"] == "Downtown"


@pytest.mark.django_db
def test_storefront_marks_owner(owner_client, restaurant):
    res = owner_client.get(reverse("storefront", kwargs={"username": restaurant.username}))

    assert res.data["is_owner"] is True


@pytest.mark.django_db
def test_unknown_storefront(api_client):
    res = api_client.get(reverse("storefront", kwargs={"username": "nope"}))

    assert res.status_code == 404


@pytest.mark.django_db
def test_one_failing_collection_keeps_the_rest(monkeypatch, restaurant, menu_item, branch):
    original = StorefrontService._fetch

    def fetch(name, queryset, failed):
        if name == "extras":
            failed.append(name)
            return []
        return original(name, queryset, failed)

    monkeypatch.setattr(StorefrontService, "_fetch", staticmethod(fetch))

    storefront = StorefrontService.load(restaurant.username)

    assert storefront.error == LOAD_ERROR_DETAIL
    assert [item.name for item in storefront.items] == ["Shawarma"]
    assert [b.name for b in storefront.branches] == ["Main Branch"]


def test_fetch_records_database_errors():
    class BrokenQuery:
        def __iter__(self):
            raise DatabaseError("connection lost")

    failed = []
    assert StorefrontService._fetch("sizes", BrokenQuery(), failed) == []
    assert failed == ["sizes"]


@pytest.mark.django_db
def test_owner_load_includes_hidden_rows(restaurant, menu_item_factory):
    menu_item_factory(restaurant=restaurant, name="Hidden", is_available=False)

    assert StorefrontService.load(restaurant.username, public=True).items == []
    assert [i.name for i in StorefrontService.load(restaurant.username, public=False).items] == ["Hidden"]


@pytest.mark.django_db
def test_branches_endpoint(api_client, restaurant, branch, delivery_area, delivery_area_factory):
    delivery_area_factory(branch=branch, name="Hidden area", is_active=False)

    res = api_client.get(reverse("storefront-branches", kwargs={"username": restaurant.username}))

    assert res.status_code == 200
    assert len(res.data) == 1
    areas = res.data[0]["delivery_areas"]
    assert [a["name"] for a in areas] == ["Downtown"]
    assert Decimal(areas[0]["delivery_price"]) == Decimal("15")


def test_index_by_groups_rows():
    rows = [{"k": 1, "v": "a"}, {"k": 2, "v": "b"}, {"k": 1, "v": "c"}]

    grouped = index_by(rows, lambda row: row["k"])

    assert grouped == {1: [rows[0], rows[2]], 2: [rows[1]]}
