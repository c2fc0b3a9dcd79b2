import pytest
from decimal import Decimal
from unittest import mock
from django.urls import reverse

from menu.cart import Cart
from menu.services import OrderService


def orders_url(restaurant, **kwargs):
    name = "restaurant-order-detail" if kwargs else "restaurant-orders"
    return reverse(name, kwargs={"username": restaurant.username, **kwargs})


@pytest.mark.django_db
def test_orders_listed_newest_first(owner_client, restaurant, order_factory):
    first = order_factory(restaurant=restaurant)
    second = order_factory(restaurant=restaurant)
    order_factory()  # another restaurant

    res = owner_client.get(orders_url(restaurant))

    assert res.status_code == 200
    assert res.data["count"] == 2
    assert [o["id"] for o in res.data["results"]] == [second.pk, first.pk]


@pytest.mark.django_db
def test_orders_filtered_by_status(owner_client, restaurant, order_factory):
    order_factory(restaurant=restaurant, status="delivered")
    pending = order_factory(restaurant=restaurant)

    res = owner_client.get(orders_url(restaurant), {"status": "pending"})

    assert [o["id"] for o in res.data["results"]] == [pending.pk]


@pytest.mark.django_db
def test_update_status_pushes_to_owner(owner_client, restaurant, order_factory):
    order = order_factory(restaurant=restaurant)

    with mock.patch("menu.services.broadcast_order_update") as broadcast:
        res = owner_client.patch(orders_url(restaurant, pk=order.pk),
                                 {"status": "preparing", "is_confirmed": True}, format="json")

    assert res.status_code == 200
    assert res.data["status"] == "preparing"
    assert res.data["is_confirmed"] is True
    username, payload = broadcast.call_args.args
    assert username == restaurant.username
    assert payload["event"] == "order_updated"
    assert payload["status"] == "preparing"


@pytest.mark.django_db
def test_update_rejects_unknown_status(owner_client, restaurant, order_factory):
    order = order_factory(restaurant=restaurant)

    res = owner_client.patch(orders_url(restaurant, pk=order.pk), {"status": "lost"}, format="json")
    empty = owner_client.patch(orders_url(restaurant, pk=order.pk), {}, format="json")

    assert res.status_code == 400
    assert empty.status_code == 400


@pytest.mark.django_db
def test_orders_of_other_restaurants_hidden(owner_client, restaurant, order_factory):
    foreign = order_factory()

    assert owner_client.get(orders_url(restaurant, pk=foreign.pk)).status_code == 404
    assert owner_client.get(orders_url(foreign.restaurant)).status_code == 404


@pytest.mark.django_db
def test_record_order_from_cart(restaurant):
    cart = Cart()
    cart.add_to_cart({"id": 1, "name": "Shawarma", "price": "35"}, extras=[{"id": 5, "name": "Cheese", "price": "7"}])
    cart.add_to_cart({"id": 1, "name": "Shawarma", "price": "35"}, extras=[{"id": 5, "name": "Cheese", "price": "7"}])

    with mock.patch("menu.signals.broadcast_order_update") as broadcast:
        order = OrderService.record(
            restaurant=restaurant,
            customer_name="Omar",
            customer_phone="01000000000",
            items=OrderService.items_snapshot(cart),
            total_price=cart.get_final_total(),
        )

    order.refresh_from_db()
    assert order.items == [{"id": 1, "name": "Shawarma", "price": "42", "quantity": 2, "total": "84"}]
    assert order.total_price == Decimal("84.00")
    assert order.status == "pending"
    assert broadcast.call_args.args[1]["event"] == "order_created"


@pytest.mark.django_db
def test_update_status_validates_choice(order_factory):
    order = order_factory()

    with pytest.raises(ValueError):
        OrderService.update_status(order, status="lost")
