from decimal import Decimal
from types import SimpleNamespace
from urllib.parse import unquote

import pytest

from menu.cart import Cart
from menu.dispatch import (
    OrderDispatch, CustomerDetails, DispatchError, whatsapp_link, digits_only,
)

SHAWARMA = {"id": 1, "name": "Shawarma", "price": "35"}
CHEESE = {"id": 100, "name": "Cheese", "price": "5"}
SAUCE = {"id": 101, "name": "Sauce", "price": "2"}

CUSTOMER = CustomerDetails(name="Omar", phone="01000000000", address="5 Tahrir Sq")


@pytest.fixture
def restaurant():
    return SimpleNamespace(name="Grill House", username="grill-house", whatsapp_phone="+20 100 000 0000")


@pytest.fixture
def branch():
    return SimpleNamespace(id=7, name="Main Branch", whatsapp_phone="+20 111 222 3333")


@pytest.fixture
def area():
    return SimpleNamespace(id=70, branch_id=7, name="Downtown", delivery_price=Decimal("15"))


@pytest.fixture
def cart():
    cart = Cart()
    cart.add_to_cart(SHAWARMA, extras=[CHEESE, SAUCE])
    cart.add_to_cart(SHAWARMA, extras=[CHEESE, SAUCE])
    return cart


def test_whatsapp_link_escapes_text():
    assert digits_only("+20 (100) 123-4567") == "201001234567"
    assert whatsapp_link("+20 100", "Fish & chips\n2x") == "https://wa.me/20100?text=Fish%20%26%20chips%0A2x"
    assert whatsapp_link("+20 100") == "https://wa.me/20100"


def test_message_without_branches(restaurant, cart):
    dispatcher = OrderDispatch(restaurant, currency="EGP")

    message = dispatcher.build_message(cart, CUSTOMER)

    assert "1. Shawarma + Cheese, Sauce x2 = 84 EGP" in message
    assert "Subtotal: 84 EGP" in message
    assert "Total: 84 EGP" in message
    assert "Delivery:" not in message
    assert "Name: Omar" in message
    assert "Address: 5 Tahrir Sq" in message
    assert "Payment: cash on delivery" in message


def test_dispatch_goes_to_branch_phone(restaurant, branch, area, cart):
    dispatcher = OrderDispatch(restaurant, branches=[branch], areas_by_branch={7: [area]}, currency="EGP")
    cart.select_branch(branch)
    cart.select_area(area)

    url = dispatcher.dispatch(cart, CUSTOMER)

    assert url.startswith("https://wa.me/201112223333?text=")
    text = unquote(url.split("?text=", 1)[1])
    assert "Delivery: 15 EGP" in text
    assert "Total: 99 EGP" in text
    assert "Branch: Main Branch" in text
    assert "Area: Downtown" in text
    assert cart.is_empty


def test_falls_back_to_restaurant_phone(restaurant, cart):
    branch = SimpleNamespace(id=7, name="Main Branch", whatsapp_phone="")
    dispatcher = OrderDispatch(restaurant, branches=[branch], currency="EGP")
    cart.select_branch(branch)

    assert dispatcher.target_phone(cart) == "+20 100 000 0000"
    assert dispatcher.whatsapp_url(cart, CUSTOMER).startswith("https://wa.me/201000000000?text=")


def test_missing_requirements_are_reported_together(restaurant, branch, area):
    dispatcher = OrderDispatch(restaurant, branches=[branch], areas_by_branch={7: [area]}, currency="EGP")
    cart = Cart()

    with pytest.raises(DispatchError) as exc:
        dispatcher.dispatch(cart, CustomerDetails(name="Omar"))

    assert exc.value.missing == ["address", "phone", "branch", "cart"]


def test_area_required_when_branch_has_areas(restaurant, branch, area, cart):
    dispatcher = OrderDispatch(restaurant, branches=[branch], areas_by_branch={7: [area]}, currency="EGP")
    cart.select_branch(branch)

    assert dispatcher.missing_requirements(cart, CUSTOMER) == ["area"]


def test_area_not_required_for_branch_without_areas(restaurant, branch, cart):
    dispatcher = OrderDispatch(restaurant, branches=[branch], currency="EGP")
    cart.select_branch(branch)

    assert dispatcher.missing_requirements(cart, CUSTOMER) == []


def test_no_phone_anywhere(cart):
    restaurant = SimpleNamespace(name="Quiet", username="quiet", whatsapp_phone="")
    dispatcher = OrderDispatch(restaurant, currency="EGP")

    assert dispatcher.missing_requirements(cart, CUSTOMER) == ["whatsapp_phone"]


def test_customer_details_are_trimmed():
    customer = CustomerDetails.from_data({"name": "  Omar ", "phone": None, "notes": "no onions "})

    assert customer == CustomerDetails(name="Omar", phone="", address="", notes="no onions")
