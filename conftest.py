import pytest
from decimal import Decimal
from pytest_factoryboy import register
from rest_framework.test import APIClient

from accounts.tests.factory import (
    UserFactory, RestaurantFactory, PendingRestaurantFactory,
    BranchFactory, DeliveryAreaFactory,
)
from accounts.tests.utils import authenticate
from menu.tests.factory import (
    CategoryFactory, MenuItemFactory, SizeFactory, ExtraFactory, OrderFactory,
)

# Register all factories as pytest fixtures
register(UserFactory)
register(RestaurantFactory)
register(PendingRestaurantFactory)
register(BranchFactory)
register(DeliveryAreaFactory)
register(CategoryFactory)
register(MenuItemFactory)
register(SizeFactory)
register(ExtraFactory)
register(OrderFactory)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner(db, user_factory):
    """Confirmed owner account"""
    return user_factory(email="owner@example.com")


@pytest.fixture
def restaurant(owner, restaurant_factory):
    """Create a test restaurant"""
    return restaurant_factory(
        owner=owner,
        name="Test Restaurant",
        username="test-restaurant",
        whatsapp_phone="+20 100 000 0000",
    )


@pytest.fixture
def owner_client(api_client, owner, restaurant):
    """API client signed in as the owner of `restaurant`"""
    return authenticate(api_client, owner)


@pytest.fixture
def branch(restaurant, branch_factory):
    """Create a test branch"""
    return branch_factory(
        restaurant=restaurant,
        name="Main Branch",
        whatsapp_phone="+20 111 222 3333",
    )


@pytest.fixture
def delivery_area(branch, delivery_area_factory):
    return delivery_area_factory(branch=branch, name="Downtown", delivery_price=Decimal("15.00"))


@pytest.fixture
def category(restaurant, category_factory):
    return category_factory(restaurant=restaurant, name="Grills")


@pytest.fixture
def menu_item(restaurant, category, menu_item_factory):
    """Shawarma at 35 with no sizes"""
    return menu_item_factory(
        restaurant=restaurant, category=category, name="Shawarma", price=Decimal("35.00"),
    )


@pytest.fixture
def sized_item(restaurant, category, menu_item_factory, size_factory):
    """Mandi with a Small and a Large size"""
    item = menu_item_factory(
        restaurant=restaurant, category=category, name="Mandi", price=Decimal("60.00"),
    )
    size_factory(menu_item=item, name="Small", price=Decimal("60.00"))
    size_factory(menu_item=item, name="Large", price=Decimal("80.00"))
    return item


@pytest.fixture
def extras(restaurant, extra_factory):
    """Cheese at 5 and Sauce at 2"""
    return [
        extra_factory(restaurant=restaurant, name="Cheese", price=Decimal("5.00")),
        extra_factory(restaurant=restaurant, name="Sauce", price=Decimal("2.00")),
    ]
