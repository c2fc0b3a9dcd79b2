from decimal import Decimal
from unittest import mock

import pytest

from menu.cart import Cart, ProductConfiguration, ConfigurationError

MANDI = {"id": 2, "name": "Mandi", "price": "60"}
SIZES = [{"id": 10, "name": "Small", "price": "60"}, {"id": 11, "name": "Large", "price": "80"}]
EXTRAS = [{"id": 100, "name": "Cheese", "price": "5"}, {"id": 101, "name": "Sauce", "price": "2"}]


def test_size_required_before_adding():
    config = ProductConfiguration(MANDI, sizes=SIZES, extras=EXTRAS)

    assert config.requires_size is True
    assert config.can_add is False
    with pytest.raises(ConfigurationError, match="Please choose a size"):
        config.confirm(Cart())

    config.select_size(11)
    assert config.can_add is True


def test_item_without_sizes_can_be_added_directly():
    config = ProductConfiguration({"id": 1, "name": "Shawarma", "price": "35"})

    assert config.requires_size is False
    assert config.can_add is True


def test_displayed_total_follows_selection():
    config = ProductConfiguration(MANDI, sizes=SIZES, extras=EXTRAS)
    assert config.displayed_total == Decimal("60")

    config.select_size(11)
    config.toggle_extra(100)
    config.increment()

    assert config.unit_price == Decimal("85")
    assert config.displayed_total == Decimal("170")

    # toggling again removes the extra
    assert config.toggle_extra(100) is False
    assert config.displayed_total == Decimal("160")


def test_quantity_never_below_one():
    config = ProductConfiguration(MANDI, sizes=SIZES)

    assert config.decrement() == 1
    assert config.set_quantity(0) == 1
    assert config.set_quantity(3) == 3


def test_unknown_size_or_extra_rejected():
    config = ProductConfiguration(MANDI, sizes=SIZES, extras=EXTRAS)

    with pytest.raises(ConfigurationError):
        config.select_size(99)
    with pytest.raises(ConfigurationError):
        config.toggle_extra(999)


def test_confirm_adds_quantity_units_to_one_line():
    cart = Cart()
    config = ProductConfiguration(MANDI, sizes=SIZES, extras=EXTRAS)
    config.select_size(11)
    config.set_quantity(2)

    config.confirm(cart)
    config.confirm(cart)

    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 4
    assert cart.get_total_price() == Decimal("320")


def test_large_quantity_added_in_one_step():
    cart = Cart()
    config = ProductConfiguration(MANDI, sizes=SIZES, extras=EXTRAS)
    config.select_size(10)
    config.set_quantity(2_000_000)

    with mock.patch.object(Cart, "add_to_cart", autospec=True, side_effect=Cart.add_to_cart) as add:
        config.confirm(cart)

    assert add.call_count == 1
    assert cart.item_count == 2_000_000
    assert cart.get_total_price() == Decimal("120000000")


def test_state_for_dialog():
    config = ProductConfiguration(MANDI, sizes=SIZES, extras=EXTRAS)
    config.select_size(10)
    config.toggle_extra(101)
    config.toggle_extra(100)

    state = config.state()

    assert state["size"] == {"id": 10, "name": "Small"}
    assert state["extra_ids"] == [100, 101]
    assert state["unit_price"] == "67"
    assert state["can_add"] is True
