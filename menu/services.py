import logging
from collections import defaultdict
from dataclasses import dataclass, field

from django.db import DatabaseError
from django.shortcuts import get_object_or_404

from accounts.models import Restaurant, Branch, DeliveryArea
from menu.models import Category, MenuItem, Size, Extra, Order
from .cart import format_amount
from .websocket_utils import broadcast_order_update

logger = logging.getLogger(__name__)

LOAD_ERROR_DETAIL = "Error loading restaurant data"


def index_by(rows, key):
    """
    Group rows once per fetch: index_by(sizes, "menu_item_id") -> {item_id: [sizes]}.
    `key` is an attribute name or a callable. Row order is preserved.
    """
    getter = key if callable(key) else (lambda row: getattr(row, key))
    grouped = defaultdict(list)
    for row in rows:
        grouped[getter(row)].append(row)
    return dict(grouped)


@dataclass
class Storefront:
    restaurant: Restaurant
    categories: list = field(default_factory=list)
    items: list = field(default_factory=list)
    sizes: list = field(default_factory=list)
    extras: list = field(default_factory=list)
    branches: list = field(default_factory=list)
    areas: list = field(default_factory=list)
    failed: list = field(default_factory=list)

    def __post_init__(self):
        self.sizes_by_item = index_by(self.sizes, "menu_item_id")
        self.areas_by_branch = index_by(self.areas, "branch_id")
        self.items_by_category = index_by(self.items, "category_id")

    @property
    def error(self):
        return LOAD_ERROR_DETAIL if self.failed else None

    def sizes_for(self, item_id):
        return self.sizes_by_item.get(item_id, [])

    def areas_for(self, branch_id):
        return self.areas_by_branch.get(branch_id, [])

    def items_for(self, category_id):
        return self.items_by_category.get(category_id, [])


class StorefrontService:
    """
    Loads everything a storefront page needs in one pass. Each collection is
    fetched on its own so one failing query leaves the rest of the page usable.
    """

    @staticmethod
    def get_restaurant(username) -> Restaurant:
        return get_object_or_404(Restaurant, username=username)

    @staticmethod
    def _fetch(name, queryset, failed):
        try:
            return list(queryset)
        except DatabaseError:
            logger.exception("failed to load %s", name)
            failed.append(name)
            return []

    @classmethod
    def load(cls, username, public=True) -> Storefront:
        restaurant = cls.get_restaurant(username)
        failed = []

        items = MenuItem.objects.filter(restaurant=restaurant)
        extras = Extra.objects.filter(restaurant=restaurant)
        branches = Branch.objects.filter(restaurant=restaurant)
        areas = DeliveryArea.objects.filter(branch__restaurant=restaurant)
        if public:
            items = items.available()
            extras = extras.filter(is_available=True)
            branches = branches.filter(is_active=True)
            areas = areas.filter(is_active=True, branch__is_active=True)

        return Storefront(
            restaurant=restaurant,
            categories=cls._fetch("categories", Category.objects.filter(restaurant=restaurant), failed),
            items=cls._fetch("menu items", items, failed),
            sizes=cls._fetch("sizes", Size.objects.filter(menu_item__in=items), failed),
            extras=cls._fetch("extras", extras, failed),
            branches=cls._fetch("branches", branches, failed),
            areas=cls._fetch("delivery areas", areas, failed),
            failed=failed,
        )

    @staticmethod
    def active_branches(restaurant):
        return list(Branch.objects.filter(restaurant=restaurant, is_active=True))

    @staticmethod
    def active_areas_by_branch(restaurant):
        areas = DeliveryArea.objects.filter(
            branch__restaurant=restaurant, branch__is_active=True, is_active=True
        )
        return index_by(areas, "branch_id")


class OrderService:
    @staticmethod
    def record(*, restaurant, customer_name, customer_phone, items, total_price,
               notes="", status="pending") -> Order:
        """
        Insert an order row. `items` is the snapshot list of
        {id, name, price, quantity, total}. Checkout does not call this.
        """
        order = Order.objects.create(
            restaurant=restaurant,
            customer_name=customer_name,
            customer_phone=customer_phone,
            notes=notes,
            items=items,
            total_price=total_price,
            status=status,
        )
        logger.info("order %s recorded for %s", order.pk, restaurant.username)
        return order

    @staticmethod
    def items_snapshot(cart):
        return [
            {
                "id": line.item.id,
                "name": line.item.name,
                "price": format_amount(line.unit_price),
                "quantity": line.quantity,
                "total": format_amount(line.total),
            }
            for line in cart.lines
        ]

    @staticmethod
    def update_status(order: Order, status=None, is_confirmed=None) -> Order:
        valid = {choice for choice, _ in Order.STATUS_CHOICES}
        if status is not None and status not in valid:
            raise ValueError(f"Unknown order status: {status}")

        fields = ["updated_at"]
        if status is not None:
            order.status = status
            fields.append("status")
        if is_confirmed is not None:
            order.is_confirmed = is_confirmed
            fields.append("is_confirmed")
        order.save(update_fields=fields)

        broadcast_order_update(order.restaurant.username, {
            "event": "order_updated",
            "order_id": order.pk,
            "status": order.status,
            "is_confirmed": order.is_confirmed,
            "updated_at": order.updated_at.isoformat(),
        })
        return order
