"""
Cart and product configuration.

Pure domain objects: they hold snapshots of menu rows (never model instances) so a
cart can be stored in the visitor's session and rebuilt on the next request.
Effective unit price = (selected size price, else item price) + sum of extras.
"""
from dataclasses import dataclass, field
from decimal import Decimal


def to_decimal(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def format_amount(value) -> str:
    """Drop a trailing .00 for display: 84.00 -> "84", 12.50 -> "12.50"."""
    amount = to_decimal(value).quantize(Decimal("0.01"))
    if amount == amount.to_integral_value():
        return str(amount.to_integral_value())
    return str(amount)


def _get(obj, name, default=None):
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


class ConfigurationError(ValueError):
    pass


# ===== SNAPSHOTS =====

@dataclass(frozen=True)
class ItemSnapshot:
    id: int
    name: str
    price: Decimal
    image_url: str = ""

    @classmethod
    def of(cls, obj):
        if isinstance(obj, cls):
            return obj
        return cls(
            id=int(_get(obj, "id")),
            name=_get(obj, "name", ""),
            price=to_decimal(_get(obj, "price")),
            image_url=_get(obj, "image_url", "") or "",
        )


@dataclass(frozen=True)
class SizeSnapshot:
    id: int
    name: str
    price: Decimal

    @classmethod
    def of(cls, obj):
        if obj is None or isinstance(obj, cls):
            return obj
        return cls(id=int(_get(obj, "id")), name=_get(obj, "name", ""), price=to_decimal(_get(obj, "price")))


@dataclass(frozen=True)
class ExtraSnapshot:
    id: int
    name: str
    price: Decimal

    @classmethod
    def of(cls, obj):
        if isinstance(obj, cls):
            return obj
        return cls(id=int(_get(obj, "id")), name=_get(obj, "name", ""), price=to_decimal(_get(obj, "price")))


@dataclass(frozen=True)
class BranchSnapshot:
    id: int
    name: str
    whatsapp_phone: str = ""

    @classmethod
    def of(cls, obj):
        if obj is None or isinstance(obj, cls):
            return obj
        return cls(
            id=int(_get(obj, "id")),
            name=_get(obj, "name", ""),
            whatsapp_phone=_get(obj, "whatsapp_phone", "") or "",
        )


@dataclass(frozen=True)
class AreaSnapshot:
    id: int
    branch_id: int
    name: str
    delivery_price: Decimal

    @classmethod
    def of(cls, obj):
        if obj is None or isinstance(obj, cls):
            return obj
        return cls(
            id=int(_get(obj, "id")),
            branch_id=int(_get(obj, "branch_id")),
            name=_get(obj, "name", ""),
            delivery_price=to_decimal(_get(obj, "delivery_price")),
        )


# ===== LINES =====

def normalize_extra_ids(extras_key) -> tuple:
    """Accepts "3,1" or any iterable of ids; returns sorted unique ints."""
    if extras_key is None:
        return ()
    if isinstance(extras_key, str):
        extras_key = [part for part in extras_key.split(",") if part.strip()]
    return tuple(sorted({int(extra_id) for extra_id in extras_key}))


@dataclass(frozen=True)
class CartLineKey:
    item_id: int
    size_id: int | None = None
    extra_ids: tuple = ()

    @classmethod
    def build(cls, item_id, size_id=None, extras_key=None):
        return cls(
            item_id=int(item_id),
            size_id=int(size_id) if size_id not in (None, "") else None,
            extra_ids=normalize_extra_ids(extras_key),
        )

    @property
    def extras_key(self) -> str:
        return ",".join(str(extra_id) for extra_id in self.extra_ids)


def unit_price_for(item, size=None, extras=()) -> Decimal:
    base = size.price if size is not None else item.price
    return base + sum((extra.price for extra in extras), Decimal("0"))


@dataclass
class CartLine:
    item: ItemSnapshot
    quantity: int = 1
    size: SizeSnapshot | None = None
    extras: tuple = ()

    @property
    def key(self) -> CartLineKey:
        return CartLineKey(
            item_id=self.item.id,
            size_id=self.size.id if self.size else None,
            extra_ids=tuple(sorted(extra.id for extra in self.extras)),
        )

    @property
    def unit_price(self) -> Decimal:
        return unit_price_for(self.item, self.size, self.extras)

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self):
        return {
            "item": {"id": self.item.id, "name": self.item.name,
                     "price": str(self.item.price), "image_url": self.item.image_url},
            "quantity": self.quantity,
            "size": {"id": self.size.id, "name": self.size.name, "price": str(self.size.price)} if self.size else None,
            "extras": [{"id": e.id, "name": e.name, "price": str(e.price)} for e in self.extras],
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            item=ItemSnapshot.of(data["item"]),
            quantity=int(data.get("quantity", 1)),
            size=SizeSnapshot.of(data.get("size")),
            extras=tuple(ExtraSnapshot.of(e) for e in data.get("extras") or ()),
        )


# ===== CART =====

@dataclass
class Cart:
    lines: list = field(default_factory=list)
    branch: BranchSnapshot | None = None
    area: AreaSnapshot | None = None

    def _find(self, key):
        for line in self.lines:
            if line.key == key:
                return line
        return None

    def add_to_cart(self, item, size=None, extras=(), quantity=1):
        """
        Add `quantity` units (one by default). Lines with the same item, size
        and set of extras merge.
        """
        quantity = max(1, int(quantity))
        item = ItemSnapshot.of(item)
        size = SizeSnapshot.of(size)
        extras = tuple(sorted((ExtraSnapshot.of(e) for e in extras), key=lambda e: e.id))

        candidate = CartLine(item=item, quantity=quantity, size=size, extras=extras)
        line = self._find(candidate.key)
        if line is not None:
            line.quantity += quantity
            return line

        self.lines.append(candidate)
        return candidate

    def remove_from_cart(self, item_id, size_id=None, extras_key=None):
        """Remove one unit of the matching line. No-op when nothing matches."""
        line = self._find(CartLineKey.build(item_id, size_id, extras_key))
        if line is None:
            return None
        if line.quantity <= 1:
            self.lines.remove(line)
            return None
        line.quantity -= 1
        return line

    @property
    def is_empty(self):
        return not self.lines

    @property
    def item_count(self):
        return sum(line.quantity for line in self.lines)

    def get_total_price(self) -> Decimal:
        return sum((line.total for line in self.lines), Decimal("0"))

    def get_delivery_price(self) -> Decimal:
        return self.area.delivery_price if self.area is not None else Decimal("0")

    def get_final_total(self) -> Decimal:
        return self.get_total_price() + self.get_delivery_price()

    def select_branch(self, branch):
        branch = BranchSnapshot.of(branch)
        if branch is None or self.branch is None or branch.id != self.branch.id:
            self.area = None
        self.branch = branch

    def select_area(self, area):
        area = AreaSnapshot.of(area)
        if area is not None and (self.branch is None or area.branch_id != self.branch.id):
            raise ConfigurationError("Delivery area does not belong to the selected branch")
        self.area = area

    def clear(self):
        self.lines = []
        self.branch = None
        self.area = None

    def to_dict(self):
        return {
            "lines": [line.to_dict() for line in self.lines],
            "branch": {"id": self.branch.id, "name": self.branch.name,
                       "whatsapp_phone": self.branch.whatsapp_phone} if self.branch else None,
            "area": {"id": self.area.id, "branch_id": self.area.branch_id, "name": self.area.name,
                     "delivery_price": str(self.area.delivery_price)} if self.area else None,
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        return cls(
            lines=[CartLine.from_dict(line) for line in data.get("lines") or ()],
            branch=BranchSnapshot.of(data.get("branch")),
            area=AreaSnapshot.of(data.get("area")),
        )

    def summary(self):
        """Representation returned by the cart endpoints."""
        return {
            "lines": [
                {
                    **line.to_dict(),
                    "key": {"item_id": line.key.item_id, "size_id": line.key.size_id,
                            "extras_key": line.key.extras_key},
                    "unit_price": format_amount(line.unit_price),
                    "total": format_amount(line.total),
                }
                for line in self.lines
            ],
            "item_count": self.item_count,
            "branch": self.to_dict()["branch"],
            "area": self.to_dict()["area"],
            "subtotal": format_amount(self.get_total_price()),
            "delivery_price": format_amount(self.get_delivery_price()),
            "total": format_amount(self.get_final_total()),
        }


# ===== PRODUCT CONFIGURATION =====

class ProductConfiguration:
    """
    State of the "add to cart" dialog for one item: size, extras and quantity.
    A size must be chosen when the item has any.
    """

    def __init__(self, item, sizes=(), extras=()):
        self.item = ItemSnapshot.of(item)
        self.sizes = [SizeSnapshot.of(s) for s in sizes]
        self.extras = [ExtraSnapshot.of(e) for e in extras]
        self.selected_size = None
        self.selected_extra_ids = []
        self.quantity = 1

    def select_size(self, size_id):
        size_id = int(size_id)
        for size in self.sizes:
            if size.id == size_id:
                self.selected_size = size
                return size
        raise ConfigurationError("Size does not belong to this item")

    def toggle_extra(self, extra_id):
        extra_id = int(extra_id)
        if extra_id not in {e.id for e in self.extras}:
            raise ConfigurationError("Extra is not available")
        if extra_id in self.selected_extra_ids:
            self.selected_extra_ids.remove(extra_id)
            return False
        self.selected_extra_ids.append(extra_id)
        return True

    @property
    def selected_extras(self):
        return tuple(e for e in self.extras if e.id in self.selected_extra_ids)

    def increment(self):
        self.quantity += 1
        return self.quantity

    def decrement(self):
        self.quantity = max(1, self.quantity - 1)
        return self.quantity

    def set_quantity(self, quantity):
        self.quantity = max(1, int(quantity))
        return self.quantity

    @property
    def requires_size(self):
        return bool(self.sizes)

    @property
    def can_add(self):
        return not self.requires_size or self.selected_size is not None

    @property
    def unit_price(self) -> Decimal:
        return unit_price_for(self.item, self.selected_size, self.selected_extras)

    @property
    def displayed_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def confirm(self, cart):
        if not self.can_add:
            raise ConfigurationError("Please choose a size")
        cart.add_to_cart(self.item, self.selected_size, self.selected_extras, quantity=self.quantity)
        return cart

    def state(self):
        return {
            "item": {"id": self.item.id, "name": self.item.name, "price": format_amount(self.item.price)},
            "size": {"id": self.selected_size.id, "name": self.selected_size.name}
            if self.selected_size else None,
            "extra_ids": sorted(self.selected_extra_ids),
            "quantity": self.quantity,
            "requires_size": self.requires_size,
            "can_add": self.can_add,
            "unit_price": format_amount(self.unit_price),
            "displayed_total": format_amount(self.displayed_total),
        }