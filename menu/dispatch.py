"""
Order hand-off over WhatsApp.
The order is never written server side: the cart becomes a pre-filled message
behind a wa.me link and the cart is cleared.
"""
import logging
import re
from dataclasses import dataclass
from urllib.parse import quote

from django.conf import settings
from django.utils.translation import gettext as _

from .cart import format_amount

logger = logging.getLogger(__name__)

WHATSAPP_BASE_URL = "https://wa.me/"


def digits_only(phone) -> str:
    return re.sub(r"\D", "", phone or "")


def whatsapp_link(phone, text=None) -> str:
    url = f"{WHATSAPP_BASE_URL}{digits_only(phone)}"
    if text is not None:
        # same escaping as encodeURIComponent
        url += "?text=" + quote(text, safe="!*'()")
    return url


@dataclass(frozen=True)
class CustomerDetails:
    name: str = ""
    phone: str = ""
    address: str = ""
    notes: str = ""

    @classmethod
    def from_data(cls, data):
        return cls(**{
            key: (data.get(key) or "").strip()
            for key in ("name", "phone", "address", "notes")
        })


class DispatchError(Exception):
    def __init__(self, missing):
        super().__init__("Order is missing: " + ", ".join(missing))
        self.missing = list(missing)


class OrderDispatch:
    """
    Args:
        restaurant: the storefront row (uses name + whatsapp_phone)
        branches: active branches of the storefront
        areas_by_branch: branch id -> active delivery areas
    """

    def __init__(self, restaurant, branches=(), areas_by_branch=None, currency=None):
        self.restaurant = restaurant
        self.branches = {branch.id: branch for branch in branches}
        self.areas_by_branch = areas_by_branch or {}
        self.currency = currency or settings.MENU_CURRENCY

    def money(self, value):
        return f"{format_amount(value)} {self.currency}"

    def target_phone(self, cart):
        if cart.branch is not None:
            branch = self.branches.get(cart.branch.id)
            phone = branch.whatsapp_phone if branch is not None else cart.branch.whatsapp_phone
            if digits_only(phone):
                return phone
        return self.restaurant.whatsapp_phone

    def missing_requirements(self, cart, customer: CustomerDetails):
        missing = []
        if not customer.name:
            missing.append("name")
        if not customer.address:
            missing.append("address")
        if not customer.phone:
            missing.append("phone")

        if self.branches:
            if cart.branch is None or cart.branch.id not in self.branches:
                missing.append("branch")
            elif self.areas_by_branch.get(cart.branch.id):
                area_ids = {area.id for area in self.areas_by_branch[cart.branch.id]}
                if cart.area is None or cart.area.id not in area_ids:
                    missing.append("area")

        if cart.is_empty:
            missing.append("cart")
        if not digits_only(self.target_phone(cart)):
            missing.append("whatsapp_phone")
        return missing

    def line_text(self, line):
        text = line.item.name
        if line.size is not None:
            text += f" ({line.size.name})"
        if line.extras:
            text += " + " + ", ".join(extra.name for extra in line.extras)
        return f"{text} x{line.quantity} = {self.money(line.total)}"

    def build_message(self, cart, customer: CustomerDetails) -> str:
        lines = [_("Hello, I would like to order:"), ""]
        lines += [f"{index}. {self.line_text(line)}" for index, line in enumerate(cart.lines, start=1)]
        lines.append("")

        lines.append(_("Subtotal: %(amount)s") % {"amount": self.money(cart.get_total_price())})
        delivery = cart.get_delivery_price()
        if delivery:
            lines.append(_("Delivery: %(amount)s") % {"amount": self.money(delivery)})
        lines.append(_("Total: %(amount)s") % {"amount": self.money(cart.get_final_total())})
        lines.append("")

        lines.append(_("Name: %(value)s") % {"value": customer.name})
        lines.append(_("Phone: %(value)s") % {"value": customer.phone})
        lines.append(_("Address: %(value)s") % {"value": customer.address})
        if cart.branch is not None:
            lines.append(_("Branch: %(value)s") % {"value": cart.branch.name})
        if cart.area is not None:
            lines.append(_("Area: %(value)s") % {"value": cart.area.name})
        if customer.notes:
            lines.append(_("Notes: %(value)s") % {"value": customer.notes})
        lines.append("")

        lines.append(_("Payment: cash on delivery"))
        lines.append(_("Thank you."))
        return "\n".join(lines)

    def whatsapp_url(self, cart, customer: CustomerDetails) -> str:
        return whatsapp_link(self.target_phone(cart), self.build_message(cart, customer))

    def dispatch(self, cart, customer: CustomerDetails) -> str:
        """
        Returns the wa.me url and clears the cart.
        Raises DispatchError listing what still needs to be filled in.
        """
        missing = self.missing_requirements(cart, customer)
        if missing:
            raise DispatchError(missing)

        url = self.whatsapp_url(cart, customer)
        logger.info(
            "order for %s dispatched to whatsapp (%s lines, total %s)",
            self.restaurant.username, len(cart.lines), format_amount(cart.get_final_total()),
        )
        cart.clear()
        return url
