# cart/services/checkout.py

"""
CHECKOUT (APPLICATION SERVICE)

Purpose:
- Finalize a session cart into an outbound order message + channel link.
- No order is stored; the channel (messaging app) is the order record.

Rules:
- Empty cart => EmptyCartError
- No phone (request or ORDER_PHONE_NUMBER setting) => MissingOrderPhoneError
- The cart is cleared only after the link was built successfully.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings

from .exceptions import EmptyCartError
from .order_channel import build_order_link, normalize_phone
from .order_message import format_cart_order

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutResult:
    message: str
    url: str
    total: Decimal
    item_count: int


def resolve_order_phone(phone=None) -> str:
    digits = normalize_phone(phone)
    if digits:
        return digits
    return normalize_phone(getattr(settings, "ORDER_PHONE_NUMBER", ""))


def checkout_cart(*, cart, phone=None) -> CheckoutResult:
    if cart.is_empty:
        raise EmptyCartError("Cart is empty.")

    message = format_cart_order(cart)
    url = build_order_link(resolve_order_phone(phone), message)

    result = CheckoutResult(
        message=message,
        url=url,
        total=cart.total,
        item_count=cart.item_count,
    )

    cart.clear()

    logger.info(
        "Cart checked out to order channel",
        extra={"total": str(result.total), "item_count": result.item_count},
    )
    return result
