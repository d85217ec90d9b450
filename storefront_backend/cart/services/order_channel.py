# cart/services/order_channel.py

"""
ORDER CHANNEL LINK

Builds the outbound messaging link (pre-filled message body) for checkout.
The message text is URL-encoded as a query value; the phone is reduced to
its digits.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from django.conf import settings

from .exceptions import MissingOrderPhoneError

DEFAULT_ORDER_CHANNEL_URL = "https://wa.me/"

_NON_DIGITS = re.compile(r"\D+")


def normalize_phone(raw) -> str:
    return _NON_DIGITS.sub("", str(raw or ""))


def build_order_link(phone, message: str, *, base_url: str | None = None) -> str:
    digits = normalize_phone(phone)
    if not digits:
        raise MissingOrderPhoneError("An order channel phone number is required.")

    base = base_url or getattr(settings, "ORDER_CHANNEL_URL", "") or DEFAULT_ORDER_CHANNEL_URL
    if not base.endswith("/"):
        base = f"{base}/"

    return f"{base}{digits}?text={quote(message, safe='')}"
