# cart/services/order_message.py

"""
ORDER MESSAGE FORMATTER

Renders a cart into the text sent to the store through the order channel.

Rules:
- Pure + deterministic: same lines (same order) and total => same text.
- Per-unit prices are re-derived with the pricing engine, never read from
  cached state.
- Money is rendered with two decimals.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from django.conf import settings

from .pricing import PricingPolicy, TWOPLACES, compute_line_price, line_subtotal

HEADER = "🛒 *Nuevo Pedido*"
PACK_LABEL = "Pack"
GLUTEN_FREE_LABEL = "Sin Gluten"
SUGAR_FREE_LABEL = "Sin Azúcar"


def _fmt_money(amount, symbol: str) -> str:
    value = Decimal(str(amount or 0)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    return f"{symbol}{value}"


def line_qualifiers(line) -> str:
    parts = []
    if line.is_pack:
        parts.append(f" ({PACK_LABEL})")
    if line.is_gluten_free:
        parts.append(f" ({GLUTEN_FREE_LABEL})")
    if line.is_sugar_free:
        parts.append(f" ({SUGAR_FREE_LABEL})")
    return "".join(parts)


def format_order(
    lines: Iterable,
    total,
    *,
    policy: Optional[PricingPolicy] = None,
    currency_symbol: Optional[str] = None,
) -> str:
    policy = policy or PricingPolicy.from_settings()
    symbol = currency_symbol if currency_symbol is not None else getattr(settings, "CURRENCY_SYMBOL", "$")

    message = f"{HEADER}\n\n"

    for index, line in enumerate(lines, start=1):
        unit_price = compute_line_price(
            line.product,
            line.is_pack,
            line.is_gluten_free,
            line.is_sugar_free,
            policy=policy,
        )
        subtotal = line_subtotal(unit_price, line.quantity)

        message += f"{index}. *{line.product.name}{line_qualifiers(line)}*\n"
        message += f"   Cantidad: {line.quantity}\n"
        message += f"   Precio unitario: {_fmt_money(unit_price, symbol)}\n"
        message += f"   Subtotal: {_fmt_money(subtotal, symbol)}\n\n"

    message += f"💰 *Total: {_fmt_money(total, symbol)}*"
    return message


def format_cart_order(cart) -> str:
    return format_order(cart.lines, cart.total, policy=cart.policy)
