# cart/services/pricing.py

"""
PRICING ENGINE

Purpose:
- Compute the per-line-unit price of a product for a selected variant.
- Used for display quotes, cart totals and the order message alike, so the
  three can never disagree.

Order of operations (fixed):
1) base = unit price
2) pack selected and offered with a pack size:
     base = price * pack_size
     base = base * (1 - pack_discount / 100)   (only if a discount is set; 0 is valid)
3) gluten-free selected and available: base += GLUTEN_FREE_UPCHARGE
4) sugar-free selected and available:  base += SUGAR_FREE_UPCHARGE
5) quantize to 0.01 (ROUND_HALF_UP), the only rounding step

Hard rules:
- Pack price is per pack, quantity multiplies whole packs.
- Up-charges are flat per line unit, never scaled by pack size.
- Unsupported dietary requests are ignored, not errors.
- Pricing is total: malformed product data degrades to "no multiplier /
  no discount" and never raises (checkout must not fail on pricing).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.conf import settings

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")

DEFAULT_GLUTEN_FREE_UPCHARGE = Decimal("1.50")
DEFAULT_SUGAR_FREE_UPCHARGE = Decimal("1.50")


def _as_decimal(v):
    """Finite Decimal for `v`, or None when absent/unparseable."""
    if v is None or v == "" or isinstance(v, bool):
        return None
    try:
        d = v if isinstance(v, Decimal) else Decimal(str(v))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return d if d.is_finite() else None


def _money(v) -> Decimal:
    d = _as_decimal(v)
    if d is None:
        return ZERO
    try:
        return d.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ZERO


def _pack_size(value) -> int:
    """Usable pack size, or 0 when absent/invalid."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        size = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return size if size >= 1 else 0


def _pack_discount(value):
    """Discount percentage in [0, 100], or None when absent/out of range."""
    pct = _as_decimal(value)
    if pct is None or pct < ZERO or pct > HUNDRED:
        return None
    return pct


@dataclass(frozen=True)
class PricingPolicy:
    gluten_free_upcharge: Decimal = DEFAULT_GLUTEN_FREE_UPCHARGE
    sugar_free_upcharge: Decimal = DEFAULT_SUGAR_FREE_UPCHARGE

    @classmethod
    def from_settings(cls) -> "PricingPolicy":
        return cls(
            gluten_free_upcharge=_money(
                getattr(settings, "GLUTEN_FREE_UPCHARGE", DEFAULT_GLUTEN_FREE_UPCHARGE)
            ),
            sugar_free_upcharge=_money(
                getattr(settings, "SUGAR_FREE_UPCHARGE", DEFAULT_SUGAR_FREE_UPCHARGE)
            ),
        )


def compute_line_price(
    product,
    is_pack: bool = False,
    is_gluten_free: bool = False,
    is_sugar_free: bool = False,
    *,
    policy: PricingPolicy | None = None,
) -> Decimal:
    """
    Per-line-unit price for `product` with the selected variant.

    `product` is anything exposing the catalog price fields (a ProductSnapshot
    or a catalog Product instance).
    """
    policy = policy or PricingPolicy.from_settings()

    # unrounded until the final quantize
    base = _as_decimal(getattr(product, "price", None)) or ZERO

    if is_pack and getattr(product, "is_pack", False):
        size = _pack_size(getattr(product, "pack_size", None))
        if size:
            base = base * size
            discount = _pack_discount(getattr(product, "pack_discount", None))
            if discount is not None:
                base = base * (Decimal("1") - discount / HUNDRED)

    if is_gluten_free and getattr(product, "gluten_free_available", False):
        base += policy.gluten_free_upcharge

    if is_sugar_free and getattr(product, "sugar_free_available", False):
        base += policy.sugar_free_upcharge

    price = base.quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    return price if price > ZERO else ZERO


def line_subtotal(unit_price: Decimal, quantity: int) -> Decimal:
    return (unit_price * Decimal(int(quantity or 0))).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
