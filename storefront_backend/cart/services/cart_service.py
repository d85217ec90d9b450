# cart/services/cart_service.py

"""
CART AGGREGATE (APPLICATION SERVICE)

Purpose:
- Hold the customer's selections as lines keyed by (product id, pack,
  gluten-free, sugar-free).
- Keep a cached total that is recomputed from the lines after every mutation.

Hard rules:
- Lines embed a ProductSnapshot by value (price stability against catalog edits).
- A line never exists with quantity <= 0.
- add_line() rejects non-positive quantities; it never decrements.
- Quantities are whole ints; a line holds at most MAX_LINE_QUANTITY units.
- update/remove on an absent line is a silent no-op (stale UI clicks are harmless).
- Every mutation builds the new line list first and swaps it in, so callers
  never observe a half-applied change.

One Cart instance belongs to one session; it is created from the session at
the start of a request and written back at the end (see cart.session).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Optional

from .exceptions import InvalidQuantityError
from .pricing import ZERO, PricingPolicy, compute_line_price, line_subtotal
from .snapshot import ProductSnapshot
from .variants import LineKey

logger = logging.getLogger(__name__)


MAX_LINE_QUANTITY = 10_000


def _to_whole_int(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantityError("quantity must be a whole integer unit")
    if value > MAX_LINE_QUANTITY:
        raise InvalidQuantityError(f"quantity cannot exceed {MAX_LINE_QUANTITY}")
    return value


def _to_positive_int(value) -> int:
    value = _to_whole_int(value)
    if value <= 0:
        raise InvalidQuantityError("quantity must be greater than zero")
    return value


@dataclass(frozen=True)
class CartLine:
    product: ProductSnapshot
    quantity: int
    is_pack: bool = False
    is_gluten_free: bool = False
    is_sugar_free: bool = False

    @property
    def key(self) -> LineKey:
        return LineKey.build(
            self.product.id, self.is_pack, self.is_gluten_free, self.is_sugar_free
        )

    def unit_price(self, policy: PricingPolicy) -> Decimal:
        return compute_line_price(
            self.product,
            self.is_pack,
            self.is_gluten_free,
            self.is_sugar_free,
            policy=policy,
        )

    def subtotal(self, policy: PricingPolicy) -> Decimal:
        return line_subtotal(self.unit_price(policy), self.quantity)

    def to_dict(self) -> dict:
        return {
            "product": self.product.to_dict(),
            "quantity": self.quantity,
            "isPack": self.is_pack,
            "isGlutenFree": self.is_gluten_free,
            "isSugarFree": self.is_sugar_free,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        quantity = data["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int) or not 0 < quantity <= MAX_LINE_QUANTITY:
            raise ValueError("stored line quantity is out of range")

        return cls(
            product=ProductSnapshot.from_dict(data["product"]),
            quantity=quantity,
            is_pack=bool(data.get("isPack", False)),
            is_gluten_free=bool(data.get("isGlutenFree", False)),
            is_sugar_free=bool(data.get("isSugarFree", False)),
        )


class Cart:
    """
    Session cart aggregate.

    `total` is a cached projection; `calculate_total()` recomputes it fresh.
    Both are equal at every observation point.
    """

    def __init__(
        self,
        lines: Optional[Iterable[CartLine]] = None,
        *,
        policy: Optional[PricingPolicy] = None,
    ):
        self.policy = policy or PricingPolicy.from_settings()
        self._lines: list[CartLine] = []
        self._total: Decimal = ZERO

        merged: list[CartLine] = []
        for line in lines or ():
            merged = self._merged(merged, line)
        self._commit(merged)

    # -------------------------------------------------
    # READ-ONLY VIEW
    # -------------------------------------------------

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def calculate_total(self) -> Decimal:
        total = ZERO
        for line in self._lines:
            total += line.subtotal(self.policy)
        return total

    def find_line(self, product_id, is_pack=False, is_gluten_free=False, is_sugar_free=False) -> Optional[CartLine]:
        key = LineKey.build(product_id, is_pack, is_gluten_free, is_sugar_free)
        for line in self._lines:
            if line.key == key:
                return line
        return None

    def get_line_quantity(self, product_id, is_pack=False, is_gluten_free=False, is_sugar_free=False) -> int:
        line = self.find_line(product_id, is_pack, is_gluten_free, is_sugar_free)
        return line.quantity if line else 0

    # -------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------

    def add_line(
        self,
        product,
        is_pack: bool = False,
        is_gluten_free: bool = False,
        is_sugar_free: bool = False,
        quantity: int = 1,
    ) -> CartLine:
        """
        Add `quantity` of a product variant; merges into an existing line with
        the same identity key.

        `product` may be a ProductSnapshot or a catalog Product (snapshotted here).
        """
        qty = _to_positive_int(quantity)

        snapshot = product if isinstance(product, ProductSnapshot) else ProductSnapshot.from_product(product)
        incoming = CartLine(
            product=snapshot,
            quantity=qty,
            is_pack=bool(is_pack),
            is_gluten_free=bool(is_gluten_free),
            is_sugar_free=bool(is_sugar_free),
        )

        merged_qty = self.get_line_quantity(snapshot.id, is_pack, is_gluten_free, is_sugar_free) + qty
        if merged_qty > MAX_LINE_QUANTITY:
            raise InvalidQuantityError(f"line quantity cannot exceed {MAX_LINE_QUANTITY}")

        self._commit(self._merged(self._lines, incoming))

        line = self.find_line(snapshot.id, is_pack, is_gluten_free, is_sugar_free)
        logger.debug(
            "Cart line added",
            extra={"line_key": incoming.key.signature, "quantity": line.quantity},
        )
        return line

    def update_quantity(
        self,
        product_id,
        is_pack: bool,
        is_gluten_free: bool,
        is_sugar_free: bool,
        new_quantity: int,
    ) -> bool:
        """
        Set a line's quantity exactly. <= 0 removes the line.
        Returns False when no matching line exists (no-op).
        """
        key = LineKey.build(product_id, is_pack, is_gluten_free, is_sugar_free)

        qty = _to_whole_int(new_quantity)

        if qty <= 0:
            return self.remove_line(product_id, is_pack, is_gluten_free, is_sugar_free)

        found = False
        new_lines = []
        for line in self._lines:
            if line.key == key:
                new_lines.append(replace(line, quantity=qty))
                found = True
            else:
                new_lines.append(line)

        if found:
            self._commit(new_lines)
        return found

    def remove_line(self, product_id, is_pack=False, is_gluten_free=False, is_sugar_free=False) -> bool:
        """Idempotent. Returns True only if a line was removed."""
        key = LineKey.build(product_id, is_pack, is_gluten_free, is_sugar_free)
        new_lines = [line for line in self._lines if line.key != key]
        removed = len(new_lines) != len(self._lines)
        if removed:
            self._commit(new_lines)
        return removed

    def clear(self) -> None:
        self._commit([])

    # -------------------------------------------------
    # SESSION SERIALIZATION
    # -------------------------------------------------

    def to_dict(self) -> dict:
        return {"items": [line.to_dict() for line in self._lines]}

    @classmethod
    def from_dict(cls, data, *, policy: Optional[PricingPolicy] = None) -> "Cart":
        """
        Rebuild a cart from its stored form. Malformed lines are dropped.
        """
        lines = []
        raw_items = data.get("items") if isinstance(data, dict) else None

        for idx, raw in enumerate(raw_items or []):
            try:
                lines.append(CartLine.from_dict(raw))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(
                    "Dropping malformed stored cart line",
                    extra={"index": idx, "error": str(exc)},
                )

        return cls(lines, policy=policy)

    # -------------------------------------------------
    # INTERNALS
    # -------------------------------------------------

    @staticmethod
    def _merged(lines: Iterable[CartLine], incoming: CartLine) -> list[CartLine]:
        out = []
        merged = False
        for line in lines:
            if not merged and line.key == incoming.key:
                out.append(replace(line, quantity=line.quantity + incoming.quantity))
                merged = True
            else:
                out.append(line)
        if not merged:
            out.append(incoming)
        return out

    def _commit(self, new_lines: list[CartLine]) -> None:
        total = ZERO
        for line in new_lines:
            total += line.subtotal(self.policy)
        self._lines = list(new_lines)
        self._total = total

    def __repr__(self):
        return f"<Cart lines={len(self._lines)} total={self._total}>"
