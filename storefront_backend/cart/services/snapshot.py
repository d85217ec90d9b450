# cart/services/snapshot.py

"""
PRODUCT SNAPSHOT

Value copy of the price-relevant product fields, captured when a product is
added to a cart. Lines embed the snapshot, so later catalog edits (or a
deleted product) never change what is already in a cart.

Serialized form uses the catalog field names (isPack, packSize, ...) with
money as strings, so it fits in a signed session cookie.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional


def _decimal_or_none(value) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _int_or_none(value) -> Optional[int]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ProductSnapshot:
    id: str
    name: str
    price: Decimal
    is_pack: bool = False
    pack_size: Optional[int] = None
    pack_discount: Optional[Decimal] = None
    gluten_free_available: bool = False
    sugar_free_available: bool = False

    @classmethod
    def from_product(cls, product) -> "ProductSnapshot":
        """
        Capture a snapshot from a catalog Product (or anything shaped like one).
        """
        return cls(
            id=str(product.id),
            name=str(getattr(product, "name", "") or ""),
            price=_decimal_or_none(getattr(product, "price", None)) or Decimal("0.00"),
            is_pack=bool(getattr(product, "is_pack", False)),
            pack_size=_int_or_none(getattr(product, "pack_size", None)),
            pack_discount=_decimal_or_none(getattr(product, "pack_discount", None)),
            gluten_free_available=bool(getattr(product, "gluten_free_available", False)),
            sugar_free_available=bool(getattr(product, "sugar_free_available", False)),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price),
            "isPack": self.is_pack,
            "packSize": self.pack_size,
            "packDiscount": None if self.pack_discount is None else str(self.pack_discount),
            "glutenFreeAvailable": self.gluten_free_available,
            "sugarFreeAvailable": self.sugar_free_available,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProductSnapshot":
        product_id = str(data["id"] or "").strip()
        if not product_id:
            raise ValueError("snapshot id is required")

        price = _decimal_or_none(data.get("price"))
        if price is None:
            raise ValueError("snapshot price must be a valid decimal")

        return cls(
            id=product_id,
            name=str(data.get("name") or ""),
            price=price,
            is_pack=bool(data.get("isPack", False)),
            pack_size=_int_or_none(data.get("packSize")),
            pack_discount=_decimal_or_none(data.get("packDiscount")),
            gluten_free_available=bool(data.get("glutenFreeAvailable", False)),
            sugar_free_available=bool(data.get("sugarFreeAvailable", False)),
        )
