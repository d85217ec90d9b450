# cart/services/variants.py

"""
VARIANT IDENTITY

A cart line is identified by the product plus the variant toggles the
customer picked. Two additions with the same key merge; different keys are
distinct lines, even for the same product.

The signature form ("<product_id>:<pack>:<gluten>:<sugar>", flags as 0/1)
is what the HTTP API uses to address a line in URLs.
"""

from __future__ import annotations

from typing import NamedTuple

from .exceptions import InvalidLineKeyError, UnsupportedVariantError

_FLAG_TO_TOKEN = {True: "1", False: "0"}
_TOKEN_TO_FLAG = {"1": True, "0": False}


class LineKey(NamedTuple):
    product_id: str
    is_pack: bool
    is_gluten_free: bool
    is_sugar_free: bool

    @classmethod
    def build(cls, product_id, is_pack=False, is_gluten_free=False, is_sugar_free=False) -> "LineKey":
        return cls(
            product_id=str(product_id),
            is_pack=bool(is_pack),
            is_gluten_free=bool(is_gluten_free),
            is_sugar_free=bool(is_sugar_free),
        )

    @property
    def signature(self) -> str:
        return ":".join(
            [
                self.product_id,
                _FLAG_TO_TOKEN[self.is_pack],
                _FLAG_TO_TOKEN[self.is_gluten_free],
                _FLAG_TO_TOKEN[self.is_sugar_free],
            ]
        )

    @classmethod
    def parse(cls, signature: str) -> "LineKey":
        raw = (signature or "").strip()
        parts = raw.rsplit(":", 3)
        if len(parts) != 4 or not parts[0]:
            raise InvalidLineKeyError(f"Malformed line key: {signature!r}")

        product_id, *tokens = parts
        try:
            flags = [_TOKEN_TO_FLAG[t] for t in tokens]
        except KeyError:
            raise InvalidLineKeyError(f"Malformed line key flags: {signature!r}")

        return cls(product_id, *flags)


def unsupported_variants(product, is_pack=False, is_gluten_free=False, is_sugar_free=False) -> list[str]:
    """
    Names of the requested toggles `product` does not offer.

    A pack is offered only when the product is a pack with a usable size.
    """
    missing = []
    if is_pack:
        size = getattr(product, "pack_size", None)
        if not getattr(product, "is_pack", False) or not isinstance(size, int) or isinstance(size, bool) or size < 1:
            missing.append("isPack")
    if is_gluten_free and not getattr(product, "gluten_free_available", False):
        missing.append("isGlutenFree")
    if is_sugar_free and not getattr(product, "sugar_free_available", False):
        missing.append("isSugarFree")
    return missing


def ensure_variant_offered(product, is_pack=False, is_gluten_free=False, is_sugar_free=False) -> None:
    missing = unsupported_variants(product, is_pack, is_gluten_free, is_sugar_free)
    if missing:
        raise UnsupportedVariantError(
            f"Product does not offer: {', '.join(missing)}"
        )
