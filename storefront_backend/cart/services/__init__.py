from .cart_service import Cart, CartLine
from .pricing import PricingPolicy, compute_line_price
from .snapshot import ProductSnapshot
from .variants import LineKey

__all__ = [
    "Cart",
    "CartLine",
    "LineKey",
    "PricingPolicy",
    "ProductSnapshot",
    "compute_line_price",
]
