from .api import (
    ActiveCartView,
    AddCartItemView,
    CheckoutCartView,
    ClearCartView,
    QuoteView,
    RemoveCartItemView,
    UpdateCartItemView,
)

__all__ = [
    "ActiveCartView",
    "AddCartItemView",
    "CheckoutCartView",
    "ClearCartView",
    "QuoteView",
    "RemoveCartItemView",
    "UpdateCartItemView",
]
