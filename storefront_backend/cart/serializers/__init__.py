from .cart import CartLineSerializer, CartSerializer
from .inputs import (
    AddCartItemInputSerializer,
    CartVariantInputSerializer,
    CheckoutInputSerializer,
    CheckoutResultSerializer,
    QuoteSerializer,
    UpdateCartItemInputSerializer,
)

__all__ = [
    "AddCartItemInputSerializer",
    "CartLineSerializer",
    "CartSerializer",
    "CartVariantInputSerializer",
    "CheckoutInputSerializer",
    "CheckoutResultSerializer",
    "QuoteSerializer",
    "UpdateCartItemInputSerializer",
]
