"""
PATH: cart/urls.py

CART URLS

Purpose:
- Session cart lifecycle
- Cart line operations (addressed by lineKey)
- Variant price quote
- Checkout to the order channel
"""

from django.urls import path

from cart.views.api import (
    ActiveCartView,
    AddCartItemView,
    CheckoutCartView,
    ClearCartView,
    QuoteView,
    RemoveCartItemView,
    UpdateCartItemView,
)

app_name = "cart"

urlpatterns = [
    path("cart/", ActiveCartView.as_view(), name="active-cart"),
    path("cart/quote/", QuoteView.as_view(), name="quote"),
    path("cart/clear/", ClearCartView.as_view(), name="clear-cart"),

    path("cart/items/add/", AddCartItemView.as_view(), name="add-cart-item"),
    path("cart/items/<str:line_key>/update/", UpdateCartItemView.as_view(), name="update-cart-item"),
    path("cart/items/<str:line_key>/remove/", RemoveCartItemView.as_view(), name="remove-cart-item"),

    path("cart/checkout/", CheckoutCartView.as_view(), name="checkout"),
]
