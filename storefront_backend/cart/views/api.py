# cart/views/api.py

"""
CART API VIEWS

Purpose:
- Session-scoped cart lifecycle (no login, no database rows)
- Add/update/remove/clear lines keyed by (product, pack, gluten-free, sugar-free)
- Price quote for a single variant
- Checkout: render the order message + channel link, then clear the cart

Hard rules:
- Money is server-owned: unit prices come from the pricing engine on a
  product snapshot taken when the line was first added.
- Lines are addressed by their lineKey signature ("<productId>:<p>:<g>:<s>").
"""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404

from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.responses import error_response
from cart.serializers import (
    AddCartItemInputSerializer,
    CartSerializer,
    CartVariantInputSerializer,
    CheckoutInputSerializer,
    CheckoutResultSerializer,
    QuoteSerializer,
    UpdateCartItemInputSerializer,
)
from cart.services.checkout import checkout_cart
from cart.services.exceptions import (
    EmptyCartError,
    InvalidLineKeyError,
    InvalidQuantityError,
    MissingOrderPhoneError,
    UnsupportedVariantError,
)
from cart.services.pricing import PricingPolicy, compute_line_price
from cart.services.snapshot import ProductSnapshot
from cart.services.variants import LineKey, ensure_variant_offered
from cart.session import load_cart, save_cart
from catalog.models import Product

logger = logging.getLogger(__name__)


# =====================================================
# HELPERS
# =====================================================

def _cart_response(cart, http_status=status.HTTP_200_OK):
    return Response(CartSerializer(cart).data, status=http_status)


def _invalid_quantity(exc):
    return error_response(
        code="INVALID_QUANTITY",
        message=str(exc) or "Quantity must be a positive integer.",
        http_status=status.HTTP_400_BAD_REQUEST,
    )


def _parse_line_key(raw):
    """
    Returns (LineKey, None) or (None, error Response).
    """
    try:
        return LineKey.parse(raw), None
    except InvalidLineKeyError as exc:
        return None, error_response(
            code="INVALID_LINE_KEY",
            message=str(exc),
            http_status=status.HTTP_400_BAD_REQUEST,
        )


# =====================================================
# CART API VIEWS
# =====================================================

class ActiveCartView(APIView):
    """
    Current session cart (empty cart when the session has none).
    """

    permission_classes = [AllowAny]
    serializer_class = CartSerializer

    @extend_schema(responses={200: CartSerializer}, description="Get the current session cart")
    def get(self, request):
        return _cart_response(load_cart(request))


class QuoteView(APIView):
    """
    Unit price for one product variant, without touching the cart.
    """

    permission_classes = [AllowAny]
    serializer_class = QuoteSerializer

    @extend_schema(
        request=CartVariantInputSerializer,
        responses={200: QuoteSerializer},
        description="Quote the unit price of a product variant (pack / gluten-free / sugar-free)",
    )
    def post(self, request):
        s = CartVariantInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        product = get_object_or_404(Product, id=data["productId"])
        unit_price = compute_line_price(
            ProductSnapshot.from_product(product),
            is_pack=data["isPack"],
            is_gluten_free=data["isGlutenFree"],
            is_sugar_free=data["isSugarFree"],
            policy=PricingPolicy.from_settings(),
        )

        return Response(
            {
                "productId": str(product.id),
                "isPack": data["isPack"],
                "isGlutenFree": data["isGlutenFree"],
                "isSugarFree": data["isSugarFree"],
                "unitPrice": f"{unit_price:.2f}",
            },
            status=status.HTTP_200_OK,
        )


class AddCartItemView(APIView):
    """
    Add a product variant to the session cart.

    Same (product, pack, gluten-free, sugar-free) => quantities merge into one line.
    Toggles the product does not offer are rejected (UNSUPPORTED_VARIANT).
    """

    permission_classes = [AllowAny]
    serializer_class = CartSerializer

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Add a product variant to the cart (increments quantity if the line exists)",
        examples=[
            OpenApiExample(
                "Gluten-free pack",
                value={
                    "productId": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                    "isPack": True,
                    "isGlutenFree": True,
                    "isSugarFree": False,
                    "quantity": 2,
                },
                request_only=True,
            )
        ],
    )
    def post(self, request):
        s = AddCartItemInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        product = get_object_or_404(Product, id=data["productId"])
        cart = load_cart(request)

        try:
            ensure_variant_offered(
                product,
                is_pack=data["isPack"],
                is_gluten_free=data["isGlutenFree"],
                is_sugar_free=data["isSugarFree"],
            )
            cart.add_line(
                product,
                is_pack=data["isPack"],
                is_gluten_free=data["isGlutenFree"],
                is_sugar_free=data["isSugarFree"],
                quantity=data["quantity"],
            )
        except UnsupportedVariantError as exc:
            return error_response(
                code="UNSUPPORTED_VARIANT", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST
            )
        except InvalidQuantityError as exc:
            return _invalid_quantity(exc)

        save_cart(request, cart)
        return _cart_response(cart)


class UpdateCartItemView(APIView):
    """
    Set the quantity of one cart line. quantity <= 0 removes the line.
    Unknown lines are a no-op.
    """

    permission_classes = [AllowAny]
    serializer_class = CartSerializer

    @extend_schema(
        request=UpdateCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Update a cart line quantity (0 or less removes the line)",
    )
    def patch(self, request, line_key):
        key, err = _parse_line_key(line_key)
        if err is not None:
            return err

        s = UpdateCartItemInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = load_cart(request)
        try:
            cart.update_quantity(
                key.product_id,
                key.is_pack,
                key.is_gluten_free,
                key.is_sugar_free,
                s.validated_data["quantity"],
            )
        except InvalidQuantityError as exc:
            return _invalid_quantity(exc)

        save_cart(request, cart)
        return _cart_response(cart)


class RemoveCartItemView(APIView):
    permission_classes = [AllowAny]
    serializer_class = CartSerializer

    @extend_schema(responses={200: CartSerializer}, description="Remove a cart line (idempotent)")
    def delete(self, request, line_key):
        key, err = _parse_line_key(line_key)
        if err is not None:
            return err

        cart = load_cart(request)
        cart.remove_line(key.product_id, key.is_pack, key.is_gluten_free, key.is_sugar_free)
        save_cart(request, cart)
        return _cart_response(cart)


class ClearCartView(APIView):
    permission_classes = [AllowAny]
    serializer_class = CartSerializer

    @extend_schema(responses={200: CartSerializer}, description="Remove every line from the cart")
    def delete(self, request):
        cart = load_cart(request)
        cart.clear()
        save_cart(request, cart)
        return _cart_response(cart)


class CheckoutCartView(APIView):
    """
    Finalize the cart into an order message and a messaging link.

    On success the cart is cleared. The client opens `url` to send the order.
    """

    permission_classes = [AllowAny]
    serializer_class = CheckoutResultSerializer

    @extend_schema(
        request=CheckoutInputSerializer,
        responses={200: CheckoutResultSerializer},
        description="Checkout the cart: returns the order message and the messaging link, then clears the cart",
    )
    def post(self, request):
        s = CheckoutInputSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        cart = load_cart(request)

        try:
            result = checkout_cart(cart=cart, phone=s.validated_data.get("phone"))
        except EmptyCartError as exc:
            return error_response(code="EMPTY_CART", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        except MissingOrderPhoneError as exc:
            return error_response(code="MISSING_PHONE", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        save_cart(request, cart)

        return Response(
            {
                "message": result.message,
                "url": result.url,
                "total": f"{result.total:.2f}",
                "itemCount": result.item_count,
            },
            status=status.HTTP_200_OK,
        )
