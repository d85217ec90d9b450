# cart/serializers/inputs.py

"""
CART INPUT SERIALIZERS (request validation + Swagger docs)
"""

from rest_framework import serializers


class CartVariantInputSerializer(serializers.Serializer):
    productId = serializers.UUIDField()
    isPack = serializers.BooleanField(required=False, default=False)
    isGlutenFree = serializers.BooleanField(required=False, default=False)
    isSugarFree = serializers.BooleanField(required=False, default=False)


class AddCartItemInputSerializer(CartVariantInputSerializer):
    # Range (1..MAX_LINE_QUANTITY) is enforced by the cart itself (INVALID_QUANTITY).
    quantity = serializers.IntegerField(required=False, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    # <= 0 removes the line; above MAX_LINE_QUANTITY is INVALID_QUANTITY
    quantity = serializers.IntegerField()


class CheckoutInputSerializer(serializers.Serializer):
    phone = serializers.CharField(required=False, allow_blank=True, default="")


class QuoteSerializer(serializers.Serializer):
    productId = serializers.CharField()
    isPack = serializers.BooleanField()
    isGlutenFree = serializers.BooleanField()
    isSugarFree = serializers.BooleanField()
    unitPrice = serializers.CharField()


class CheckoutResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    url = serializers.CharField()
    total = serializers.CharField()
    itemCount = serializers.IntegerField()
