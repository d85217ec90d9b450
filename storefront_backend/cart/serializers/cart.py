# cart/serializers/cart.py

"""
CART SERIALIZERS

Purpose:
- Render a session Cart in a frontend-friendly shape.
- Money is server-derived (pricing engine) and returned as 2dp strings.
"""

from rest_framework import serializers


def _money_str(value) -> str:
    return f"{value:.2f}"


class CartLineSerializer(serializers.Serializer):
    lineKey = serializers.SerializerMethodField()
    productId = serializers.CharField(source="product.id")
    productName = serializers.CharField(source="product.name")
    isPack = serializers.BooleanField(source="is_pack")
    isGlutenFree = serializers.BooleanField(source="is_gluten_free")
    isSugarFree = serializers.BooleanField(source="is_sugar_free")
    quantity = serializers.IntegerField()
    unitPrice = serializers.SerializerMethodField()
    lineTotal = serializers.SerializerMethodField()

    def _policy(self):
        return self.context["policy"]

    def get_lineKey(self, obj) -> str:
        return obj.key.signature

    def get_unitPrice(self, obj) -> str:
        return _money_str(obj.unit_price(self._policy()))

    def get_lineTotal(self, obj) -> str:
        return _money_str(obj.subtotal(self._policy()))


class CartSerializer(serializers.Serializer):
    """
    Guarantees:
    - items keep cart insertion order
    - total is the cart's recomputed total (never client-supplied)
    """

    items = serializers.SerializerMethodField()
    itemCount = serializers.IntegerField(source="item_count")
    total = serializers.SerializerMethodField()

    def get_items(self, obj) -> list:
        return CartLineSerializer(obj.lines, many=True, context={"policy": obj.policy}).data

    def get_total(self, obj) -> str:
        return _money_str(obj.total)
