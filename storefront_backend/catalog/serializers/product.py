# catalog/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product serializer for both the admin panel and the storefront.
- Field names follow the storefront record shape (categoryId, isPack, ...).

Write-time validation (pricing stays total at read time):
- price >= 0
- isPack => packSize >= 1
- packSize / packDiscount without isPack are rejected
- packDiscount in [0, 100]
- glutenFreeAvailable and sugarFreeAvailable are independent flags

Images are read-only here; the viewset uploads files and passes the resulting
references to save().
"""

from decimal import Decimal

from rest_framework import serializers

from catalog.models import Category, Product


class ProductSerializer(serializers.ModelSerializer):
    categoryId = serializers.PrimaryKeyRelatedField(
        source="category",
        queryset=Category.objects.all(),
        required=False,
        allow_null=True,
    )
    categoryName = serializers.CharField(source="category_name", read_only=True)

    description = serializers.CharField(required=False, allow_blank=True, default="")
    images = serializers.ListField(child=serializers.CharField(), read_only=True)

    price = serializers.DecimalField(max_digits=10, decimal_places=2)

    isPack = serializers.BooleanField(source="is_pack", required=False, default=False)
    packSize = serializers.IntegerField(
        source="pack_size", required=False, allow_null=True, min_value=1
    )
    packDiscount = serializers.DecimalField(
        source="pack_discount",
        max_digits=5,
        decimal_places=2,
        required=False,
        allow_null=True,
    )

    glutenFreeAvailable = serializers.BooleanField(
        source="gluten_free_available", required=False, default=False
    )
    sugarFreeAvailable = serializers.BooleanField(
        source="sugar_free_available", required=False, default=False
    )

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "images",
            "price",
            "categoryId",
            "categoryName",
            "isPack",
            "packSize",
            "packDiscount",
            "glutenFreeAvailable",
            "sugarFreeAvailable",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = [
            "id",
            "images",
            "categoryName",
            "createdAt",
            "updatedAt",
        ]

    def validate_name(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v

    def validate_price(self, value):
        if value is None or value < Decimal("0.00"):
            raise serializers.ValidationError("price must be non-negative")
        return value

    def validate_packDiscount(self, value):
        if value is None:
            return value
        if value < Decimal("0") or value > Decimal("100"):
            raise serializers.ValidationError("packDiscount must be between 0 and 100")
        return value

    def _current(self, attrs, field, default=None):
        if field in attrs:
            return attrs[field]
        if self.instance is not None:
            return getattr(self.instance, field, default)
        return default

    def validate(self, attrs):
        is_pack = bool(self._current(attrs, "is_pack", False))
        pack_size = self._current(attrs, "pack_size")
        pack_discount = self._current(attrs, "pack_discount")

        errors = {}
        if is_pack:
            if pack_size is None:
                errors["packSize"] = "packSize is required when isPack is set"
        else:
            # Turning the pack off drops pack fields the client did not resend.
            if self.instance is not None and "is_pack" in attrs:
                if "pack_size" not in attrs:
                    attrs["pack_size"] = None
                    pack_size = None
                if "pack_discount" not in attrs:
                    attrs["pack_discount"] = None
                    pack_discount = None

            if pack_size is not None:
                errors["packSize"] = "packSize is only valid when isPack is set"
            if pack_discount is not None:
                errors["packDiscount"] = "packDiscount is only valid when isPack is set"

        if errors:
            raise serializers.ValidationError(errors)
        return attrs
