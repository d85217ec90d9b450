# catalog/models/product.py

"""
PRODUCT MODEL

Represents a sellable catalog product.

PRICING FIELDS (consumed by cart.services.pricing):
- price: unit price (>= 0)
- is_pack / pack_size / pack_discount: optional pack variant
    - pack_size is required iff is_pack
    - pack_discount is a percentage in [0, 100] (0 is a valid "no discount")
- gluten_free_available / sugar_free_available: independent dietary variants

Validation lives here (write time) so the pricing engine can stay total at
read time.

IMAGES:
- images is an ordered list of public image references produced by
  catalog.services.images (blob storage keys behind /api/images/).
"""

import uuid
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import models

from .category import Category


def _as_decimal(value):
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")

    images = models.JSONField(default=list, blank=True)

    price = models.DecimalField(max_digits=10, decimal_places=2)

    is_pack = models.BooleanField(default=False)

    pack_size = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Units per pack. Required when is_pack is set.",
    )

    pack_discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Percent off the pack's aggregate price (0-100).",
    )

    gluten_free_available = models.BooleanField(default=False)
    sugar_free_available = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="catalog_product_name_idx"),
            models.Index(fields=["category", "created_at"], name="catalog_prod_cat_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="chk_product_price_gte_zero",
            ),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        errors = {}

        self.name = (self.name or "").strip()
        if not self.name:
            errors["name"] = "name cannot be blank"

        price = _as_decimal(self.price)
        if price is None or price < Decimal("0.00"):
            errors["price"] = "price must be non-negative"

        if self.is_pack:
            if not isinstance(self.pack_size, int) or self.pack_size < 1:
                errors["pack_size"] = "pack_size must be at least 1 when is_pack is set"
        else:
            if self.pack_size is not None:
                errors["pack_size"] = "pack_size is only valid when is_pack is set"
            if self.pack_discount is not None:
                errors["pack_discount"] = "pack_discount is only valid when is_pack is set"

        pct = _as_decimal(self.pack_discount)
        if pct is not None:
            if pct < Decimal("0") or pct > Decimal("100"):
                errors["pack_discount"] = "pack_discount must be between 0 and 100"

        if not isinstance(self.images, list) or not all(isinstance(i, str) for i in self.images):
            errors["images"] = "images must be a list of image references"

        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    @property
    def category_name(self):
        return self.category.name if self.category_id else None
