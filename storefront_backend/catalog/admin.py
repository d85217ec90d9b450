# catalog/admin.py
"""
Admin rules:

- Category and Product are plain CRUD for staff users.
- Product validation runs through Product.clean() (pack fields, price).
- Images are managed through the catalog API (uploads + blob cleanup);
  the admin shows them read-only.
"""

from __future__ import annotations

from django.contrib import admin

from catalog.models import Category, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "price",
        "is_pack",
        "pack_size",
        "pack_discount",
        "gluten_free_available",
        "sugar_free_available",
        "created_at",
    )
    list_filter = ("is_pack", "gluten_free_available", "sugar_free_available", "category")
    search_fields = ("name", "description")
    ordering = ("-created_at",)
    readonly_fields = ("images", "created_at", "updated_at")
