# catalog/tests/test_models.py

"""
CATALOG MODEL TESTS

GUARANTEES:
- Pack fields are validated at write time (pricing can stay total at read time)
- Dietary flags are independent
- Deleting a category leaves its products uncategorized
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from catalog.models import Category, Product


class ProductModelTests(TestCase):
    def test_plain_product(self):
        product = Product.objects.create(name="  Medialuna  ", price=Decimal("1.20"))

        self.assertEqual(product.name, "Medialuna")
        self.assertEqual(product.images, [])
        self.assertIsNone(product.category_name)

    def test_pack_requires_pack_size(self):
        with self.assertRaises(ValidationError) as ctx:
            Product.objects.create(name="Box", price=Decimal("2.00"), is_pack=True)
        self.assertIn("pack_size", ctx.exception.message_dict)

    def test_pack_fields_without_pack_are_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            Product.objects.create(
                name="Box",
                price=Decimal("2.00"),
                pack_size=6,
                pack_discount=Decimal("10"),
            )
        self.assertIn("pack_size", ctx.exception.message_dict)
        self.assertIn("pack_discount", ctx.exception.message_dict)

    def test_discount_range(self):
        with self.assertRaises(ValidationError):
            Product.objects.create(
                name="Box",
                price=Decimal("2.00"),
                is_pack=True,
                pack_size=6,
                pack_discount=Decimal("101"),
            )

    def test_negative_price_is_rejected(self):
        with self.assertRaises(ValidationError):
            Product.objects.create(name="Oops", price=Decimal("-1.00"))

    def test_dietary_flags_are_independent(self):
        product = Product.objects.create(
            name="Budín",
            price=Decimal("8.00"),
            gluten_free_available=True,
            sugar_free_available=False,
        )
        product.sugar_free_available = True
        product.gluten_free_available = False
        product.save()
        product.refresh_from_db()

        self.assertFalse(product.gluten_free_available)
        self.assertTrue(product.sugar_free_available)


class CategoryModelTests(TestCase):
    def test_blank_name_is_rejected(self):
        with self.assertRaises(ValidationError):
            Category.objects.create(name="   ")

    def test_delete_category_uncategorizes_products(self):
        category = Category.objects.create(name="Panadería")
        product = Product.objects.create(name="Pan", price=Decimal("1.00"), category=category)
        self.assertEqual(product.category_name, "Panadería")

        category.delete()
        product.refresh_from_db()

        self.assertIsNone(product.category_id)
        self.assertTrue(Product.objects.filter(id=product.id).exists())
