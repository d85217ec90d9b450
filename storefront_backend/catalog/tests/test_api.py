# catalog/tests/test_api.py

"""
CATALOG API TESTS

Run with:
    python manage.py test catalog -v 2

Covers:
- admin gate (login / logout / session)
- public reads, admin-only writes
- product write validation (pack fields, dietary flags)
- storefront filters
"""

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from catalog.models import Category, Product

User = get_user_model()

ADMIN_PASSWORD = "correct-horse"


@override_settings(ADMIN_PASSWORD=ADMIN_PASSWORD)
class AdminSessionAPITests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_login_logout_cycle(self):
        self.assertFalse(self.client.get(reverse("catalog:admin-session")).data["isAdmin"])

        res = self.client.post(reverse("catalog:admin-login"), {"password": ADMIN_PASSWORD}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["isAdmin"])
        self.assertTrue(self.client.get(reverse("catalog:admin-session")).data["isAdmin"])

        self.client.post(reverse("catalog:admin-logout"))
        self.assertFalse(self.client.get(reverse("catalog:admin-session")).data["isAdmin"])

    def test_wrong_password(self):
        res = self.client.post(reverse("catalog:admin-login"), {"password": "nope"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "INVALID_PASSWORD")
        self.assertFalse(self.client.get(reverse("catalog:admin-session")).data["isAdmin"])

    @override_settings(ADMIN_PASSWORD="")
    def test_login_disabled_without_configured_password(self):
        res = self.client.post(reverse("catalog:admin-login"), {"password": "anything"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(res.data["error"]["code"], "ADMIN_LOGIN_DISABLED")

    def test_django_staff_user_is_admin(self):
        staff = User.objects.create_user(username="staff", password="pw-12345", is_staff=True)
        self.client.force_login(staff)

        self.assertTrue(self.client.get(reverse("catalog:admin-session")).data["isAdmin"])


@override_settings(ADMIN_PASSWORD=ADMIN_PASSWORD)
class CatalogAPITestCase(TestCase):
    def setUp(self):
        self.public = APIClient()
        self.admin = APIClient()
        res = self.admin.post(reverse("catalog:admin-login"), {"password": ADMIN_PASSWORD}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)

        self.bakery = Category.objects.create(name="Panadería")
        self.sweets = Category.objects.create(name="Dulces")

        self.bread = Product.objects.create(name="Pan de campo", price=Decimal("4.00"), category=self.bakery)
        self.alfajor = Product.objects.create(
            name="Alfajor",
            description="dulce de leche",
            price=Decimal("3.00"),
            category=self.sweets,
            is_pack=True,
            pack_size=6,
            pack_discount=Decimal("10"),
        )
        self.loose = Product.objects.create(name="Galletita suelta", price=Decimal("0.50"))


class CategoryAPITests(CatalogAPITestCase):
    def test_public_can_list_categories(self):
        res = self.public.get(reverse("catalog:categories-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([c["name"] for c in res.data], ["Dulces", "Panadería"])

    def test_public_cannot_create_category(self):
        res = self.public.post(reverse("catalog:categories-list"), {"name": "Nueva"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_category_crud(self):
        res = self.admin.post(
            reverse("catalog:categories-list"),
            {"name": "  Tortas ", "description": "por encargo"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(res.data["name"], "Tortas")

        url = reverse("catalog:categories-detail", args=[res.data["id"]])
        res = self.admin.patch(url, {"name": "Tortas y postres"}, format="json")
        self.assertEqual(res.data["name"], "Tortas y postres")

        res = self.admin.delete(url)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)

    def test_blank_category_name_rejected(self):
        res = self.admin.post(reverse("catalog:categories-list"), {"name": "   "}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_deleting_category_keeps_products(self):
        self.admin.delete(reverse("catalog:categories-detail", args=[self.bakery.id]))

        res = self.public.get(reverse("catalog:products-detail", args=[self.bread.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["categoryId"])
        self.assertIsNone(res.data["categoryName"])


class ProductReadAPITests(CatalogAPITestCase):
    def test_list_shape(self):
        res = self.public.get(reverse("catalog:products-list"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 3)

        alfajor = next(p for p in res.data if p["name"] == "Alfajor")
        self.assertEqual(alfajor["categoryId"], self.sweets.id)
        self.assertEqual(alfajor["categoryName"], "Dulces")
        self.assertTrue(alfajor["isPack"])
        self.assertEqual(alfajor["packSize"], 6)
        self.assertEqual(alfajor["price"], "3.00")
        self.assertEqual(alfajor["images"], [])

    def test_filter_by_category(self):
        res = self.public.get(reverse("catalog:products-list"), {"categoryId": str(self.bakery.id)})
        self.assertEqual([p["name"] for p in res.data], ["Pan de campo"])

    def test_filter_uncategorized(self):
        res = self.public.get(reverse("catalog:products-list"), {"uncategorized": "true"})
        self.assertEqual([p["name"] for p in res.data], ["Galletita suelta"])

    def test_search(self):
        res = self.public.get(reverse("catalog:products-list"), {"q": "LECHE"})
        self.assertEqual([p["name"] for p in res.data], ["Alfajor"])


class ProductWriteAPITests(CatalogAPITestCase):
    def test_public_cannot_write(self):
        res = self.public.post(reverse("catalog:products-list"), {"name": "X", "price": "1.00"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

        res = self.public.delete(reverse("catalog:products-detail", args=[self.bread.id]))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Product.objects.filter(id=self.bread.id).exists())

    def test_admin_creates_pack_product(self):
        res = self.admin.post(
            reverse("catalog:products-list"),
            {
                "name": "Brownie",
                "price": "10.00",
                "categoryId": str(self.sweets.id),
                "isPack": True,
                "packSize": 6,
                "packDiscount": "10",
                "glutenFreeAvailable": True,
            },
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        product = Product.objects.get(id=res.data["id"])
        self.assertEqual(product.pack_size, 6)
        self.assertEqual(product.pack_discount, Decimal("10.00"))
        self.assertTrue(product.gluten_free_available)
        self.assertFalse(product.sugar_free_available)

    def test_pack_without_size_is_rejected(self):
        res = self.admin.post(
            reverse("catalog:products-list"),
            {"name": "Caja", "price": "5.00", "isPack": True},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("packSize", res.data)

    def test_discount_without_pack_is_rejected(self):
        res = self.admin.post(
            reverse("catalog:products-list"),
            {"name": "Caja", "price": "5.00", "packDiscount": "5"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("packDiscount", res.data)

    def test_discount_out_of_range_is_rejected(self):
        res = self.admin.post(
            reverse("catalog:products-list"),
            {"name": "Caja", "price": "5.00", "isPack": True, "packSize": 2, "packDiscount": "120"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_negative_price_is_rejected(self):
        res = self.admin.post(
            reverse("catalog:products-list"),
            {"name": "Caja", "price": "-1.00"},
            format="json",
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price", res.data)

    def test_turning_pack_off_clears_pack_fields(self):
        res = self.admin.patch(
            reverse("catalog:products-detail", args=[self.alfajor.id]),
            {"isPack": False},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.alfajor.refresh_from_db()
        self.assertFalse(self.alfajor.is_pack)
        self.assertIsNone(self.alfajor.pack_size)
        self.assertIsNone(self.alfajor.pack_discount)

    def test_sugar_free_update_leaves_gluten_free_alone(self):
        self.bread.gluten_free_available = True
        self.bread.save()

        res = self.admin.patch(
            reverse("catalog:products-detail", args=[self.bread.id]),
            {"sugarFreeAvailable": True},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertTrue(res.data["glutenFreeAvailable"])
        self.assertTrue(res.data["sugarFreeAvailable"])

    def test_admin_deletes_product(self):
        res = self.admin.delete(reverse("catalog:products-detail", args=[self.loose.id]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Product.objects.filter(id=self.loose.id).exists())
