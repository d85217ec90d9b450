# catalog/tests/test_images.py

"""
PRODUCT IMAGE TESTS

Blob storage is redirected to a temporary MEDIA_ROOT per test class.
"""

from __future__ import annotations

import json
import shutil
import tempfile
from decimal import Decimal

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from catalog.models import Product
from catalog.services.exceptions import ImageStorageError
from catalog.services.images import delete_refs, get_image, key_from_ref, put_image, ref_for_key

ADMIN_PASSWORD = "correct-horse"
PNG_BYTES = b"\x89PNG\r\n\x1a\n fake image body"


def _png(name="photo.png"):
    return SimpleUploadedFile(name, PNG_BYTES, content_type="image/png")


class TempMediaMixin:
    @classmethod
    def setUpClass(cls):
        cls._media_root = tempfile.mkdtemp()
        cls._media_override = override_settings(MEDIA_ROOT=cls._media_root)
        cls._media_override.enable()
        super().setUpClass()

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        cls._media_override.disable()
        shutil.rmtree(cls._media_root, ignore_errors=True)


class ImageStorageTests(TempMediaMixin, TestCase):
    def test_put_get_delete(self):
        key = put_image("products/a.png", PNG_BYTES, "image/png")

        fh = get_image(key)
        self.assertIsNotNone(fh)
        with fh:
            self.assertEqual(fh.read(), PNG_BYTES)

        self.assertEqual(delete_refs([ref_for_key(key)]), 1)
        self.assertIsNone(get_image(key))
        self.assertEqual(delete_refs([ref_for_key(key)]), 0)

    def test_non_image_content_type_is_rejected(self):
        with self.assertRaises(ImageStorageError):
            put_image("products/notes.txt", b"hello", "text/plain")

    def test_path_traversal_keys_are_rejected(self):
        with self.assertRaises(ImageStorageError):
            put_image("../escape.png", PNG_BYTES, "image/png")
        self.assertIsNone(get_image("../../etc/passwd"))


@override_settings(ADMIN_PASSWORD=ADMIN_PASSWORD)
class ProductImageAPITests(TempMediaMixin, TestCase):
    def setUp(self):
        self.admin = APIClient()
        res = self.admin.post(reverse("catalog:admin-login"), {"password": ADMIN_PASSWORD}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)

    def _create_with_images(self, *files):
        return self.admin.post(
            reverse("catalog:products-list"),
            {"name": "Torta", "price": "25.00", "images": list(files)},
            format="multipart",
        )

    def test_create_with_uploads_and_serve(self):
        res = self._create_with_images(_png("a.png"), _png("b.png"))

        self.assertEqual(res.status_code, status.HTTP_201_CREATED, res.data)
        self.assertEqual(len(res.data["images"]), 2)

        ref = res.data["images"][0]
        self.assertTrue(ref.startswith("/api/images/products/"))
        self.assertTrue(default_storage.exists(key_from_ref(ref)))

        served = APIClient().get(ref)
        self.assertEqual(served.status_code, status.HTTP_200_OK)
        self.assertEqual(served["Content-Type"], "image/png")
        self.assertIn("max-age=31536000", served["Cache-Control"])
        self.assertEqual(b"".join(served.streaming_content), PNG_BYTES)

    def test_missing_image_is_404(self):
        res = APIClient().get(reverse("catalog:image", args=["products/missing.png"]))

        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(res.data["error"]["code"], "IMAGE_NOT_FOUND")

    def test_rejects_non_image_upload(self):
        bad = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        res = self._create_with_images(bad)

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "INVALID_IMAGE")
        self.assertFalse(Product.objects.exists())

    def test_update_keeps_listed_images_appends_new_and_deletes_dropped(self):
        created = self._create_with_images(_png("a.png"), _png("b.png")).data
        keep, drop = created["images"]

        res = self.admin.patch(
            reverse("catalog:products-detail", args=[created["id"]]),
            {"existingImages": json.dumps([keep]), "images": [_png("c.png")]},
            format="multipart",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertEqual(len(res.data["images"]), 2)
        self.assertEqual(res.data["images"][0], keep)
        self.assertTrue(default_storage.exists(key_from_ref(keep)))
        self.assertFalse(default_storage.exists(key_from_ref(drop)))

    def test_existing_images_cannot_adopt_foreign_refs(self):
        product = Product.objects.create(name="Pan", price=Decimal("1.00"))

        res = self.admin.patch(
            reverse("catalog:products-detail", args=[product.id]),
            {"existingImages": ["/api/images/products/someone-else.png"]},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK, res.data)
        self.assertEqual(res.data["images"], [])

    def test_delete_product_removes_its_images(self):
        created = self._create_with_images(_png("a.png")).data
        key = key_from_ref(created["images"][0])

        res = self.admin.delete(reverse("catalog:products-detail", args=[created["id"]]))

        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(default_storage.exists(key))
