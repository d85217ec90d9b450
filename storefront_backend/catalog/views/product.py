# catalog/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Public storefront browsing (list/retrieve, AllowAny)
- Admin CRUD with image uploads

Uploads:
- create: multipart `images` files are stored and appended in upload order
- update: `existingImages` (JSON list or repeated field) is the list of
  references to keep, new `images` files are appended; references dropped
  from the list are deleted from blob storage
- destroy: every stored image of the product is deleted
"""

from __future__ import annotations

import json
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import serializers, viewsets
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser

from catalog.filters import ProductFilter
from catalog.models import Product
from catalog.serializers import ProductSerializer
from catalog.services.exceptions import ImageStorageError
from catalog.services.images import delete_refs, store_upload
from catalog.throttles import PublicCatalogThrottle
from permissions.roles import IsCatalogAdminOrReadOnly

logger = logging.getLogger(__name__)


def _uploaded_files(request):
    files = getattr(request, "FILES", None)
    if not files:
        return []
    return files.getlist("images")


def _existing_images(request, fallback):
    """
    References to keep on update. Missing field => keep everything.
    """
    data = request.data
    if "existingImages" not in data:
        return list(fallback or [])

    if hasattr(data, "getlist"):
        raw = data.getlist("existingImages")
        if len(raw) == 1 and isinstance(raw[0], str) and raw[0].strip().startswith("["):
            raw = raw[0]
    else:
        raw = data.get("existingImages")

    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else []
        except ValueError:
            raise serializers.ValidationError({"existingImages": "must be a JSON list of image references"})

    if not isinstance(raw, list) or not all(isinstance(r, str) for r in raw):
        raise serializers.ValidationError({"existingImages": "must be a list of image references"})

    allowed = set(fallback or [])
    return [r for r in raw if r in allowed]


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    Public:
    - GET /api/products/?categoryId=<uuid>&uncategorized=true&q=<text>
    - GET /api/products/<id>/

    Admin:
    - POST / PUT / PATCH / DELETE
    """

    queryset = Product.objects.select_related("category").order_by("-created_at")
    serializer_class = ProductSerializer
    permission_classes = [IsCatalogAdminOrReadOnly]
    throttle_classes = [PublicCatalogThrottle]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter
    pagination_class = None

    # -----------------------------
    # Writes
    # -----------------------------
    def _store_uploads(self):
        refs = []
        try:
            for f in _uploaded_files(self.request):
                refs.append(store_upload(f))
        except ImageStorageError as exc:
            delete_refs(refs)
            raise serializers.ValidationError(
                {"error": {"code": "INVALID_IMAGE", "message": str(exc)}}
            )
        return refs

    def _save(self, serializer, **kwargs):
        try:
            return serializer.save(**kwargs)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(
                getattr(exc, "message_dict", None) or {"detail": exc.messages}
            )

    def perform_create(self, serializer):
        refs = self._store_uploads()
        try:
            product = self._save(serializer, images=refs)
        except Exception:
            delete_refs(refs)
            raise
        logger.info("Product created", extra={"product_id": str(product.id), "images": len(refs)})

    def perform_update(self, serializer):
        instance = serializer.instance
        previous = list(instance.images or [])
        kept = _existing_images(self.request, previous)

        refs = self._store_uploads()
        try:
            product = self._save(serializer, images=kept + refs)
        except Exception:
            delete_refs(refs)
            raise

        dropped = [r for r in previous if r not in set(product.images)]
        if dropped:
            delete_refs(dropped)

        logger.info(
            "Product updated",
            extra={"product_id": str(product.id), "images_added": len(refs), "images_dropped": len(dropped)},
        )

    def perform_destroy(self, instance):
        refs = list(instance.images or [])
        product_id = str(instance.id)
        instance.delete()
        removed = delete_refs(refs)
        logger.info("Product deleted", extra={"product_id": product_id, "images_removed": removed})

