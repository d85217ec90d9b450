# catalog/services/images.py

"""
PRODUCT IMAGE STORAGE (BLOB STORE)

Purpose:
- put/get/delete opaque image blobs behind Django's default storage
  (filesystem locally, any django storage backend in production).
- Convert between storage keys and the public references kept in
  Product.images.

Keys:
- products/<hex>.<ext>   (opaque to the rest of the system)
- public reference: /api/images/<key>
"""

from __future__ import annotations

import logging
import mimetypes
import os
import uuid

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from .exceptions import ImageStorageError

logger = logging.getLogger(__name__)

IMAGE_URL_PREFIX = "/api/images/"
IMAGE_KEY_PREFIX = "products/"
DEFAULT_EXTENSION = "jpg"
DEFAULT_CONTENT_TYPE = "image/jpeg"


def ref_for_key(key: str) -> str:
    return f"{IMAGE_URL_PREFIX}{key}"


def key_from_ref(ref: str) -> str:
    ref = (ref or "").strip()
    if ref.startswith(IMAGE_URL_PREFIX):
        return ref[len(IMAGE_URL_PREFIX):]
    return ref


def _validate_key(key: str) -> str:
    key = (key or "").strip().lstrip("/")
    if not key or ".." in key.split("/"):
        raise ImageStorageError("Invalid image key")
    return key


def guess_content_type(key: str) -> str:
    content_type, _ = mimetypes.guess_type(key)
    return content_type or DEFAULT_CONTENT_TYPE


def put_image(key: str, content, content_type: str | None = None) -> str:
    """
    Store bytes (or a file object) under `key`. Returns the stored key.
    """
    key = _validate_key(key)
    ct = (content_type or "").strip().lower()
    if ct and not ct.startswith("image/"):
        raise ImageStorageError(f"Unsupported content type: {content_type}")

    if isinstance(content, (bytes, bytearray)):
        content = ContentFile(bytes(content))

    if default_storage.exists(key):
        default_storage.delete(key)

    stored = default_storage.save(key, content)
    logger.info("Image stored", extra={"key": stored, "content_type": ct or None})
    return stored


def get_image(key: str):
    """
    Open a stored image for reading, or None if it does not exist.
    """
    try:
        key = _validate_key(key)
    except ImageStorageError:
        return None

    if not default_storage.exists(key):
        return None
    return default_storage.open(key, "rb")


def delete_image(key: str) -> bool:
    try:
        key = _validate_key(key)
    except ImageStorageError:
        return False

    if not default_storage.exists(key):
        return False

    default_storage.delete(key)
    logger.info("Image deleted", extra={"key": key})
    return True


def store_upload(uploaded_file) -> str:
    """
    Store an uploaded image under a fresh key and return its public reference.
    """
    name = getattr(uploaded_file, "name", "") or ""
    ext = os.path.splitext(name)[1].lstrip(".").lower() or DEFAULT_EXTENSION
    content_type = getattr(uploaded_file, "content_type", None) or DEFAULT_CONTENT_TYPE

    key = f"{IMAGE_KEY_PREFIX}{uuid.uuid4().hex}.{ext}"
    stored = put_image(key, uploaded_file, content_type)
    return ref_for_key(stored)


def delete_refs(refs) -> int:
    """
    Delete the blobs behind a list of public references. Returns the number removed.
    """
    removed = 0
    for ref in refs or []:
        if delete_image(key_from_ref(ref)):
            removed += 1
    return removed
