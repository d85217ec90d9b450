# catalog/services/exceptions.py

"""
CATALOG SERVICE ERRORS
"""


class CatalogError(Exception):
    """Base exception for catalog service failures."""


class ImageStorageError(CatalogError):
    """Raised when an image cannot be accepted or written to blob storage."""
