# catalog/throttles.py

from rest_framework.permissions import SAFE_METHODS
from rest_framework.throttling import AnonRateThrottle


class PublicCatalogThrottle(AnonRateThrottle):
    """
    Rate limit for public storefront reads. Admin writes are not counted.
    """

    scope = "public_catalog"

    def allow_request(self, request, view):
        if request.method not in SAFE_METHODS:
            return True
        return super().allow_request(request, view)
