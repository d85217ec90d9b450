# catalog/views/images.py

"""
IMAGE SERVING

GET /api/images/<key>

- AllowAny (product images are public)
- Long-lived cache headers (keys are never reused)
"""

from __future__ import annotations

from django.http import FileResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from backend.responses import error_response
from catalog.services.images import get_image, guess_content_type

IMAGE_CACHE_CONTROL = "public, max-age=31536000"


class ImageView(APIView):
    permission_classes = [AllowAny]
    serializer_class = None

    @extend_schema(
        responses={
            200: OpenApiResponse(description="Image bytes"),
            404: OpenApiResponse(description="Image not found"),
        },
        description="Serve a stored product image.",
    )
    def get(self, request, key: str):
        fh = get_image(key)
        if fh is None:
            return error_response(
                code="IMAGE_NOT_FOUND",
                message="Image not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        response = FileResponse(fh, content_type=guess_content_type(key))
        response["Cache-Control"] = IMAGE_CACHE_CONTROL
        return response
