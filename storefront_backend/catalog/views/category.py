# catalog/views/category.py

from rest_framework import viewsets

from catalog.models import Category
from catalog.serializers import CategorySerializer
from catalog.throttles import PublicCatalogThrottle
from permissions.roles import IsCatalogAdminOrReadOnly


class CategoryViewSet(viewsets.ModelViewSet):
    """
    Category API

    Policy:
    - Anyone can READ categories (storefront filter bar)
    - Only an admin session can CREATE/UPDATE/DELETE
    - Deleting a category leaves its products uncategorized
    """

    queryset = Category.objects.all().order_by("name")
    serializer_class = CategorySerializer
    permission_classes = [IsCatalogAdminOrReadOnly]
    throttle_classes = [PublicCatalogThrottle]
    pagination_class = None
