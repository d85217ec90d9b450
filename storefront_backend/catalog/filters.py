# catalog/filters.py

import django_filters
from django.db.models import Q

from catalog.models import Product


class ProductFilter(django_filters.FilterSet):
    """
    Storefront product filters.

    - categoryId=<uuid>       products in one category
    - uncategorized=true      products without a category
    - q=<text>                name / description search
    """

    categoryId = django_filters.UUIDFilter(field_name="category_id")
    uncategorized = django_filters.BooleanFilter(field_name="category", lookup_expr="isnull")
    q = django_filters.CharFilter(method="filter_q")

    class Meta:
        model = Product
        fields = ["categoryId", "uncategorized", "q"]

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(name__icontains=value) | Q(description__icontains=value))
