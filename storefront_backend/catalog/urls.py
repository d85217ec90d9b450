# catalog/urls.py

"""
CATALOG URLS

Mounted at /api/ :
- categories/            (router)
- products/              (router)
- images/<key>           (blob serving)
- admin/login|logout|session/
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from catalog.views import (
    AdminLoginView,
    AdminLogoutView,
    AdminSessionView,
    CategoryViewSet,
    ImageView,
    ProductViewSet,
)

app_name = "catalog"

router = DefaultRouter()

router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"products", ProductViewSet, basename="products")

urlpatterns = [
    path("", include(router.urls)),
    path("images/<path:key>", ImageView.as_view(), name="image"),
    path("admin/login/", AdminLoginView.as_view(), name="admin-login"),
    path("admin/logout/", AdminLogoutView.as_view(), name="admin-logout"),
    path("admin/session/", AdminSessionView.as_view(), name="admin-session"),
]
