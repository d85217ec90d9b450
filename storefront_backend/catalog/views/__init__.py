from .admin_session import AdminLoginView, AdminLogoutView, AdminSessionView
from .category import CategoryViewSet
from .images import ImageView
from .product import ProductViewSet

__all__ = [
    "AdminLoginView",
    "AdminLogoutView",
    "AdminSessionView",
    "CategoryViewSet",
    "ImageView",
    "ProductViewSet",
]
