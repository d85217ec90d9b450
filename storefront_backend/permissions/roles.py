# permissions/roles.py

"""
ADMIN GATE

The admin panel is protected by a single shared password (ADMIN_PASSWORD).
A successful login stores a flag in the session; catalog write endpoints
require that flag. Django staff users (Django admin site) are also admins.

Read access to the catalog is public.
"""

from __future__ import annotations

from django.conf import settings
from django.utils.crypto import constant_time_compare
from rest_framework.permissions import SAFE_METHODS, BasePermission

ADMIN_SESSION_KEY = "is_catalog_admin"


def admin_login_enabled() -> bool:
    return bool((getattr(settings, "ADMIN_PASSWORD", "") or "").strip())


def check_admin_password(candidate) -> bool:
    expected = (getattr(settings, "ADMIN_PASSWORD", "") or "").strip()
    if not expected:
        return False
    return constant_time_compare(str(candidate or ""), expected)


def grant_admin_session(request) -> None:
    request.session[ADMIN_SESSION_KEY] = True
    request.session.modified = True


def revoke_admin_session(request) -> None:
    if ADMIN_SESSION_KEY in request.session:
        del request.session[ADMIN_SESSION_KEY]
        request.session.modified = True


def has_admin_session(request) -> bool:
    user = getattr(request, "user", None)
    if user is not None and getattr(user, "is_staff", False):
        return True

    session = getattr(request, "session", None)
    if session is None:
        return False
    return bool(session.get(ADMIN_SESSION_KEY, False))


class IsCatalogAdminOrReadOnly(BasePermission):
    """
    Public reads, admin-only writes.
    """

    message = "Admin session required."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return has_admin_session(request)
