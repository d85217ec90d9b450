# catalog/views/admin_session.py

"""
ADMIN SESSION API

- POST /api/admin/login/    {"password": "..."}  -> sets the admin session flag
- POST /api/admin/logout/                          -> clears it
- GET  /api/admin/session/                         -> {"isAdmin": bool}

Security hardening:
- constant-time password comparison
- throttled login (scope: admin_login)
- empty ADMIN_PASSWORD disables login entirely
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from backend.responses import error_response
from permissions.roles import (
    admin_login_enabled,
    check_admin_password,
    grant_admin_session,
    has_admin_session,
    revoke_admin_session,
)

logger = logging.getLogger(__name__)


class AdminLoginThrottle(AnonRateThrottle):
    scope = "admin_login"


class AdminLoginInputSerializer(serializers.Serializer):
    password = serializers.CharField(allow_blank=False, trim_whitespace=False)


class AdminSessionSerializer(serializers.Serializer):
    isAdmin = serializers.BooleanField()


class AdminLoginView(APIView):
    permission_classes = [AllowAny]
    throttle_classes = [AdminLoginThrottle]

    @extend_schema(request=AdminLoginInputSerializer, responses={200: AdminSessionSerializer})
    def post(self, request):
        if not admin_login_enabled():
            return error_response(
                code="ADMIN_LOGIN_DISABLED",
                message="Admin login is not configured.",
                http_status=status.HTTP_403_FORBIDDEN,
            )

        serializer = AdminLoginInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if not check_admin_password(serializer.validated_data["password"]):
            logger.warning("Rejected admin login attempt")
            return error_response(
                code="INVALID_PASSWORD",
                message="Invalid password.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        grant_admin_session(request)
        logger.info("Admin session granted")
        return Response({"isAdmin": True}, status=status.HTTP_200_OK)


class AdminLogoutView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=None, responses={200: AdminSessionSerializer})
    def post(self, request):
        revoke_admin_session(request)
        return Response({"isAdmin": False}, status=status.HTTP_200_OK)


class AdminSessionView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(responses={200: AdminSessionSerializer})
    def get(self, request):
        return Response({"isAdmin": has_admin_session(request)}, status=status.HTTP_200_OK)
