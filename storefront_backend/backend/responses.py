# backend/responses.py

"""
API ERROR NORMALIZATION

Domain errors are returned as:
    {"error": {"code": "<CODE>", "message": "<human readable>"}}
"""

from rest_framework.response import Response


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )
