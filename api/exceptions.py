import logging

from django.db import DatabaseError, IntegrityError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

WRITE_FAILED = "Could not save changes, please try again"
READ_FAILED = "Error loading data, please try again"


def api_exception_handler(exc, context):
    """
    DRF's handler first, then database errors mapped to a generic detail.
    Anything else propagates.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DatabaseError):
        request = context.get("request")
        method = getattr(request, "method", "GET")
        logger.exception("database error on %s %s", method, getattr(request, "path", ""))
        if isinstance(exc, IntegrityError):
            return Response({"detail": WRITE_FAILED}, status=status.HTTP_400_BAD_REQUEST)
        detail = READ_FAILED if method in ("GET", "HEAD", "OPTIONS") else WRITE_FAILED
        return Response({"detail": detail}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return None
