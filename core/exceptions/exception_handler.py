"""
Global exception handler for the QuorumCal platform.

This module provides a custom exception handler for DRF that handles
custom exceptions and provides consistent error responses.
"""

import logging
from typing import Any, Dict

from django.core.exceptions import ObjectDoesNotExist
from django.db.utils import DatabaseError
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .custom_exceptions import QuorumCalError

logger = logging.getLogger(__name__)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Custom exception handler for DRF views.

    QuorumCal exceptions are rendered with their own status code and
    ``to_dict()`` payload; everything else goes through DRF's handler and gets
    the status code added to the payload.

    Args:
        exc: The exception
        context: The exception context

    Returns:
        Response: Consistent error response, or None for unhandled exceptions
    """
    view = context.get("view")

    if isinstance(exc, QuorumCalError):
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Server error in %s: %s", view.__class__.__name__, exc, exc_info=exc)
        else:
            logger.warning("%s in %s: %s", exc.error_code, view.__class__.__name__, exc)
        return Response(exc.to_dict(), status=exc.status_code)

    if isinstance(exc, ObjectDoesNotExist):
        return Response(
            {
                "message": str(_("The requested resource was not found.")),
                "status_code": status.HTTP_404_NOT_FOUND,
                "code": "not_found",
            },
            status=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(exc, DatabaseError):
        logger.error("Database error in %s", view.__class__.__name__, exc_info=exc)
        return Response(
            {
                "message": str(_("A database error occurred. Please try again later.")),
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "code": "database_error",
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    response = drf_exception_handler(exc, context)

    if response is not None and isinstance(response.data, dict):
        response.data["status_code"] = response.status_code

    return response
