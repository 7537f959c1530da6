"""
Custom exceptions for the QuorumCal platform.

This module defines a hierarchy of custom exceptions used across the platform
to provide consistent error handling and reporting.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import status


class QuorumCalError(Exception):
    """Base exception for all QuorumCal errors that map to an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = _("An unexpected error occurred.")

    def __init__(self, message=None, status_code=None, errors=None):
        self.message = message or self.default_message
        if status_code:
            self.status_code = status_code
        self.errors = errors
        super().__init__(self.message)

    @property
    def error_code(self):
        return self.__class__.__name__

    def to_dict(self):
        """Convert exception to dictionary representation."""
        error_dict = {
            "message": str(self.message),
            "status_code": self.status_code,
            "code": self.error_code,
        }

        if self.errors:
            error_dict["errors"] = self.errors

        return error_dict


class InvalidDataException(QuorumCalError):
    """Exception raised when request data is invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = _("Invalid data provided.")


class ResourceNotFoundException(QuorumCalError):
    """Exception raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = _("The requested resource was not found.")


class CalendarNotFoundError(ResourceNotFoundException):
    """No calendar matches the given token. Terminal, never retried."""

    default_message = _("Calendar not found")


class QuotaExceededError(QuorumCalError):
    """
    The calendar owner has more calendars than their entitlement allows.

    Resolved by deleting calendars or upgrading, not by retrying.
    """

    status_code = status.HTTP_403_FORBIDDEN
    default_message = _(
        "Calendar owner has exceeded their quota. "
        "Please delete calendars or upgrade to access this feed."
    )


class UpstreamReadError(QuorumCalError):
    """The data store failed while reading calendar or availability rows."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = _("Failed to read calendar data.")
