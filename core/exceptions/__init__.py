"""
QuorumCal centralised custom exceptions.

Import these from `core.exceptions` across the project instead of redefining
ad-hoc `Exception` subclasses in each app.
"""

from __future__ import annotations

from .custom_exceptions import (
    CalendarNotFoundError,
    InvalidDataException,
    QuorumCalError,
    QuotaExceededError,
    ResourceNotFoundException,
    UpstreamReadError,
)

__all__ = [
    "QuorumCalError",
    "InvalidDataException",
    "ResourceNotFoundException",
    "CalendarNotFoundError",
    "QuotaExceededError",
    "UpstreamReadError",
]
