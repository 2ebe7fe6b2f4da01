"""Error taxonomy and wire models for API failures.

Every failure from an upstream call is classified exactly once into
``NotFoundError`` (the geocoder had no match) or ``UpstreamError``
(everything else) before it reaches the HTTP layer.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Machine-readable error codes returned to API clients."""

    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class ErrorResponse(BaseModel):
    """Error body for ``/api/prayer-data`` failures."""

    error: ErrorCode
    message: str = Field(..., description="Human-readable description")


class PrayerServiceError(Exception):
    """Base exception with an error code and HTTP status."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(PrayerServiceError):
    """The geocoding provider returned zero matches for the queried city."""

    code = ErrorCode.NOT_FOUND
    status_code = 404


class UpstreamError(PrayerServiceError):
    """Upstream HTTP failure, malformed payload or misconfiguration."""

    code = ErrorCode.INTERNAL_ERROR
    status_code = 500
