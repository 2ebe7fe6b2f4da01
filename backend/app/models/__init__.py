"""Data models and error types."""

from .core import CacheEntry, CurrentTime, GeocodeResult, PrayerDataResult
from .errors import (
    ErrorCode,
    ErrorResponse,
    NotFoundError,
    PrayerServiceError,
    UpstreamError,
)

__all__ = [
    "CacheEntry",
    "CurrentTime",
    "GeocodeResult",
    "PrayerDataResult",
    "ErrorCode",
    "ErrorResponse",
    "NotFoundError",
    "PrayerServiceError",
    "UpstreamError",
]
