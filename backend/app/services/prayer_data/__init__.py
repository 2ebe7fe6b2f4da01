"""Prayer data aggregation (geocode + prayer times + local clock)."""

from .service import (
    INDONESIA_METHOD,
    PrayerDataAggregator,
    extract_utc_offset,
    is_indonesian_location,
    select_method,
)

__all__ = [
    "INDONESIA_METHOD",
    "PrayerDataAggregator",
    "extract_utc_offset",
    "is_indonesian_location",
    "select_method",
]
