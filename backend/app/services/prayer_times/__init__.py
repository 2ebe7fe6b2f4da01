"""Prayer times provider client (IslamicAPI)."""

from .service import (
    DEFAULT_METHOD,
    DEFAULT_SCHOOL,
    IslamicApiPrayerTimesService,
    PrayerTimesService,
)

__all__ = [
    "DEFAULT_METHOD",
    "DEFAULT_SCHOOL",
    "IslamicApiPrayerTimesService",
    "PrayerTimesService",
]
