"""Prayer Times Services.

Service layer components:
- Geocoding: OpenStreetMap Nominatim city lookup with a per-city TTL cache
- Prayer Times: IslamicAPI client for daily prayer schedules
- Prayer Data: aggregation of both plus the location's local clock,
  cached per city per UTC day
"""

from .geocoding import GeocodeResolver, GeocodingService, NominatimGeocodingService
from .prayer_times import IslamicApiPrayerTimesService, PrayerTimesService
from .prayer_data import PrayerDataAggregator
from .container import ServiceContainer, create_services

__all__ = [
    # Geocoding
    "GeocodeResolver",
    "GeocodingService",
    "NominatimGeocodingService",
    # Prayer times
    "IslamicApiPrayerTimesService",
    "PrayerTimesService",
    # Aggregation
    "PrayerDataAggregator",
    # Wiring
    "ServiceContainer",
    "create_services",
]
