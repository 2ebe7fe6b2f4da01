"""Prayer data aggregation: geocode + prayer times + local clock.

Flow for a cache miss:
1. Resolve the city with the geocoding service
2. Pick a calculation method from a locale heuristic on the display name
3. Fetch prayer times for the coordinates
4. Derive the location's current wall-clock time from the provider's UTC offset
5. Cache the combined result under ``<normalized city>:<UTC date>``

Keying on the UTC date makes every entry roll over at UTC midnight even when
the TTL has not elapsed yet.
"""

import logging
from typing import Any

from app.models import (
    NotFoundError,
    PrayerDataResult,
    PrayerServiceError,
    UpstreamError,
)
from app.services.geocoding import GeocodingService
from app.services.prayer_times import DEFAULT_METHOD, DEFAULT_SCHOOL, PrayerTimesService
from app.utils.cache import SingleFlight, TTLCache, normalize_city
from app.utils.clock import DEFAULT_UTC_OFFSET, derive_local_time, utc_date

logger = logging.getLogger(__name__)

INDONESIA_METHOD = 20  # Kementerian Agama Republik Indonesia


def is_indonesian_location(display_name: str) -> bool:
    """Coarse locale heuristic: substring match on the geocoder's display name.

    Not a country-code lookup. "Jakarta, ..., Indonesia" matches; so would any
    place whose display name merely mentions Indonesia.
    """
    return "indonesia" in display_name.lower()


def select_method(is_indonesia: bool) -> int:
    return INDONESIA_METHOD if is_indonesia else DEFAULT_METHOD


def extract_utc_offset(payload: Any) -> str:
    """Read ``data.timezone.utc_offset`` from a provider payload, defaulting to UTC."""
    data = payload.get("data") if isinstance(payload, dict) else None
    timezone = data.get("timezone") if isinstance(data, dict) else None
    offset = timezone.get("utc_offset") if isinstance(timezone, dict) else None
    return offset or DEFAULT_UTC_OFFSET


class PrayerDataAggregator:
    """Builds and caches ``PrayerDataResult`` per city per UTC day.

    All-or-nothing: a failure in any step raises and nothing is cached.
    """

    def __init__(
        self,
        geocoder: GeocodingService,
        prayer_times: PrayerTimesService,
        cache: TTLCache[PrayerDataResult],
        single_flight: SingleFlight[PrayerDataResult] | None = None,
    ) -> None:
        self._geocoder = geocoder
        self._prayer_times = prayer_times
        self._cache = cache
        self._single_flight = single_flight

    def cache_key(self, city_query: str) -> str:
        return f"{normalize_city(city_query)}:{utc_date(self._cache.now())}"

    async def get_prayer_data(self, city_query: str) -> PrayerDataResult:
        key = self.cache_key(city_query)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"[PRAYER-DATA] Cache hit for {key!r}")
            return cached

        if self._single_flight is not None:
            return await self._single_flight.do(key, lambda: self._build_and_store(key, city_query))
        return await self._build_and_store(key, city_query)

    async def _build_and_store(self, key: str, city_query: str) -> PrayerDataResult:
        try:
            result = await self._build(city_query)
        except PrayerServiceError:
            raise
        except Exception as e:
            message = str(e)
            if "city not found" in message.lower():
                raise NotFoundError(message) from e
            logger.exception(f"[PRAYER-DATA] Unexpected error for {city_query!r}")
            raise UpstreamError(message) from e

        self._cache.set(key, result)
        logger.info(f"[PRAYER-DATA] Cached {key!r} (indonesia={result.is_indonesia})")
        return result

    async def _build(self, city_query: str) -> PrayerDataResult:
        geo = await self._geocoder.resolve(city_query)

        is_indonesia = is_indonesian_location(geo.city)
        method = select_method(is_indonesia)
        prayer_times = await self._prayer_times.get_prayer_times(
            geo.lat, geo.lon, method=method, school=DEFAULT_SCHOOL
        )

        utc_offset = extract_utc_offset(prayer_times)
        try:
            current_time = derive_local_time(utc_offset, self._cache.now())
        except ValueError as e:
            raise UpstreamError(f"Invalid timezone offset from prayer times provider: {e}") from e

        return PrayerDataResult(
            city=geo.city,
            lat=geo.lat,
            lon=geo.lon,
            prayer_times=prayer_times,
            is_indonesia=is_indonesia,
            current_time=current_time,
        )
