"""Service wiring.

Builds the caches and services once per process from ``Settings``. The
caches belong to this container, not to module globals, so tests can build
an isolated set with a fake clock and mocked transports.
"""

import logging
from dataclasses import dataclass

import httpx

from app.config import Settings
from app.models import GeocodeResult, PrayerDataResult
from app.services.geocoding import GeocodingService, NominatimGeocodingService
from app.services.prayer_data import PrayerDataAggregator
from app.services.prayer_times import IslamicApiPrayerTimesService, PrayerTimesService
from app.utils.cache import Clock, SingleFlight, TTLCache, system_clock_ms

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    geocoder: GeocodingService
    prayer_times: PrayerTimesService
    prayer_data: PrayerDataAggregator
    geocode_cache: TTLCache[GeocodeResult]
    prayer_cache: TTLCache[PrayerDataResult]

    async def close(self) -> None:
        await self.geocoder.close()
        await self.prayer_times.close()


def create_services(
    settings: Settings,
    clock: Clock = system_clock_ms,
    geocode_transport: httpx.AsyncBaseTransport | None = None,
    prayer_transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceContainer:
    """Create the geocoder, prayer-time client and aggregator with their caches."""
    geocode_cache: TTLCache[GeocodeResult] = TTLCache(
        settings.geocode_cache_ttl_ms, clock=clock, name="geocode"
    )
    prayer_cache: TTLCache[PrayerDataResult] = TTLCache(
        settings.prayer_cache_ttl_ms, clock=clock, name="prayer-data"
    )

    geocoder = NominatimGeocodingService(
        cache=geocode_cache,
        user_agent=settings.user_agent,
        base_url=settings.nominatim_url,
        timeout=settings.http_timeout,
        transport=geocode_transport,
        single_flight=SingleFlight() if settings.single_flight else None,
    )
    prayer_times = IslamicApiPrayerTimesService(
        api_key=settings.islamic_api_key,
        base_url=settings.islamic_api_url,
        timeout=settings.http_timeout,
        transport=prayer_transport,
    )
    prayer_data = PrayerDataAggregator(
        geocoder=geocoder,
        prayer_times=prayer_times,
        cache=prayer_cache,
        single_flight=SingleFlight() if settings.single_flight else None,
    )

    logger.info(
        f"[SERVICES] geocode TTL={settings.geocode_cache_ttl_ms}ms, "
        f"prayer TTL={settings.prayer_cache_ttl_ms}ms, single_flight={settings.single_flight}"
    )
    return ServiceContainer(
        geocoder=geocoder,
        prayer_times=prayer_times,
        prayer_data=prayer_data,
        geocode_cache=geocode_cache,
        prayer_cache=prayer_cache,
    )
