"""Geocoding service using OpenStreetMap Nominatim.

Resolves a free-text city name to a canonical display name and coordinates.
Results are cached per normalized city name (trimmed, lower-cased) for the
configured TTL; the raw input is what gets sent to Nominatim.

Nominatim's usage policy requires an identifying User-Agent, so a resolver
without one refuses to make the call.
"""

import logging
from abc import ABC, abstractmethod

import httpx

from app.config import NOMINATIM_URL
from app.models import GeocodeResult, NotFoundError, UpstreamError
from app.utils.cache import SingleFlight, TTLCache, normalize_city

logger = logging.getLogger(__name__)


class GeocodingService(ABC):
    """Abstract base class for geocoding services."""

    @abstractmethod
    async def resolve(self, city_name: str) -> GeocodeResult:
        """Resolve a city name to a ``GeocodeResult``.

        Raises:
            NotFoundError: The provider returned no match.
            UpstreamError: The provider failed or is misconfigured.
        """
        pass

    async def close(self) -> None:
        pass


class NominatimGeocodingService(GeocodingService):
    """Nominatim client with a per-city TTL cache.

    Only the first match is used; there is no disambiguation.
    """

    def __init__(
        self,
        cache: TTLCache[GeocodeResult],
        user_agent: str | None,
        base_url: str = NOMINATIM_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        single_flight: SingleFlight[GeocodeResult] | None = None,
    ) -> None:
        self._cache = cache
        self._user_agent = user_agent
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._single_flight = single_flight
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent} if self._user_agent else None,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def resolve(self, city_name: str) -> GeocodeResult:
        key = normalize_city(city_name)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"[GEOCODE] Cache hit for {key!r}")
            return cached

        if self._single_flight is not None:
            return await self._single_flight.do(key, lambda: self._fetch_and_store(key, city_name))
        return await self._fetch_and_store(key, city_name)

    async def _fetch_and_store(self, key: str, city_name: str) -> GeocodeResult:
        result = await self._fetch(city_name)
        self._cache.set(key, result)
        logger.info(f"[GEOCODE] {city_name!r} -> {result.city} ({result.lat:.4f}, {result.lon:.4f})")
        return result

    async def _fetch(self, city_name: str) -> GeocodeResult:
        if not self._user_agent:
            raise UpstreamError("Geocoding user agent is not configured (set USER_AGENT)")

        params = {"q": city_name, "format": "json", "limit": 1}
        try:
            response = await self._get_client().get(self._base_url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"[GEOCODE] Request error for {city_name!r}: {e}")
            raise UpstreamError(f"Geocoding failed: {e}") from e

        if not response.is_success:
            logger.warning(f"[GEOCODE] HTTP {response.status_code} for {city_name!r}")
            raise UpstreamError(f"Geocoding failed: {response.reason_phrase}")

        try:
            results = response.json()
        except ValueError as e:
            raise UpstreamError(f"Geocoding failed: invalid JSON response ({e})") from e

        if not isinstance(results, list):
            raise UpstreamError("Geocoding failed: unexpected response format")
        if not results:
            logger.info(f"[GEOCODE] No match for {city_name!r}")
            raise NotFoundError("City not found")

        first = results[0]
        try:
            return GeocodeResult(
                city=first["display_name"],
                lat=float(first["lat"]),
                lon=float(first["lon"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"Geocoding failed: malformed result ({e})") from e


# The resolver the prayer-data aggregator depends on.
GeocodeResolver = NominatimGeocodingService
