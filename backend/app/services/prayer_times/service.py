"""IslamicAPI prayer-time client.

Thin wrapper around ``GET /api/v1/prayer-time/``. The payload is passed
through untouched; callers only look at ``data.timezone.utc_offset``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from app.config import ISLAMIC_API_URL
from app.models import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_METHOD = 3  # Muslim World League
DEFAULT_SCHOOL = 1


class PrayerTimesService(ABC):
    """Abstract base class for prayer-time providers."""

    @abstractmethod
    async def get_prayer_times(
        self,
        lat: float,
        lon: float,
        method: int = DEFAULT_METHOD,
        school: int = DEFAULT_SCHOOL,
    ) -> Any:
        pass

    async def close(self) -> None:
        pass


class IslamicApiPrayerTimesService(PrayerTimesService):
    """IslamicAPI client. Requires an API key per request."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = ISLAMIC_API_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def get_prayer_times(
        self,
        lat: float,
        lon: float,
        method: int = DEFAULT_METHOD,
        school: int = DEFAULT_SCHOOL,
    ) -> Any:
        if not self._api_key:
            raise UpstreamError("Prayer times API key is not configured (set ISLAMIC_API_KEY)")

        params = {
            "lat": lat,
            "lon": lon,
            "method": method,
            "school": school,
            "api_key": self._api_key,
        }
        logger.info(f"[PRAYER] Fetching prayer times ({lat:.4f}, {lon:.4f}) method={method} school={school}")
        try:
            response = await self._get_client().get(self._base_url, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"[PRAYER] Request error: {e}")
            raise UpstreamError(f"Error fetching prayer times: {e}") from e

        if not response.is_success:
            logger.warning(f"[PRAYER] HTTP {response.status_code} from prayer times provider")
            raise UpstreamError(f"Error fetching prayer times: {response.reason_phrase}")

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Error fetching prayer times: invalid JSON response ({e})") from e
