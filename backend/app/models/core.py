"""Core data models for the prayer times API.

Pydantic models for geocoding results, the derived local clock and the
combined prayer-data payload served to the dashboard. All of them are frozen:
once built they are shared between the cache and every caller.

Wire format uses the camelCase names the dashboard reads
(``prayerTimes``, ``isIndonesia``, ``currentTime``, ``utcOffset``).
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class GeocodeResult(BaseModel):
    """A city resolved to coordinates.

    ``city`` is the provider's canonical display name, not the user's input.
    """

    model_config = ConfigDict(frozen=True)

    city: str = Field(..., description="Canonical display name from the geocoder")
    lat: float = Field(..., description="Latitude in degrees")
    lon: float = Field(..., description="Longitude in degrees")


class CurrentTime(BaseModel):
    """Wall-clock instant at a location, derived from its UTC offset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: int = Field(..., description="Epoch milliseconds of the local wall-clock instant")
    formatted: str = Field(..., description="ISO-8601 rendering of the instant")
    utc_offset: str = Field(..., alias="utcOffset", description="Offset as reported, e.g. +07:00")


class PrayerDataResult(BaseModel):
    """Geocode result + provider prayer times + local clock."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    lat: float
    lon: float
    prayer_times: Any = Field(..., alias="prayerTimes", description="Opaque provider payload")
    is_indonesia: bool = Field(..., alias="isIndonesia")
    current_time: CurrentTime = Field(..., alias="currentTime")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and the epoch-ms instant after which it is stale."""

    value: T
    expires_at: int

    def is_fresh(self, now_ms: int) -> bool:
        return self.expires_at > now_ms
