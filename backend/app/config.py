"""Application settings loaded from environment variables.

All env vars live here. A ``.env`` file in the working directory is loaded
first (python-dotenv), real environment variables take precedence.
"""

import math
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_GEOCODE_CACHE_TTL_MS = 60 * 60 * 1000  # 1 hour
DEFAULT_PRAYER_CACHE_TTL_MS = 6 * 60 * 60 * 1000  # 6 hours
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
ISLAMIC_API_URL = "https://islamicapi.com/api/v1/prayer-time/"


def parse_ttl_ms(raw: str | None, default: int) -> int:
    """Parse a TTL in milliseconds, falling back to ``default``.

    Missing, non-numeric, non-finite and non-positive values all silently
    resolve to the default.

    Example:
        >>> parse_ttl_ms("-5", 3600000)
        3600000
        >>> parse_ttl_ms("1500", 3600000)
        1500
    """
    if raw is None:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    if not math.isfinite(parsed) or parsed <= 0:
        return default
    return int(parsed)


def _parse_positive_float(raw: str | None, default: float) -> float:
    try:
        parsed = float(raw) if raw is not None else default
    except ValueError:
        return default
    return parsed if math.isfinite(parsed) and parsed > 0 else default


def _parse_bool(raw: str | None) -> bool:
    return (raw or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    ``user_agent`` and ``islamic_api_key`` are not validated up front; the
    service that needs them fails when the call is attempted.
    """

    geocode_cache_ttl_ms: int = DEFAULT_GEOCODE_CACHE_TTL_MS
    prayer_cache_ttl_ms: int = DEFAULT_PRAYER_CACHE_TTL_MS
    user_agent: str | None = None
    islamic_api_key: str | None = None
    nominatim_url: str = NOMINATIM_URL
    islamic_api_url: str = ISLAMIC_API_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    single_flight: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            geocode_cache_ttl_ms=parse_ttl_ms(
                os.getenv("GEOCODE_CACHE_TTL_MS"), DEFAULT_GEOCODE_CACHE_TTL_MS
            ),
            prayer_cache_ttl_ms=parse_ttl_ms(
                os.getenv("PRAYER_CACHE_TTL_MS"), DEFAULT_PRAYER_CACHE_TTL_MS
            ),
            user_agent=os.getenv("USER_AGENT") or None,
            islamic_api_key=os.getenv("ISLAMIC_API_KEY") or None,
            nominatim_url=os.getenv("NOMINATIM_URL", NOMINATIM_URL),
            islamic_api_url=os.getenv("ISLAMIC_API_URL", ISLAMIC_API_URL),
            http_timeout=_parse_positive_float(
                os.getenv("HTTP_TIMEOUT_SECONDS"), DEFAULT_HTTP_TIMEOUT_SECONDS
            ),
            single_flight=_parse_bool(os.getenv("SINGLE_FLIGHT")),
            cors_origins=[
                origin.strip()
                for origin in os.getenv("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
