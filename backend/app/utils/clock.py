"""Local wall-clock derivation from a provider UTC offset.

The prayer-time provider reports a location's offset as ``±HH:MM``. The
dashboard expects the location's current wall-clock time as an epoch-ms
timestamp shifted by that offset, rendered ISO-8601 with a ``Z`` suffix.
"""

import re
from datetime import datetime, timedelta, timezone

from app.models import CurrentTime
from app.utils.cache import system_clock_ms

DEFAULT_UTC_OFFSET = "+00:00"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):(\d{2})$")


def parse_utc_offset(utc_offset: str) -> int:
    """Parse a ``±HH:MM`` offset into signed milliseconds.

    Raises:
        ValueError: If the string is not strictly ``±HH:MM`` with hours
            below 24 and minutes below 60.

    Example:
        >>> parse_utc_offset("-05:30")
        -19800000
    """
    match = _OFFSET_RE.match(utc_offset or "")
    if not match:
        raise ValueError(f"Malformed UTC offset: {utc_offset!r}")
    sign, hours, minutes = match.group(1), int(match.group(2)), int(match.group(3))
    if hours > 23 or minutes > 59:
        raise ValueError(f"UTC offset out of range: {utc_offset!r}")
    total_ms = (hours * 60 + minutes) * 60_000
    return -total_ms if sign == "-" else total_ms


def format_epoch_ms(timestamp_ms: int) -> str:
    """Render epoch milliseconds as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    instant = _EPOCH + timedelta(milliseconds=timestamp_ms)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


def utc_date(now_ms: int) -> str:
    """UTC calendar date (``YYYY-MM-DD``) of an epoch-ms instant."""
    return (_EPOCH + timedelta(milliseconds=now_ms)).date().isoformat()


def derive_local_time(utc_offset: str, now_ms: int | None = None) -> CurrentTime:
    """Current wall-clock time at a location with the given UTC offset.

    ``now_ms`` is true UTC epoch time; it defaults to the system clock, which
    does not depend on the host's timezone.
    """
    if now_ms is None:
        now_ms = system_clock_ms()
    local_ms = now_ms + parse_utc_offset(utc_offset)
    return CurrentTime(
        timestamp=local_ms,
        formatted=format_epoch_ms(local_ms),
        utc_offset=utc_offset,
    )
