"""Shared fixtures: a controllable clock and mocked upstream providers."""

from datetime import datetime, timezone

import httpx
import pytest

from app.config import Settings
from app.services import create_services

JAKARTA = {
    "display_name": "Jakarta, Daerah Khusus Ibukota Jakarta, Indonesia",
    "lat": "-6.1753942",
    "lon": "106.827183",
}
PARIS = {
    "display_name": "Paris, France",
    "lat": "48.8588897",
    "lon": "2.3200410",
}
GEOCODE_RESULTS = {"jakarta": [JAKARTA], "paris": [PARIS]}


def epoch_ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> int:
    return int(datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc).timestamp()) * 1000


def prayer_payload(utc_offset: str | None = "+07:00") -> dict:
    data = {
        "times": {
            "Fajr": "04:37",
            "Sunrise": "05:52",
            "Dhuhr": "12:01",
            "Asr": "15:13",
            "Maghrib": "18:07",
            "Isha": "19:17",
        },
        "date": {"readable": "15 Mar 2024"},
    }
    if utc_offset is not None:
        data["timezone"] = {"name": "Asia/Jakarta", "utc_offset": utc_offset}
    return {"code": 200, "status": "success", "data": data}


class FakeClock:
    """Mutable epoch-ms clock."""

    def __init__(self, now_ms: int) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class RecordingHandler:
    """httpx.MockTransport handler that records every request."""

    def __init__(self, respond) -> None:
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def nominatim_respond(request: httpx.Request) -> httpx.Response:
    query = request.url.params["q"].strip().lower()
    return httpx.Response(200, json=GEOCODE_RESULTS.get(query, []))


def islamic_api_respond(request: httpx.Request) -> httpx.Response:
    lat = float(request.url.params["lat"])
    return httpx.Response(200, json=prayer_payload("+07:00" if lat < 0 else "+01:00"))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(epoch_ms(2024, 3, 15, 12, 0, 0))


@pytest.fixture
def nominatim() -> RecordingHandler:
    return RecordingHandler(nominatim_respond)


@pytest.fixture
def islamic_api() -> RecordingHandler:
    return RecordingHandler(islamic_api_respond)


@pytest.fixture
def settings() -> Settings:
    return Settings(user_agent="PrayerTimesTest/1.0 (test@example.com)", islamic_api_key="test-key")


@pytest.fixture
def services(settings, clock, nominatim, islamic_api):
    return create_services(
        settings,
        clock=clock,
        geocode_transport=nominatim.transport,
        prayer_transport=islamic_api.transport,
    )
