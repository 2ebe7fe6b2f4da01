"""API routes for the prayer times dashboard.

- /geocode:      city name -> canonical name + coordinates (cached)
- /prayer-times: raw provider payload for explicit coordinates (uncached)
- /prayer-data:  everything the dashboard needs for one city (cached per UTC day)

Services live on ``app.state.services`` (built in the app lifespan) and are
injected through FastAPI dependencies so tests can override them.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.models import (
    ErrorCode,
    ErrorResponse,
    GeocodeResult,
    NotFoundError,
    PrayerDataResult,
    PrayerServiceError,
)
from app.services import (
    GeocodingService,
    PrayerDataAggregator,
    PrayerTimesService,
    ServiceContainer,
)
from app.services.prayer_times import DEFAULT_METHOD, DEFAULT_SCHOOL

logger = logging.getLogger(__name__)

router = APIRouter()


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_geocoder(services: ServiceContainer = Depends(get_services)) -> GeocodingService:
    return services.geocoder


def get_prayer_times_service(
    services: ServiceContainer = Depends(get_services),
) -> PrayerTimesService:
    return services.prayer_times


def get_prayer_data_service(
    services: ServiceContainer = Depends(get_services),
) -> PrayerDataAggregator:
    return services.prayer_data


@router.get("/geocode", response_model=GeocodeResult)
async def geocode_city(
    city: str = Query(..., min_length=1, description="Free-text city name"),
    geocoder: GeocodingService = Depends(get_geocoder),
) -> GeocodeResult | JSONResponse:
    """Resolve a city name to its canonical display name and coordinates."""
    try:
        return await geocoder.resolve(city)
    except PrayerServiceError as e:
        logger.info(f"[GEOCODE] {city!r} failed: {e.message}")
        return JSONResponse(status_code=e.status_code, content={"error": e.message})


@router.get("/prayer-times")
async def get_prayer_times(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    method: int = Query(DEFAULT_METHOD, description="Calculation method id"),
    school: int = Query(DEFAULT_SCHOOL, description="Asr juristic school"),
    prayer_times: PrayerTimesService = Depends(get_prayer_times_service),
) -> Any:
    """Pass-through to the prayer-time provider for explicit coordinates."""
    try:
        return await prayer_times.get_prayer_times(lat, lon, method=method, school=school)
    except PrayerServiceError as e:
        return JSONResponse(status_code=500, content={"error": e.message})


@router.get(
    "/prayer-data",
    response_model=PrayerDataResult,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_prayer_data(
    city: str = Query(..., min_length=1, max_length=100),
    aggregator: PrayerDataAggregator = Depends(get_prayer_data_service),
) -> PrayerDataResult | JSONResponse:
    """Geocode a city, fetch its prayer times and its current local time."""
    try:
        return await aggregator.get_prayer_data(city)
    except NotFoundError:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(error=ErrorCode.NOT_FOUND, message="City not found").model_dump(mode="json"),
        )
    except PrayerServiceError as e:
        logger.warning(f"[PRAYER-DATA] {city!r} failed: {e.message}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=ErrorCode.INTERNAL_ERROR,
                message=f"Internal Server Error: {e.message}",
            ).model_dump(mode="json"),
        )
