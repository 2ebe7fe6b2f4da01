"""Geocoding: city name -> canonical name + coordinates (Nominatim)."""

from .service import GeocodeResolver, GeocodingService, NominatimGeocodingService

__all__ = [
    "GeocodeResolver",
    "GeocodingService",
    "NominatimGeocodingService",
]
