"""OpenWeatherMap client - forecast fetch with classified failures, plus geocoding fallback."""

import logging

import requests
from pydantic import ValidationError

from city_forecast.servers.weather.config import ServerConfig
from city_forecast.servers.weather.errors import (
    ClientError,
    NotFound,
    TransportError,
    Unauthorized,
    UpstreamError,
)
from city_forecast.servers.weather.models import ForecastPayload, ForecastQuery

logger = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5/forecast"
GEOCODE_URL = "https://api.openweathermap.org/geo/1.0/direct"
MAP_URL = "https://openweathermap.org/weathermap"


def fetch_forecast(query: ForecastQuery, config: ServerConfig) -> ForecastPayload | ClientError:
    """Fetch the 3-hour forecast for query.location.

    Never raises for upstream or network trouble; those come back as a
    NotFound / Unauthorized / UpstreamError / TransportError value.
    """
    location = query.location
    try:
        resp = requests.get(
            BASE_URL,
            params={
                "q": location,
                "appid": config.api_key,
                "units": "metric",
                "cnt": query.intervals,
            },
            timeout=config.timeout,
        )
    except requests.RequestException as e:
        logger.warning("Forecast request for %r failed: %s", location, e)
        return TransportError(str(e))

    if resp.status_code == 404:
        return NotFound(location)
    if resp.status_code == 401:
        return Unauthorized()
    if not resp.ok:
        logger.warning("Forecast API returned %s %s for %r", resp.status_code, resp.reason, location)
        return UpstreamError(resp.reason or str(resp.status_code), http_status=True)

    try:
        payload = ForecastPayload.model_validate(resp.json())
    except (ValueError, ValidationError) as e:
        logger.warning("Unreadable forecast payload for %r: %s", location, e)
        return UpstreamError()

    if payload.cod != "200":
        detail = str(payload.message) if payload.message else ""
        return UpstreamError(detail)
    return payload


def geocode_location(location: str, config: ServerConfig) -> tuple[float, float] | None:
    """Resolve a 'city[,COUNTRY]' string to (lat, lon) via the direct geocoding API.

    Returns None when nothing matches or the lookup fails.
    """
    try:
        resp = requests.get(
            GEOCODE_URL,
            params={"q": location, "limit": 1, "appid": config.api_key},
            timeout=config.timeout,
        )
        resp.raise_for_status()
        results = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Geocoding %r failed: %s", location, e)
        return None

    if not isinstance(results, list) or not results:
        return None
    try:
        lat, lon = results[0].get("lat"), results[0].get("lon")
        if lat is None or lon is None:
            return None
        return float(lat), float(lon)
    except (TypeError, ValueError, AttributeError) as e:
        logger.warning("Unreadable geocoding result for %r: %s", location, e)
        return None


def resolve_coordinates(
    payload: ForecastPayload, location: str, config: ServerConfig
) -> tuple[float, float] | None:
    """City coordinates from the forecast payload, geocoding only when they are missing or zero."""
    coord = payload.city.coord if payload.city else None
    if coord is not None and coord.lat and coord.lon:
        return coord.lat, coord.lon
    return geocode_location(location, config)


def map_url(lat: float, lon: float) -> str:
    """Interactive temperature map centred on the given point."""
    return f"{MAP_URL}?basemap=map&cities=true&layer=temp&lat={lat}&lon={lon}&zoom=10"
