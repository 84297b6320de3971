"""Forecast tool handler - client -> aggregator -> formatter, every outcome as a text result."""

import logging

from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from city_forecast.servers.weather.aggregate import aggregate
from city_forecast.servers.weather.config import ServerConfig
from city_forecast.servers.weather.errors import (
    ClientError,
    ForecastDataError,
    TransportError,
    UpstreamError,
)
from city_forecast.servers.weather.forecast import fetch_forecast, map_url, resolve_coordinates
from city_forecast.servers.weather.formatter import format_forecast
from city_forecast.servers.weather.models import DEFAULT_DAYS, ForecastPayload, ForecastQuery, Location

logger = logging.getLogger(__name__)

PROMPT_TEXT = "Please provide a friendly weather forecast."


def _text_result(text: str, structured: dict) -> ToolResult:
    return ToolResult(
        content=[TextContent(type="text", text=text)],
        structured_content=structured,
    )


def _error_result(error: ClientError) -> ToolResult:
    return _text_result(error.message(), {"error": error.kind})


def get_weather_forecast(
    config: ServerConfig,
    city: str,
    country: str | None = None,
    days: int = DEFAULT_DAYS,
) -> ToolResult:
    """Forecast summary for a city. Failures come back as the single text block, never raised."""
    query = ForecastQuery(city=city, country=country or None, days=days)
    logger.info("get_weather_forecast(city=%r, country=%r, days=%d)", query.city, query.country, query.days)

    try:
        result = fetch_forecast(query, config)
        if not isinstance(result, ForecastPayload):
            logger.warning("Forecast for %r failed: %s", query.location, result.kind)
            return _error_result(result)

        try:
            summaries = aggregate(result.samples, query.days)
        except ForecastDataError as e:
            logger.warning("Malformed forecast for %r: %s", query.location, e)
            return _error_result(UpstreamError())

        location = Location.from_payload(result, fallback=query.location)
        text = format_forecast(location, summaries)
        coords = resolve_coordinates(result, query.location, config)
    except Exception as e:
        logger.exception("Forecast fetch error for %r", query.location)
        return _error_result(TransportError(str(e)))

    return _text_result(
        text,
        {
            "location": location.label,
            "days": [s.model_dump() for s in summaries],
            "coordinates": {"lat": coords[0], "lon": coords[1]} if coords else None,
            "map_url": map_url(*coords) if coords else None,
        },
    )


def weather_forecast_prompt() -> str:
    return PROMPT_TEXT
