"""Render daily summaries as the text returned to the caller."""

from collections.abc import Sequence

from city_forecast.servers.weather.models import DaySummary, Location

HEADER_TEMPLATE = "🌤️ Weather forecast for {location}:"
DAY_TEMPLATE = "📅 {date}: 🌡️ Avg {avg}°C (Min {min}°C, Max {max}°C), 🌥️ {description}"


def format_day(day: DaySummary) -> str:
    return DAY_TEMPLATE.format(
        date=day.date,
        avg=day.avg_temp,
        min=day.min_temp,
        max=day.max_temp,
        description=day.description,
    )


def format_forecast(location: Location, days: Sequence[DaySummary]) -> str:
    lines = [HEADER_TEMPLATE.format(location=location.label)]
    lines.extend(format_day(day) for day in days)
    return "\n".join(lines)
