"""Group 3-hour forecast samples into per-day summaries."""

import math
from collections.abc import Sequence

from city_forecast.servers.weather.errors import ForecastDataError
from city_forecast.servers.weather.models import DaySummary, ForecastSample

FALLBACK_DESCRIPTION = "clear sky"


def round_half_up(value: float) -> int:
    """Round .5 towards +inf (-2.5 -> -2), unlike Python's banker's rounding."""
    return math.floor(value + 0.5)


def _bucket_by_date(samples: Sequence[ForecastSample]) -> dict[str, list[ForecastSample]]:
    buckets: dict[str, list[ForecastSample]] = {}
    for sample in samples:
        buckets.setdefault(sample.date, []).append(sample)
    return buckets


def _summarize(date: str, samples: list[ForecastSample]) -> DaySummary:
    temps = [s.main.temp for s in samples if s.main.temp is not None]
    if not temps:
        raise ForecastDataError(f"No temperature readings for {date}")

    # Running min/max come from each window's own temp_min/temp_max, not from temp.
    lows = [s.main.temp_min for s in samples if s.main.temp_min is not None] or temps
    highs = [s.main.temp_max for s in samples if s.main.temp_max is not None] or temps

    # First description of the day wins.
    descriptions = [s.description for s in samples if s.description]
    return DaySummary(
        date=date,
        avg_temp=round_half_up(sum(temps) / len(temps)),
        min_temp=round_half_up(min(lows)),
        max_temp=round_half_up(max(highs)),
        description=descriptions[0] if descriptions else FALLBACK_DESCRIPTION,
        samples=list(samples),
    )


def aggregate(samples: Sequence[ForecastSample], days: int) -> list[DaySummary]:
    """Summarize samples per calendar date, earliest first, keeping at most `days` dates.

    Samples are bucketed by the date part of dt_txt with no timezone
    conversion. The input is not modified.

    Raises:
        ForecastDataError: samples is empty, or a kept date has no temperatures.
    """
    if not samples:
        raise ForecastDataError("Forecast contained no samples")
    buckets = _bucket_by_date(samples)
    return [_summarize(date, buckets[date]) for date in sorted(buckets)[:max(days, 0)]]
