"""Tests for per-day aggregation of 3-hour forecast samples."""

import pytest

from conftest import make_sample, three_day_samples
from city_forecast.servers.weather.aggregate import aggregate, round_half_up
from city_forecast.servers.weather.errors import ForecastDataError
from city_forecast.servers.weather.models import ForecastSample


def _samples(raw: list[dict]) -> list[ForecastSample]:
    return [ForecastSample.model_validate(s) for s in raw]


def test_three_day_scenario():
    """Day one temps 10/12/14 -> avg 12; min/max come from temp_min/temp_max."""
    days = aggregate(_samples(three_day_samples()), 3)

    assert [d.date for d in days] == ["2024-05-01", "2024-05-02", "2024-05-03"]
    first = days[0]
    assert first.avg_temp == 12
    assert first.min_temp == 8  # 8.4 from temp_min, not temp
    assert first.max_temp == 17  # 16.6 from temp_max
    assert first.description == "overcast clouds"
    assert len(first.samples) == 8


@pytest.mark.parametrize("days", [1, 2, 3, 4, 5])
def test_day_count_capped(days):
    summaries = aggregate(_samples(three_day_samples()), days)
    assert len(summaries) == min(days, 3)


def test_extra_upstream_dates_are_dropped():
    raw = three_day_samples() + [make_sample("2024-05-04 00:00:00")]
    summaries = aggregate(_samples(raw), 3)
    assert summaries[-1].date == "2024-05-03"


def test_bucketing_ignores_arrival_order():
    raw = [
        make_sample("2024-05-02 03:00:00", temp=20.0),
        make_sample("2024-05-01 21:00:00", temp=5.0),
        make_sample("2024-05-02 00:00:00", temp=22.0),
    ]
    summaries = aggregate(_samples(raw), 5)
    assert [d.date for d in summaries] == ["2024-05-01", "2024-05-02"]
    assert summaries[1].avg_temp == 21
    assert len(summaries[1].samples) == 2


def test_date_taken_verbatim_from_dt_txt():
    """No timezone conversion: late-evening UTC sample stays on its own date."""
    summaries = aggregate(_samples([make_sample("2024-12-31 21:00:00")]), 1)
    assert summaries[0].date == "2024-12-31"


def test_first_description_wins():
    raw = [
        make_sample("2024-05-01 00:00:00", description="few clouds"),
        make_sample("2024-05-01 03:00:00", description="light rain"),
        make_sample("2024-05-01 06:00:00", description="light rain"),
    ]
    assert aggregate(_samples(raw), 1)[0].description == "few clouds"


def test_missing_descriptions_fall_back_to_clear_sky():
    raw = [make_sample("2024-05-01 00:00:00", description=None)]
    assert aggregate(_samples(raw), 1)[0].description == "clear sky"


def test_avg_within_min_max():
    summaries = aggregate(_samples(three_day_samples()), 3)
    for day in summaries:
        assert day.min_temp - 1 <= day.avg_temp <= day.max_temp + 1


def test_aggregate_is_repeatable_and_leaves_input_alone():
    samples = _samples(three_day_samples())
    before = [s.model_dump() for s in samples]
    assert aggregate(samples, 3) == aggregate(samples, 3)
    assert [s.model_dump() for s in samples] == before


def test_empty_samples_raise():
    with pytest.raises(ForecastDataError):
        aggregate([], 3)


def test_day_without_temperatures_raises():
    raw = make_sample("2024-05-01 00:00:00")
    raw["main"] = {"pressure": 1000}
    with pytest.raises(ForecastDataError):
        aggregate(_samples([raw]), 1)


def test_round_half_up_matches_upstream_convention():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert round_half_up(12.49) == 12
