"""Shared fixtures: config, upstream payload builders, fake HTTP responses."""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from city_forecast.servers.weather.config import ServerConfig


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(api_key="test-key", timeout=5.0)


def make_sample(dt_txt: str, temp=10.0, temp_min=None, temp_max=None, description="light rain") -> dict:
    """One upstream 3-hour sample as the API returns it."""
    return {
        "dt": 1_700_000_000,
        "dt_txt": dt_txt,
        "main": {
            "temp": temp,
            "temp_min": temp if temp_min is None else temp_min,
            "temp_max": temp if temp_max is None else temp_max,
            "pressure": 1012,
            "humidity": 80,
        },
        "weather": [{"id": 500, "main": "Rain", "description": description, "icon": "10d"}] if description else [],
        "clouds": {"all": 75},
        "wind": {"speed": 4.1, "deg": 240},
    }


def make_payload(samples: list[dict], city: dict | None = None) -> dict:
    payload = {"cod": "200", "message": 0, "cnt": len(samples), "list": samples}
    payload["city"] = city if city is not None else {
        "id": 2643743,
        "name": "London",
        "coord": {"lat": 51.5085, "lon": -0.1257},
        "country": "GB",
        "timezone": 0,
    }
    return payload


def three_day_samples() -> list[dict]:
    """24 samples over 2024-05-01..03; day one temps 10/12/14 then 12s."""
    samples = []
    for day in ("2024-05-01", "2024-05-02", "2024-05-03"):
        for hour in range(0, 24, 3):
            samples.append(make_sample(f"{day} {hour:02d}:00:00", temp=12.0, temp_min=11.0, temp_max=13.0))
    samples[0]["main"].update(temp=10.0, temp_min=8.4)
    samples[1]["main"].update(temp=14.0, temp_max=16.6)
    samples[0]["weather"][0]["description"] = "overcast clouds"
    return samples


def fake_response(status: int = 200, json_data=None, reason: str = "OK") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    resp.json.return_value = json_data
    return resp
