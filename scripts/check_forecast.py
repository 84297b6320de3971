#!/usr/bin/env python3
"""Quick script to check the forecast tool output for a city against the live API.

Usage:
    python3 scripts/check_forecast.py                 # London, GB, 3 days
    python3 scripts/check_forecast.py Paris FR 5
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from city_forecast.servers.weather.config import ConfigError, load_config
from city_forecast.servers.weather.handlers import get_weather_forecast


def main():
    city = sys.argv[1] if len(sys.argv) > 1 else "London"
    country = sys.argv[2] if len(sys.argv) > 2 else "GB"
    days = int(sys.argv[3]) if len(sys.argv) > 3 else 3
    try:
        config = load_config()
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    print(f"Forecast: {city!r}, {country!r}, {days} day(s)\n")
    result = get_weather_forecast(config, city=city, country=country, days=days)
    print(result.content[0].text)
    structured = result.structured_content or {}
    if structured.get("map_url"):
        print(f"\n{structured['map_url']}")
    return 1 if "error" in structured else 0


if __name__ == "__main__":
    sys.exit(main())
