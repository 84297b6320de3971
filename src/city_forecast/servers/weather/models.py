"""Data models for OpenWeatherMap forecast data and derived daily summaries."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DAYS = 3
MAX_DAYS = 5
SAMPLES_PER_DAY = 8  # 3-hour intervals
MAX_INTERVALS = 40  # upstream cap: 5 days of 3-hour samples


class Coord(BaseModel):
    """City-level coordinates."""

    lat: float | None = Field(default=None, description="Latitude")
    lon: float | None = Field(default=None, description="Longitude")


class MainReadings(BaseModel):
    """Temperature and pressure readings for one 3-hour window."""

    temp: float | None = Field(default=None, description="Temperature (°C with metric units)")
    temp_min: float | None = Field(default=None, description="Minimum temperature in the window")
    temp_max: float | None = Field(default=None, description="Maximum temperature in the window")
    pressure: float | None = Field(default=None, description="Pressure, hPa")
    humidity: float | None = Field(default=None, description="Humidity, %")


class WeatherCondition(BaseModel):
    id: int | None = None
    main: str = ""
    description: str = ""
    icon: str = ""


class Clouds(BaseModel):
    all: float | None = Field(default=None, description="Cloudiness, %")


class Wind(BaseModel):
    speed: float | None = Field(default=None, description="Wind speed, m/s")
    deg: float | None = Field(default=None, description="Wind direction, degrees")


class ForecastSample(BaseModel):
    """One upstream 3-hour forecast data point."""

    dt: int = Field(description="Unix timestamp of the window")
    dt_txt: str = Field(description="Window start as 'YYYY-MM-DD HH:MM:SS'")
    main: MainReadings = Field(default_factory=MainReadings)
    weather: list[WeatherCondition] = Field(default_factory=list)
    clouds: Clouds = Field(default_factory=Clouds)
    wind: Wind = Field(default_factory=Wind)

    @property
    def date(self) -> str:
        """Calendar date of the sample, taken verbatim from dt_txt."""
        return self.dt_txt.split(" ")[0]

    @property
    def description(self) -> str | None:
        if self.weather and self.weather[0].description:
            return self.weather[0].description
        return None


class City(BaseModel):
    id: int | None = None
    name: str = ""
    coord: Coord | None = None
    country: str = ""
    timezone: int | None = None


class ForecastPayload(BaseModel):
    """OpenWeatherMap /data/2.5/forecast response."""

    model_config = ConfigDict(populate_by_name=True)

    cod: str = Field(description="Internal status code, '200' on success")
    message: str | float | None = Field(default=None, description="Status message (numeric 0 on success)")
    cnt: int | None = Field(default=None, description="Number of samples returned")
    samples: list[ForecastSample] = Field(
        default_factory=list, alias="list", description="Samples in chronological order"
    )
    city: City | None = None

    @field_validator("cod", mode="before")
    @classmethod
    def _cod_as_text(cls, v):
        return str(v)


class ForecastQuery(BaseModel):
    """Validated caller parameters for one forecast request."""

    model_config = ConfigDict(frozen=True)

    city: str = Field(min_length=1, description="City name")
    country: str | None = Field(default=None, description="Two-letter country code")
    days: int = Field(default=DEFAULT_DAYS, description="Days to summarize, clamped to 1-5")

    @field_validator("days", mode="after")
    @classmethod
    def _clamp_days(cls, v: int) -> int:
        return max(1, min(v, MAX_DAYS))

    @property
    def location(self) -> str:
        """Upstream query string: 'city' or 'city,COUNTRY'."""
        return f"{self.city},{self.country}" if self.country else self.city

    @property
    def intervals(self) -> int:
        """Number of 3-hour samples to request."""
        return min(self.days * SAMPLES_PER_DAY, MAX_INTERVALS)


class DaySummary(BaseModel):
    """Aggregated statistics for one calendar date."""

    date: str = Field(description="YYYY-MM-DD")
    avg_temp: int
    min_temp: int
    max_temp: int
    description: str
    samples: list[ForecastSample] = Field(default_factory=list, exclude=True)


class Location(BaseModel):
    name: str
    country: str = ""

    @classmethod
    def from_payload(cls, payload: ForecastPayload, fallback: str) -> "Location":
        """Resolve from the response's city metadata, or fall back to the query string."""
        if payload.city is not None and payload.city.name:
            return cls(name=payload.city.name, country=payload.city.country)
        return cls(name=fallback)

    @property
    def label(self) -> str:
        return f"{self.name}, {self.country}" if self.country else self.name
