"""Classified forecast failures.

These are returned, not raised: the tool adapter turns each one into a
normal text result, so none of them may surface as a protocol error.
"""

from dataclasses import dataclass

GENERIC_UPSTREAM_MESSAGE = "Failed to fetch weather data"


@dataclass(frozen=True)
class NotFound:
    """Upstream could not resolve the location (HTTP 404)."""

    location: str
    kind = "not_found"

    def message(self) -> str:
        return f"❌ Could not find weather data for {self.location}."


@dataclass(frozen=True)
class Unauthorized:
    """Upstream rejected the API key (HTTP 401)."""

    kind = "unauthorized"

    def message(self) -> str:
        return "🔑 Invalid API key."


@dataclass(frozen=True)
class UpstreamError:
    """Any other non-2xx status, or a non-'200' status inside a 2xx payload."""

    detail: str = GENERIC_UPSTREAM_MESSAGE
    http_status: bool = False
    kind = "upstream_error"

    def message(self) -> str:
        if self.http_status:
            return f"API Error: {self.detail}"
        return f"Error: {self.detail or GENERIC_UPSTREAM_MESSAGE}"


@dataclass(frozen=True)
class TransportError:
    """Network-level failure: DNS, refused connection, timeout."""

    detail: str
    kind = "transport_error"

    def message(self) -> str:
        return f"An unexpected error occurred: {self.detail}"


ClientError = NotFound | Unauthorized | UpstreamError | TransportError


class ForecastDataError(ValueError):
    """Upstream samples cannot be summarized (empty list, day without temperatures)."""
