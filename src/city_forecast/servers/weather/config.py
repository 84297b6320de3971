"""Weather server configuration."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_KEY_FILE = "keys/openweathermap_api_key"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MCP_PATH = "/mcp"


class ConfigError(ValueError):
    """Missing or invalid startup configuration. Fatal: the server never starts."""

    def __init__(self, variable: str, reason: str):
        self.variable = variable
        super().__init__(f"{variable} {reason}")


class ServerConfig(BaseModel):
    """Process-wide settings, built once at startup and passed to whatever needs them."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False, description="OpenWeatherMap API key")
    host: str = Field(default=DEFAULT_HOST, description="Interface the HTTP listener binds to")
    port: int = Field(default=DEFAULT_PORT, gt=0, description="HTTP listener port")
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, description="Outbound request timeout (seconds)")
    mcp_path: str = Field(default=DEFAULT_MCP_PATH, description="Path of the protocol endpoint")


def _read_key_file(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                return line
    except OSError:
        return None
    return None


def get_api_key(environ: Mapping[str, str]) -> str | None:
    """Load OpenWeatherMap API key from env or file.

    Tries OPENWEATHERMAP_API_KEY first, then the file named by
    OPENWEATHERMAP_API_KEY_FILE (default keys/openweathermap_api_key).
    """
    key = (environ.get("OPENWEATHERMAP_API_KEY") or "").strip()
    if key:
        return key
    return _read_key_file(Path(environ.get("OPENWEATHERMAP_API_KEY_FILE") or DEFAULT_API_KEY_FILE))


def _positive_number(environ: Mapping[str, str], name: str, default, cast):
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigError(name, f"must be a positive number, got {raw!r}") from None
    if not value > 0:
        raise ConfigError(name, f"must be a positive number, got {raw!r}")
    return value


def load_config(environ: Mapping[str, str] | None = None) -> ServerConfig:
    """Build the server configuration from the environment.

    Raises:
        ConfigError: API key missing/empty, or PORT / WEATHER_HTTP_TIMEOUT invalid.
    """
    if environ is None:
        environ = os.environ

    api_key = get_api_key(environ)
    if not api_key:
        raise ConfigError(
            "OPENWEATHERMAP_API_KEY",
            "is not set. Export it or add the key to keys/openweathermap_api_key.",
        )

    path = (environ.get("MCP_PATH") or DEFAULT_MCP_PATH).strip()
    if not path.startswith("/"):
        path = "/" + path

    return ServerConfig(
        api_key=api_key,
        host=(environ.get("HOST") or DEFAULT_HOST).strip(),
        port=_positive_number(environ, "PORT", DEFAULT_PORT, int),
        timeout=_positive_number(environ, "WEATHER_HTTP_TIMEOUT", DEFAULT_TIMEOUT_SECONDS, float),
        mcp_path=path,
    )
