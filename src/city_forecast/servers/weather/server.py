"""MCP server for multi-day city weather forecasts via OpenWeatherMap."""

import logging
import sys
from typing import Annotated

import uvicorn
from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from pydantic import Field
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Route
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from city_forecast.servers.weather import handlers
from city_forecast.servers.weather.config import ConfigError, ServerConfig, load_config
from city_forecast.servers.weather.models import DEFAULT_DAYS, MAX_DAYS

logger = logging.getLogger(__name__)

SERVER_NAME = "weather-server"
GRACEFUL_SHUTDOWN_SECONDS = 10

METHOD_NOT_ALLOWED_BODY = {
    "jsonrpc": "2.0",
    "error": {"code": -32000, "message": "Method not allowed."},
    "id": None,
}


def create_server(config: ServerConfig) -> FastMCP:
    """Build a fresh MCP server with the forecast tool and prompt registered.

    Holds no per-request state; config is only read.
    """
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(name="getWeatherForecast")
    def get_weather_forecast(
        city: Annotated[str, Field(min_length=1, description="The name of the city to get the weather for")],
        country: Annotated[
            str | None, Field(description="The two-letter country code (e.g., 'US', 'GB') (optional)")
        ] = None,
        days: Annotated[
            int,
            Field(ge=1, le=MAX_DAYS, description="Number of days for the forecast (1-5 days, default is 3)"),
        ] = DEFAULT_DAYS,
    ) -> ToolResult:
        """Give a weather forecast for a city.

        Returns one text block with a line per day (average, min and max
        temperature, description), or a message explaining why no forecast
        could be fetched.
        """
        return handlers.get_weather_forecast(config, city=city, country=country, days=days)

    @mcp.prompt(name="weatherForecastPrompt")
    def weather_forecast_prompt() -> str:
        """A prompt template that asks for a weather forecast for a city in a friendly manner."""
        return handlers.weather_forecast_prompt()

    return mcp


class PostOnlyMiddleware:
    """Answer anything but POST on the protocol path with 405, before the transport sees it."""

    def __init__(self, app: ASGIApp, path: str):
        self.app = app
        self.path = path.rstrip("/") or "/"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] == "http"
            and (scope["path"].rstrip("/") or "/") == self.path
            and scope["method"] != "POST"
        ):
            logger.info("Rejected %s %s", scope["method"], scope["path"])
            response = JSONResponse(METHOD_NOT_ALLOWED_BODY, status_code=405, headers={"Allow": "POST"})
            await response(scope, receive, send)
            return
        await self.app(scope, receive, send)


class PerRequestMCP:
    """Builds a fresh MCP server for every POST and runs the request through its stateless transport."""

    def __init__(self, config: ServerConfig):
        self.config = config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        app = create_server(self.config).http_app(
            path=self.config.mcp_path,
            json_response=True,
            stateless_http=True,
        )
        # The session manager only runs inside the app's lifespan.
        async with app.router.lifespan_context(app):
            await app(scope, receive, send)


def create_app(config: ServerConfig) -> Starlette:
    """HTTP shell: POST only on config.mcp_path, one MCP server per request."""
    return Starlette(
        routes=[Route(config.mcp_path, endpoint=PerRequestMCP(config), methods=["POST"])],
        middleware=[Middleware(PostOnlyMiddleware, path=config.mcp_path)],
    )


def serve(config: ServerConfig) -> None:
    """Run the HTTP listener until SIGINT/SIGTERM; in-flight requests finish before exit."""
    logger.info("Weather MCP server listening on http://%s:%d%s", config.host, config.port, config.mcp_path)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_SECONDS,
        log_level="info",
    )
    logger.info("Weather MCP server stopped")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    try:
        config = load_config()
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    if "--stdio" in sys.argv:
        create_server(config).run()
    else:
        serve(config)


if __name__ == "__main__":
    main()
