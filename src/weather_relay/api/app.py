"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from weather_relay.api.cache_routes import router as cache_router
from weather_relay.app_logging import configure_logging
from weather_relay.config import parse_city_list
from weather_relay.containers import AppContainer
from weather_relay.domain.errors import FetchError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    default_cities = parse_city_list(container.settings.default_cities)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Weather relay started (source=%s)",
            app.state.container.settings.weather_api_base_url,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(cache_router)

    @app.exception_handler(FetchError)
    async def fetch_error_handler(request: Request, exc: FetchError) -> JSONResponse:
        return JSONResponse(status_code=_status_for(exc), content=exc.describe())

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        """Root greeting."""
        return "Hello World!"

    @app.get("/api", response_class=PlainTextResponse)
    async def api_root() -> str:
        """Plain API marker."""
        return "API"

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/weather", response_class=PlainTextResponse)
    async def weather_report(request: Request, cities: str | None = None) -> str:
        """Return a one-line report for several cities."""
        state_container: AppContainer = request.app.state.container
        selected = parse_city_list(cities) or default_cities
        return await state_container.report_service.get_many(selected)

    @app.get("/weather/{city}")
    async def city_weather(city: str, request: Request) -> dict[str, int]:
        """Return current weather for one city."""
        state_container: AppContainer = request.app.state.container
        data = await state_container.weather_cache.get(city)
        return data.to_payload()

    @app.get("/weather/{city}/report", response_class=PlainTextResponse)
    async def city_report(city: str, request: Request) -> str:
        """Return a descriptive sentence for one city."""
        state_container: AppContainer = request.app.state.container
        return await state_container.report_service.get_report(city)

    return app


_STATUS_BY_KIND = {
    "network": status.HTTP_502_BAD_GATEWAY,
    "api": status.HTTP_502_BAD_GATEWAY,
    "timeout": status.HTTP_504_GATEWAY_TIMEOUT,
}


def _status_for(exc: FetchError) -> int:
    return _STATUS_BY_KIND[exc.kind]
