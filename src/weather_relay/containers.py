"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from weather_relay.adapters.weather_client import HttpxWeatherClient, WeatherClient
from weather_relay.config import Settings
from weather_relay.services.cache import WeatherCache
from weather_relay.services.fetcher import RemoteFetcher
from weather_relay.services.reports import WeatherReportService
from weather_relay.services.resilience import resilient_fetch


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    weather_client: WeatherClient
    weather_cache: WeatherCache
    report_service: WeatherReportService
    close_resources: Callable[[], Awaitable[None]]


def build_weather_cache(client: WeatherClient, settings: Settings) -> WeatherCache:
    """Create a weather cache whose misses go through the retry policy."""
    fetcher = RemoteFetcher(client)
    loader = partial(
        resilient_fetch, fetcher.fetch_one, policy=settings.retry_policy()
    )
    return WeatherCache(
        capacity=settings.cache_capacity,
        ttl_seconds=settings.cache_ttl_seconds,
        loader=loader,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    weather_client = HttpxWeatherClient.create(
        base_url=resolved_settings.weather_api_base_url,
        request_timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    weather_cache = build_weather_cache(weather_client, resolved_settings)
    report_service = WeatherReportService(weather_cache)

    async def close_resources() -> None:
        await weather_client.close()

    return AppContainer(
        settings=resolved_settings,
        weather_client=weather_client,
        weather_cache=weather_cache,
        report_service=report_service,
        close_resources=close_resources,
    )
