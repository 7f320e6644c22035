"""Shared test fixtures."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

import pytest

from weather_relay.adapters.weather_client import WeatherClient
from weather_relay.config import Settings
from weather_relay.containers import AppContainer, build_weather_cache
from weather_relay.domain.errors import FetchError
from weather_relay.domain.weather import WeatherData
from weather_relay.services.cache import WeatherCache
from weather_relay.services.fetcher import RemoteFetcher
from weather_relay.services.reports import WeatherReportService
from weather_relay.services.resilience import RetryPolicy, resilient_fetch

Outcome = dict[str, object] | Exception


@dataclass
class FakeWeatherClient(WeatherClient):
    """Fake weather source with scripted outcomes per city.

    Each call pops the next outcome for the city; the last one repeats.
    Cities without a script get ``default``.
    """

    outcomes: dict[str, list[Outcome]] = field(default_factory=dict)
    default: Outcome = field(
        default_factory=lambda: {"temperature": 12, "humidity": 60, "windSpeed": 5}
    )
    delay_seconds: float = 0
    calls: list[str] = field(default_factory=list)
    active: int = 0
    max_active: int = 0

    async def fetch_weather(self, city: str) -> dict[str, object]:
        self.calls.append(city)
        if self.delay_seconds:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            try:
                await asyncio.sleep(self.delay_seconds)
            finally:
                self.active -= 1
        script = self.outcomes.get(city)
        if script:
            outcome = script.pop(0) if len(script) > 1 else script[0]
        else:
            outcome = self.default
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def calls_for(self, city: str) -> int:
        return self.calls.count(city)


@dataclass
class ManualClock:
    """Clock advanced explicitly by tests."""

    now: float = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class CountingLoader:
    """Cache loader returning fixed values and counting calls."""

    values: dict[str, WeatherData | FetchError] = field(default_factory=dict)
    delay_seconds: float = 0
    calls: list[str] = field(default_factory=list)

    async def __call__(self, city: str) -> WeatherData:
        self.calls.append(city)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        value = self.values.get(city, WeatherData(10, 50, 3))
        if isinstance(value, FetchError):
            raise value
        return value


@pytest.fixture
def fast_policy() -> RetryPolicy:
    return RetryPolicy(
        base_delay_seconds=0.001, max_attempts=3, overall_timeout_seconds=2.0
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        weather_api_base_url="http://weather.test",
        cache_capacity=10,
        cache_ttl_seconds=60,
        retry_base_delay_seconds=0.001,
        retry_max_attempts=2,
        retry_overall_timeout_seconds=2.0,
        default_cities="London,Tokyo",
    )


@pytest.fixture
def weather_client() -> FakeWeatherClient:
    return FakeWeatherClient()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def loader() -> CountingLoader:
    return CountingLoader()


@pytest.fixture
def make_cache(
    weather_client: FakeWeatherClient, fast_policy: RetryPolicy, clock: ManualClock
) -> Callable[..., WeatherCache]:
    """Build caches backed by the fake client through the retry policy."""

    def factory(
        capacity: int = 10,
        ttl_seconds: float = 60,
        policy: RetryPolicy | None = None,
    ) -> WeatherCache:
        fetcher = RemoteFetcher(weather_client)
        loader = partial(
            resilient_fetch, fetcher.fetch_one, policy=policy or fast_policy
        )
        return WeatherCache(
            capacity=capacity, ttl_seconds=ttl_seconds, loader=loader, clock=clock
        )

    return factory


@pytest.fixture
def container(settings: Settings, weather_client: FakeWeatherClient) -> AppContainer:
    weather_cache = build_weather_cache(weather_client, settings)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        weather_client=weather_client,
        weather_cache=weather_cache,
        report_service=WeatherReportService(weather_cache),
        close_resources=close_resources,
    )
