"""Human-readable weather reports built on the weather cache."""

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from weather_relay.domain.errors import FetchError
from weather_relay.services.cache import WeatherCache

BATCH_ERROR_TEXT = "Error fetching data"

_logger = logging.getLogger(__name__)


@dataclass
class WeatherReportService:
    """Formats cached weather lookups into report strings."""

    cache: WeatherCache

    async def get_many(self, cities: Iterable[str]) -> str:
        """Return a comma separated report for all cities, in input order."""
        return ", ".join(await self.report_lines(cities))

    async def report_lines(self, cities: Iterable[str]) -> list[str]:
        """Fetch all cities concurrently and return one line per city."""
        return list(await asyncio.gather(*(self._line(city) for city in cities)))

    async def get_report(self, city: str) -> str:
        """Return a descriptive sentence about one city's weather."""
        try:
            data = await self.cache.get(city)
        except Exception as exc:
            error = FetchError.coerce(exc)
            return f"Failed to fetch weather data: {error.message}"
        return (
            f"The temperature in {city} is {data.temperature}°C with "
            f"{data.humidity}% humidity and {data.wind_speed}m/s wind speed."
        )

    async def _line(self, city: str) -> str:
        try:
            data = await self.cache.get(city)
        except Exception as exc:
            _logger.warning("Weather report for %s failed: %r", city, exc)
            return f"{city}: {BATCH_ERROR_TEXT}"
        return f"{city}: {data.temperature}°C"
