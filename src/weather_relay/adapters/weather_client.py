"""Remote weather source client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class WeatherClient(Protocol):
    """Interface for the remote weather source."""

    async def fetch_weather(self, city: str) -> dict[str, object]:
        """Fetch raw weather data for a city.

        Non-success responses raise ``httpx.HTTPStatusError``; transport
        failures raise ``httpx.TransportError``.
        """


@dataclass
class HttpxWeatherClient(WeatherClient):
    """HTTPX-backed weather source client."""

    base_url: str
    http_client: httpx.AsyncClient
    request_timeout_seconds: float = 15

    @classmethod
    def create(
        cls, base_url: str, request_timeout_seconds: float = 15
    ) -> "HttpxWeatherClient":
        """Create a weather client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            request_timeout_seconds=request_timeout_seconds,
        )

    async def fetch_weather(self, city: str) -> dict[str, object]:
        """Fetch current weather for a city."""
        url = f"{self.base_url.rstrip('/')}/weather"
        response = await self.http_client.get(
            url,
            params={"city": city},
            timeout=self.request_timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
