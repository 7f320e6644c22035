"""Single-attempt weather fetcher mapping raw failures to typed errors."""

import logging
from dataclasses import dataclass

import httpx

from weather_relay.adapters.weather_client import WeatherClient
from weather_relay.domain.errors import (
    UNKNOWN_ERROR_MESSAGE,
    ApiError,
    FetchError,
    NetworkError,
)
from weather_relay.domain.weather import WeatherData

# Upstream answered 2xx with a body that is not a weather payload.
INVALID_PAYLOAD_STATUS = 502

_logger = logging.getLogger(__name__)


@dataclass
class RemoteFetcher:
    """Performs exactly one request per call; no retries, no deadline."""

    client: WeatherClient

    async def fetch_one(self, city: str) -> WeatherData:
        """Fetch weather for a city, raising a ``FetchError`` on failure."""
        try:
            payload = await self.client.fetch_weather(city)
            return WeatherData.from_payload(payload)
        except FetchError:
            raise
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise ApiError(status_code, f"HTTP error! status: {status_code}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(_describe_transport_error(exc)) from exc
        except ValueError as exc:
            raise ApiError(
                INVALID_PAYLOAD_STATUS, f"Invalid weather payload for {city}"
            ) from exc
        except Exception as exc:
            _logger.exception("Unexpected failure fetching weather for %s", city)
            raise NetworkError(UNKNOWN_ERROR_MESSAGE) from exc


def _describe_transport_error(exc: httpx.TransportError) -> str:
    """Describe a transport failure, falling back to its type name."""
    detail = str(exc)
    if detail:
        return detail
    return type(exc).__name__
