"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_relay.services.resilience import RetryPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    weather_api_base_url: str = "http://localhost:4000"
    request_timeout_seconds: float = Field(default=15, gt=0)
    cache_capacity: int = Field(default=100, ge=1)
    cache_ttl_seconds: float = Field(default=900, gt=0)
    retry_base_delay_seconds: float = Field(default=1.0, gt=0)
    retry_max_attempts: int = Field(default=4, ge=1)
    retry_overall_timeout_seconds: float = Field(default=10.0, gt=0)
    default_cities: str = "London,New York,Tokyo,Sydney,Paris"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def retry_policy(self) -> RetryPolicy:
        """Build the retry policy described by these settings."""
        return RetryPolicy(
            base_delay_seconds=self.retry_base_delay_seconds,
            max_attempts=self.retry_max_attempts,
            overall_timeout_seconds=self.retry_overall_timeout_seconds,
        )


def parse_city_list(raw: str | None) -> list[str]:
    """Parse a comma separated list of city names."""
    if raw is None:
        return []
    cities: list[str] = []
    for chunk in raw.split(","):
        city = chunk.strip()
        if city:
            cities.append(city)
    return cities
