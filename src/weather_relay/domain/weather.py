"""Weather domain models."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class WeatherPayload(BaseModel):
    """Weather payload returned by the remote source."""

    model_config = ConfigDict(allow_inf_nan=False)

    temperature: float
    humidity: float = Field(ge=0, le=100)
    wind_speed: float = Field(alias="windSpeed", ge=0)


@dataclass(frozen=True)
class WeatherData:
    """Current weather conditions for a city."""

    temperature: int
    humidity: int
    wind_speed: int

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "WeatherData":
        """Build weather data from a raw remote payload.

        Raises ``pydantic.ValidationError`` when fields are missing or out of range.
        """
        parsed = WeatherPayload.model_validate(payload)
        return cls(
            temperature=round(parsed.temperature),
            humidity=round(parsed.humidity),
            wind_speed=round(parsed.wind_speed),
        )

    def to_payload(self) -> dict[str, int]:
        """Return the wire representation used by the remote source."""
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
        }
