"""Mock remote weather source with random failures."""

import random

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse


def generate_weather_data(rng: random.Random) -> dict[str, int]:
    """Generate random weather values."""
    return {
        "temperature": round(rng.random() * 40 - 10),
        "humidity": round(rng.random() * 100),
        "windSpeed": round(rng.random() * 50),
    }


def create_mock_weather_app(
    failure_rate: float = 0.5, rng: random.Random | None = None
) -> FastAPI:
    """Create a weather source that fails ``failure_rate`` of requests with 500.

    Weather for a city is generated on first request and reused afterwards.
    """
    resolved_rng = rng or random.Random()
    city_weather: dict[str, dict[str, int]] = {}

    app = FastAPI()
    app.state.city_weather = city_weather

    @app.get("/", response_class=PlainTextResponse)
    async def welcome() -> str:
        """Greeting for the mock source root."""
        return "Welcome to the Weather API!"

    @app.get("/weather", response_model=None)
    async def weather(request: Request) -> JSONResponse | PlainTextResponse:
        """Return memoized weather for a city, failing at random."""
        if resolved_rng.random() < failure_rate:
            return PlainTextResponse("Internal Server Error", status_code=500)
        city = request.query_params.get("city")
        if not city:
            return PlainTextResponse(
                "Please provide a city parameter", status_code=400
            )
        if city not in city_weather:
            city_weather[city] = generate_weather_data(resolved_rng)
        return JSONResponse(city_weather[city])

    return app
