"""ASGI entrypoints for the weather relay and the mock weather source."""

from weather_relay.api.app import create_app
from weather_relay.api.mock_weather import create_mock_weather_app
from weather_relay.containers import build_container

app = create_app(build_container())
mock_weather_app = create_mock_weather_app()
