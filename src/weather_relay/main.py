"""Print a multi-city weather report."""

import asyncio

from weather_relay.app_logging import configure_logging
from weather_relay.config import Settings, parse_city_list
from weather_relay.containers import AppContainer, build_container


async def run_report(container: AppContainer, cities: list[str]) -> str:
    """Build the report and release container resources."""
    try:
        return await container.report_service.get_many(cities)
    finally:
        await container.close_resources()


def main(container: AppContainer | None = None) -> None:
    """Fetch the configured default cities and print the report."""
    configure_logging()
    resolved = container or build_container(Settings())
    cities = parse_city_list(resolved.settings.default_cities)
    print(asyncio.run(run_report(resolved, cities)))


if __name__ == "__main__":
    main()
