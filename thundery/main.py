"""
Command-line entrypoint.

This file focuses on:
- logging setup
- sequencing config -> request -> extraction -> report
- turning fatal errors into one log line and a nonzero exit
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Callable, Optional, TextIO

import httpx

from .config import ConfigError, ConfigStore, load_config
from .render import render
from .schemas import Config, WeatherReading
from .settings import get_settings
from .weather_clients import OpenWeatherClient, WeatherError, WeatherPayloadError, client_from_settings

logger = logging.getLogger("thundery")

ClientFactory = Callable[[Config], OpenWeatherClient]


def default_client(config: Config) -> OpenWeatherClient:
    return client_from_settings(config.api_key)


def run(
    store: Optional[ConfigStore] = None,
    client_factory: Optional[ClientFactory] = None,
    now: Optional[datetime] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """
    One full invocation: load config, fetch, print the report.

    A non-2xx answer prints the hint to stderr and nothing to stdout. Fatal
    errors (ConfigError, WeatherPayloadError, httpx.RequestError,
    httpx.InvalidURL) propagate.
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    client_factory = client_factory or default_client

    config = load_config(store, stdout=stdout)
    client = client_factory(config)

    try:
        payload = client.current_weather(config.city, config.units)
    except WeatherPayloadError:
        raise
    except WeatherError as e:
        print(str(e), file=stderr)
        return

    reading = WeatherReading.from_payload(payload)
    print(render(config, reading, now or datetime.now(timezone.utc)), file=stdout)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(name)s: %(levelname)s: %(message)s",
    )
    # httpx logs full request URLs, which carry the API key
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def main() -> int:
    """Console script entry. Takes no options."""
    configure_logging(get_settings().log_level)

    try:
        run()
    except (ConfigError, WeatherPayloadError) as e:
        logger.error("%s", e)
        return 1
    except (httpx.RequestError, httpx.InvalidURL) as e:
        logger.error("Failed to send request: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
