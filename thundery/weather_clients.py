"""
Weather client.

Kept apart from rendering and the entry point:
- easier to test in isolation (httpx.MockTransport)
- main.py only sequences calls
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_BASE = "https://api.openweathermap.org"

FETCH_FAILED_HINT = (
    "Failed to fetch weather data: Your API key and/or city name are missing from the "
    "config file, if they aren't missing, check the spelling of your city here "
    "https://openweathermap.org/"
)


class WeatherError(RuntimeError):
    """Raised for user-facing weather lookup failures."""
    pass


class WeatherPayloadError(WeatherError):
    """Raised when the provider answers 2xx with a body that is not JSON."""
    pass


class OpenWeatherClient:
    """
    OpenWeatherMap wrapper.

    Endpoint used:
    - Current weather:
        /data/2.5/weather?q=CITY&units=UNITS&APPID=KEY

    One blocking GET per call, no retries. Any non-2xx status is reported the
    same way: the body is not inspected.
    """

    def __init__(
        self,
        api_key: str,
        timeout_s: float = 5.0,
        base: str = DEFAULT_BASE,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.base = base.rstrip("/")
        self.transport = transport

    def current_weather_url(self, city: str, units: str) -> str:
        # values go in verbatim, httpx does its default encoding only
        return f"{self.base}/data/2.5/weather?q={city}&units={units}&APPID={self.api_key}"

    def current_weather(self, city: str, units: str) -> Dict[str, Any]:
        """
        Retrieves current weather conditions for a city name.
        """
        url = self.current_weather_url(city, units)
        logger.debug("GET %s/data/2.5/weather?q=%s&units=%s&APPID=***", self.base, city, units)

        with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
            r = client.get(url)

        logger.debug("Weather API answered %s", r.status_code)
        if not r.is_success:
            raise WeatherError(FETCH_FAILED_HINT)

        try:
            return r.json()
        except ValueError as e:
            raise WeatherPayloadError(f"Failed to parse weather response as JSON: {e}") from e


def client_from_settings(api_key: str) -> OpenWeatherClient:
    """Client pointed at the configured base URL, with the configured timeout."""
    settings = get_settings()
    return OpenWeatherClient(api_key, timeout_s=settings.http_timeout_s, base=settings.api_base)


def fetch_weather(city: str, units: str, api_key: str) -> Dict[str, Any]:
    """Current weather for one city, using the runtime settings for base URL and timeout."""
    return client_from_settings(api_key).current_weather(city, units)
