"""
Shared pytest fixtures: in-memory config store, canned payloads, mocked HTTP.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from thundery.schemas import Config
from thundery.weather_clients import OpenWeatherClient


class MemoryConfigStore:
    """ConfigStore kept in a string; counts writes so tests can spot rewrites."""

    def __init__(self, text: Optional[str] = None):
        self.text = text
        self.writes: List[str] = []
        self.location = "memory://thundery.toml"

    def exists(self) -> bool:
        return self.text is not None

    def read(self) -> str:
        assert self.text is not None
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.writes.append(text)


COMPLETE_TOML = """\
api_key = "abc123"
city = "Testville"
units = "imperial"
timeplus = 3
timeminus = 1
showcityname = true
showdate = true
timeformat = "12"
use_colors = true
"""


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real home directory, .env files and THUNDERY_ vars."""
    for name in ("THUNDERY_CONFIG_PATH", "THUNDERY_API_BASE", "THUNDERY_HTTP_TIMEOUT_S", "THUNDERY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def memory_store() -> Callable[[Optional[str]], MemoryConfigStore]:
    return MemoryConfigStore


@pytest.fixture
def make_config() -> Callable[..., Config]:
    def _make(**overrides: Any) -> Config:
        return Config(**{**Config.default().model_dump(), **overrides})
    return _make


@pytest.fixture
def rain_payload() -> Dict[str, Any]:
    return {
        "weather": [{"main": "Rain"}],
        "main": {"temp": 15.5},
        "wind": {"speed": 4.2},
        "sys": {"sunrise": 1700000000, "sunset": 1700040000},
    }


@pytest.fixture
def mock_client() -> Callable[..., OpenWeatherClient]:
    """Build an OpenWeatherClient whose requests go to a handler instead of the network."""
    def _make(handler: Callable[[httpx.Request], httpx.Response], api_key: str = "abc123") -> OpenWeatherClient:
        return OpenWeatherClient(api_key, transport=httpx.MockTransport(handler))
    return _make
