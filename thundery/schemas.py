"""
Data shapes.

- Config: the persisted user settings (pydantic, strict)
- CONFIG_FIELDS: the field table used when merging a partial file onto defaults
- WeatherReading: the handful of values we pull out of a provider payload
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Type

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class ConfigField:
    """One config key: its name, the exact TOML value type it takes, and its default."""
    name: str
    kind: Type
    default: Any

    def accepts(self, value: Any) -> bool:
        # exact type match: TOML booleans must not count as integers
        return type(value) is self.kind


# On-disk key order follows this table.
CONFIG_FIELDS: Tuple[ConfigField, ...] = (
    ConfigField("api_key", str, ""),
    ConfigField("city", str, ""),
    ConfigField("units", str, "metric"),
    ConfigField("timeplus", int, 0),
    ConfigField("timeminus", int, 0),
    ConfigField("showcityname", bool, False),
    ConfigField("showdate", bool, False),
    ConfigField("timeformat", str, "24"),
    ConfigField("use_colors", bool, False),
)


class Config(BaseModel):
    """
    User settings read from thundery.toml.

    Every field is required and strictly typed, so validating a document
    against this model doubles as the "is this file complete?" check.
    Unknown keys are ignored.
    """
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)

    api_key: str
    city: str
    units: str
    timeplus: int
    timeminus: int
    showcityname: bool
    showdate: bool
    timeformat: str
    use_colors: bool

    @classmethod
    def default(cls) -> "Config":
        return cls(**{f.name: f.default for f in CONFIG_FIELDS})

    @property
    def hour_offset(self) -> int:
        return self.timeplus - self.timeminus


def _lookup(data: Any, *path: Any) -> Any:
    """Walk dicts/lists by key or index; None as soon as anything is missing."""
    node = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return None
        elif not isinstance(node, dict) or step not in node:
            return None
        node = node[step]
    return node


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions for one city, in whatever units the provider used."""
    condition: str
    temperature: float
    wind_speed: float
    sunrise: int
    sunset: int

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "WeatherReading":
        """
        Extract the reading from an OpenWeather /data/2.5/weather body.

        Each value falls back on its own when missing or of the wrong type,
        so a sparse payload still renders.
        """
        condition = _lookup(payload, "weather", 0, "main")
        return cls(
            condition=condition if isinstance(condition, str) else "Unknown",
            temperature=_as_float(_lookup(payload, "main", "temp"), 0.0),
            wind_speed=_as_float(_lookup(payload, "wind", "speed"), 0.0),
            sunrise=_as_int(_lookup(payload, "sys", "sunrise"), 0),
            sunset=_as_int(_lookup(payload, "sys", "sunset"), 0),
        )
