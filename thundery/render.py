"""
Report rendering.

A report is a seven-row pictogram with one text slot per row:
city, condition, temperature, wind, sunrise, sunset, date.

render() is pure: the caller supplies the config, the reading and "now".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Dict, Optional, Tuple

from colorama import Fore, Style

from .schemas import Config, WeatherReading


class Condition(Enum):
    """Provider condition labels that have their own pictogram."""
    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    SNOW = "Snow"
    THUNDERSTORM = "Thunderstorm"
    OTHER = None

    @classmethod
    def from_label(cls, label: str) -> "Condition":
        """Case-sensitive match on the provider's weather[0].main."""
        try:
            return cls(label)
        except ValueError:
            return cls.OTHER


class Role(Enum):
    CITY = "city"
    CONDITION = "condition"
    TEMPERATURE = "temperature"
    WIND = "wind"
    SUNRISE = "sunrise"
    SUNSET = "sunset"
    DATE = "date"


_ROLE_STYLES: Dict[Role, str] = {
    Role.CITY: Style.BRIGHT + Fore.GREEN,
    Role.CONDITION: Style.BRIGHT,
    Role.TEMPERATURE: Fore.RED,
    Role.WIND: Fore.CYAN,
    Role.SUNRISE: Fore.YELLOW,
    Role.SUNSET: Fore.BLUE,
    Role.DATE: Fore.WHITE,
}


def style(text: str, role: Role, enabled: bool, hue: str = "") -> str:
    """
    ANSI-style one field. Disabled colors or empty text come back unchanged.

    hue is layered on top of the role style (used for the condition word).
    """
    if not enabled or not text:
        return text
    return f"{_ROLE_STYLES[role]}{hue}{text}{Style.RESET_ALL}"


@dataclass(frozen=True)
class Pictogram:
    # seven art prefixes, one per slot row
    art: Tuple[str, ...]
    # fixed condition word; None shows the provider label instead
    word: Optional[str]
    hue: str


_CLOUD_TOP = (
    "               ",
    "     .--.      ",
    "  .-(    ).    ",
    " (___.__)__)   ",
)
_PAD = " " * 15

PICTOGRAMS: Dict[Condition, Pictogram] = {
    Condition.CLEAR: Pictogram(
        art=(
            "             ",
            "   \\   /     ",
            "    .-.      ",
            " ‒ (   ) ‒   ",
            "    ʻ-ʻ      ",
            "   /   \\     ",
            "             ",
        ),
        word="clear",
        hue=Fore.YELLOW,
    ),
    Condition.CLOUDS: Pictogram(art=_CLOUD_TOP + (_PAD, _PAD, _PAD), word="cloudy", hue=Fore.MAGENTA),
    Condition.RAIN: Pictogram(
        art=_CLOUD_TOP + ("  ʻ‚ʻ‚ʻ‚ʻ‚ʻ    ", _PAD, _PAD),
        word="rainy",
        hue=Fore.BLUE,
    ),
    Condition.SNOW: Pictogram(
        art=_CLOUD_TOP + ("   * * * *     ", "  * * * *      ", _PAD),
        word="snowy",
        hue=Fore.MAGENTA,
    ),
    Condition.THUNDERSTORM: Pictogram(
        art=_CLOUD_TOP + ("    /_  /_     ", "     /  /      ", _PAD),
        word="thundery",
        hue=Fore.BLACK,
    ),
    Condition.OTHER: Pictogram(art=_CLOUD_TOP + (_PAD, _PAD, _PAD), word=None, hue=Fore.RED),
}


def unit_labels(units: str) -> Tuple[str, str]:
    """
    (wind unit, temperature suffix) for the configured units.

    Anything but metric/imperial gets the Kelvin label; the provider value is
    shown as received, not converted.
    """
    if units == "metric":
        return "m/s", "°C"
    if units == "imperial":
        return "mph", "°F"
    return "m/s", "K"


def format_clock(timestamp: int, hour_offset: int, timeformat: str) -> str:
    """UTC time of a Unix timestamp, shifted by hour_offset, as 12h or 24h clock."""
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc) + timedelta(hours=hour_offset)
    return moment.strftime("%I:%M %p" if timeformat == "12" else "%H:%M")


def render(config: Config, reading: WeatherReading, now: datetime) -> str:
    """Build the full report text for one reading."""
    wind_unit, temp_unit = unit_labels(config.units)
    pictogram = PICTOGRAMS[Condition.from_label(reading.condition)]
    word = pictogram.word if pictogram.word is not None else reading.condition
    colors = config.use_colors
    offset = config.hour_offset

    city = f"City: {config.city}" if config.showcityname else ""
    date = f"Date: {now.strftime('%x')}" if config.showdate else ""

    slots = (
        style(city, Role.CITY, colors),
        style(f"Weather: {word}", Role.CONDITION, colors, hue=pictogram.hue),
        style(f"Temperature: {reading.temperature:.1f}{temp_unit}", Role.TEMPERATURE, colors),
        style(f"Wind speed: {reading.wind_speed:.1f} {wind_unit}", Role.WIND, colors),
        style(f"Sunrise: {format_clock(reading.sunrise, offset, config.timeformat)}", Role.SUNRISE, colors),
        style(f"Sunset: {format_clock(reading.sunset, offset, config.timeformat)}", Role.SUNSET, colors),
        style(date, Role.DATE, colors),
    )
    return "\n".join(art + slot for art, slot in zip(pictogram.art, slots))
