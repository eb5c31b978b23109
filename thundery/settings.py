from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Operational settings for the tool itself.

    The user-facing settings (city, units, ...) live in the TOML config file.
    These knobs only exist so the tool can be pointed elsewhere without
    touching that file.

    Loaded from environment variables prefixed with THUNDERY_ only; no .env
    file is read, since the tool runs from arbitrary directories.
    """
    model_config = SettingsConfigDict(env_prefix="THUNDERY_", extra="ignore")

    # Overrides the platform config path when set
    config_path: Optional[Path] = None

    api_base: str = "https://api.openweathermap.org"

    # Same value httpx uses when no timeout is given
    http_timeout_s: float = 5.0

    log_level: str = "WARNING"


def get_settings() -> Settings:
    """Read settings fresh from the environment."""
    return Settings()
