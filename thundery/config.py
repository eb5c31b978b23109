"""
Config file handling.

The config file drifts: hand edits, typos, new keys after an upgrade. So the
loader never refuses to run on a bad file. It falls back per field to the
built-in default and rewrites the file so the next run reads cleanly.

The only failures that escape are filesystem ones (ConfigError).
"""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, TextIO

import tomli_w
from pydantic import ValidationError

from .schemas import CONFIG_FIELDS, Config
from .settings import get_settings

logger = logging.getLogger(__name__)

APP_DIR = "thundery"
CONFIG_FILENAME = "thundery.toml"


class ConfigError(RuntimeError):
    """Raised when the config file or its directory cannot be reached."""
    pass


class ConfigStore(Protocol):
    """Where the config text lives. The real one is a file; tests use memory."""

    location: str

    def exists(self) -> bool: ...

    def read(self) -> str: ...

    def write(self, text: str) -> None: ...


class FileConfigStore:
    """Config text stored in a file, parent directories created on write."""

    def __init__(self, path: Path):
        self.path = path
        self.location = str(path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self.path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ConfigError(f"Config file {self.path} is not valid UTF-8: {e}") from e

    def write(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Failed to create config directory {self.path.parent}: {e}") from e
        try:
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to write config file {self.path}: {e}") from e


def resolve_config_path() -> Path:
    """
    Platform location of thundery.toml.

    Windows: %APPDATA%\\thundery\\thundery.toml
    Others:  ~/.config/thundery/thundery.toml

    THUNDERY_CONFIG_PATH wins over both.
    """
    override = get_settings().config_path
    if override is not None:
        return override

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigError("Failed to get config directory: APPDATA is not set")
        return Path(appdata) / APP_DIR / CONFIG_FILENAME

    try:
        home = Path.home()
    except RuntimeError as e:
        raise ConfigError(f"Failed to get home directory: {e}") from e
    return home / ".config" / APP_DIR / CONFIG_FILENAME


def dump_config(config: Config) -> str:
    return tomli_w.dumps(config.model_dump())


def merge_with_defaults(document: Dict[str, Any]) -> Config:
    """
    Overlay the well-typed known keys of a loose TOML table onto the defaults.

    Unknown keys and values of the wrong type are dropped without complaint.
    """
    values: Dict[str, Any] = {}
    fallbacks: List[str] = []
    for field in CONFIG_FIELDS:
        value = document.get(field.name)
        if field.accepts(value):
            values[field.name] = value
        else:
            values[field.name] = field.default
            fallbacks.append(field.name)

    if fallbacks:
        logger.debug("Config keys using defaults: %s", ", ".join(fallbacks))
    return Config(**values)


def load_config(store: Optional[ConfigStore] = None, stdout: Optional[TextIO] = None) -> Config:
    """
    Load the user config, creating or repairing the file as needed.

    - missing file: write the defaults, say where, then read them back
    - complete file: returned as is, nothing written
    - partial or mistyped file: merged onto defaults and rewritten
    - not TOML at all: defaults returned, file left alone

    The first-run notice goes to stdout (sys.stdout when not given).
    """
    if store is None:
        store = FileConfigStore(resolve_config_path())
    logger.debug("Using config at %s", store.location)

    if not store.exists():
        store.write(dump_config(Config.default()))
        print(f"No config detected, config made at {store.location}.", file=stdout or sys.stdout)

    content = store.read()

    try:
        document = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        logger.warning("Config file %s is not valid TOML (%s); using defaults", store.location, e)
        return Config.default()

    try:
        return Config.model_validate(document)
    except ValidationError as e:
        logger.debug("Config file %s incomplete (%d problems), merging with defaults",
                     store.location, e.error_count())

    merged = merge_with_defaults(document)
    store.write(dump_config(merged))
    logger.debug("Rewrote config file %s with merged values", store.location)
    return merged
