"""Reading and writing the chorething config file."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable

from chorething.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "chore_thing"
CONFIG_FILE_NAME = "config.json"


@dataclass
class Config:
    """Settings re-read at the start of every polling cycle."""

    grocy_url: str = "http://localhost:8080/api"
    api_key: str = "your-api-key-here"
    username: str = "andersmmg"
    check_timeout: int = 1  # Minutes between automatic checks


def default_config_path() -> Path:
    """~/.config/chore_thing/config.json"""
    return Path.home() / ".config" / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def save_config(config: Config, path: Path | None = None) -> None:
    """Write config as indented JSON, creating the directory if needed."""
    path = path or default_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(config), indent=2))
    except OSError as e:
        raise ConfigError(f"failed to write config file {path}: {e}") from e


def _fill_defaults(raw: dict) -> tuple[Config, bool]:
    """Build a Config from parsed JSON, replacing missing or invalid fields."""
    defaults = Config()
    config = Config()
    updated = False

    for name in ("grocy_url", "api_key", "username"):
        value = raw.get(name)
        if isinstance(value, str) and value:
            setattr(config, name, value)
        else:
            setattr(config, name, getattr(defaults, name))
            updated = True

    timeout = raw.get("check_timeout")
    if isinstance(timeout, int) and not isinstance(timeout, bool) and timeout > 0:
        config.check_timeout = timeout
    else:
        config.check_timeout = defaults.check_timeout
        updated = True

    return config, updated


def load_config(
    path: Path | None = None,
    on_created: Callable[[Path], None] | None = None,
) -> Config:
    """
    Load the config file.

    A missing file is created with default values and ``on_created`` is
    called with its path. Missing or invalid fields are filled with
    defaults and the file is re-saved.

    Raises:
        ConfigError: If the file cannot be read or parsed, or a new default
            file cannot be written.
    """
    path = path or default_config_path()

    if not path.exists():
        config = Config()
        save_config(config, path)
        logger.warning("Created default config at %s. Please edit it with your actual values.", path)
        if on_created is not None:
            on_created(path)
        return config

    try:
        raw = json.loads(path.read_text())
    except OSError as e:
        raise ConfigError(f"failed to read config file {path}: {e}") from e
    except ValueError as e:
        raise ConfigError(f"failed to parse config file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"failed to parse config file {path}: expected a JSON object")

    config, updated = _fill_defaults(raw)

    if updated:
        try:
            save_config(config, path)
        except ConfigError as e:
            logger.warning("Failed to save updated config: %s", e)
        else:
            logger.info("Updated config with default values for missing fields")

    return config
