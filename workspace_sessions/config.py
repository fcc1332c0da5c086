"""Config loading/saving and session paths.

The package configuration lives in ``~/.config/workspace-sessions/config.json``;
sessions are stored as ``<name>.json`` files under the data directory.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import dacite

from .exceptions import (
    ConfigLoadError,
    ConfigSaveError,
    ConfigValidationError,
    record_error,
)
from .models import SessionsConfig, model_from_dict, model_to_dict

logger = logging.getLogger(__name__)

# Configuration file locations
CONFIG_DIR = Path.home() / ".config" / "workspace-sessions"
CONFIG_PATH = CONFIG_DIR / "config.json"
DATA_DIR = Path(
    os.environ.get(
        "WORKSPACE_SESSIONS_DATA_DIR",
        Path.home() / ".local" / "share" / "workspace-sessions",
    )
)
SESSION_EXTENSION = ".json"


def load_config(path: Path | None = None) -> SessionsConfig:
    """
    Load the package configuration.

    Args:
        path: Config file to read (defaults to CONFIG_PATH).

    Returns:
        SessionsConfig from the file, or defaults if the file does not exist.

    Raises:
        ConfigLoadError: If the config file exists but cannot be parsed.
        ConfigValidationError: If the config does not match the schema.
    """
    path = path or CONFIG_PATH
    if not path.exists():
        logger.debug("No config found at %s, using defaults", path)
        return SessionsConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("Loaded config from %s", path)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            f"Invalid JSON in config file at line {e.lineno}",
            file_path=str(path),
            context={"line": e.lineno, "column": e.colno},
            cause=e,
        ) from e
    except OSError as e:
        logger.error("Failed to read config file: %s", e)
        record_error(e)
        raise ConfigLoadError(
            "Failed to read config file",
            file_path=str(path),
            cause=e,
        ) from e

    try:
        return model_from_dict(SessionsConfig, data)
    except (dacite.DaciteError, TypeError) as e:
        logger.error("Config schema validation failed: %s", e)
        record_error(e)
        raise ConfigValidationError(
            f"Config schema validation failed: {e}",
            context={"file_path": str(path)},
            cause=e,
        ) from e


def save_config(config: SessionsConfig, path: Path | None = None) -> None:
    """
    Save the package configuration, creating the directory if needed.

    Raises:
        ConfigSaveError: If the config cannot be saved.
    """
    path = path or CONFIG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(model_to_dict(config), f, indent=2)
        logger.debug("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to write config file: %s", e)
        record_error(e)
        raise ConfigSaveError(
            "Failed to write config file",
            file_path=str(path),
            cause=e,
        ) from e
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize config to JSON: %s", e)
        record_error(e)
        raise ConfigSaveError(
            "Failed to serialize config to JSON",
            file_path=str(path),
            cause=e,
        ) from e


def get_config_path() -> Path:
    """Return the path to the config file."""
    return CONFIG_PATH


def get_session_dir(dirname: str | None = None, config: SessionsConfig | None = None) -> Path:
    """Return the directory holding session files.

    Args:
        dirname: Directory name under the data dir, or an absolute path.
            Defaults to ``config.dir``.
        config: Configuration supplying the default directory name.
    """
    dirname = dirname or (config or SessionsConfig()).dir
    path = Path(dirname).expanduser()
    if path.is_absolute():
        return path
    return DATA_DIR / path


def get_session_file(
    name: str, dirname: str | None = None, config: SessionsConfig | None = None
) -> Path:
    """Return the file backing a named session.

    Path separators and colons in the name are replaced with underscores.
    """
    filename = name.replace("/", "_").replace("\\", "_").replace(":", "_")
    return get_session_dir(dirname, config) / f"{filename}{SESSION_EXTENSION}"
