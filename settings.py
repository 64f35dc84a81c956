"""
Layered settings for roamdeps.

Defaults are overridden by a config file, then by environment
variables, then by command-line flags.
"""

import json
import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from errors import ConfigError
from roam.discovery import DB_ENV_VAR

LOG_LEVEL_ENV_VAR = "ROAMDEPS_LOG_LEVEL"
CONFIG_NAMES = ("config.yaml", "config.yml", "config.toml", "config.json")

FORMATS = ("list", "json", "tree")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Effective settings for one run."""

    roam_db: Optional[str] = None
    exclude_unchanged: bool = False
    show_all: bool = False
    format: str = "list"
    log_level: str = "WARNING"

    def merged(self, overrides: Dict[str, Any]) -> "Settings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def default_config_path() -> Optional[Path]:
    """Return the first existing config file in the user config dir."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    config_dir = Path(config_home) / "roamdeps"
    for name in CONFIG_NAMES:
        candidate = config_dir / name
        if candidate.is_file():
            return candidate
    return None


def parse_config_file(file_path: Path) -> Dict[str, Any]:
    """
    Parse a config file, choosing the format by suffix.

    Args:
        file_path: Path to a YAML, TOML or JSON file.

    Returns:
        The top-level mapping (empty for an empty file).

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    suffix = file_path.suffix.lower()

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {file_path}: {e}") from e

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            raise ConfigError(f"Unsupported config file type: {file_path}")
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Invalid config file {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {file_path} must contain a mapping")
    return data


def _validate(data: Dict[str, Any], source: str) -> Dict[str, Any]:
    known = {f.name: f for f in fields(Settings)}
    for key, value in data.items():
        if key not in known:
            raise ConfigError(f"Unknown setting '{key}' in {source}")
        if known[key].type is bool and not isinstance(value, bool):
            raise ConfigError(f"Setting '{key}' in {source} must be true or false")
    if data.get("format", "list") not in FORMATS:
        raise ConfigError(f"Setting 'format' in {source} must be one of {', '.join(FORMATS)}")
    if "log_level" in data:
        level = data["log_level"]
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Setting 'log_level' in {source} must be one of {', '.join(LOG_LEVELS)}"
            )
        data["log_level"] = level.upper()
    if "roam_db" in data and data["roam_db"] is not None:
        data["roam_db"] = str(data["roam_db"])
    return data


def load_settings(
    config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """
    Build the effective settings.

    Args:
        config_path: Explicit config file; when None the user config
                     directory is searched.
        cli_overrides: Values from the command line (None means unset).

    Returns:
        Settings with all layers applied.
    """
    settings = Settings()

    if config_path is None:
        config_path = default_config_path()
    if config_path is not None:
        data = _validate(parse_config_file(Path(config_path)), str(config_path))
        settings = settings.merged(data)

    settings = settings.merged({
        "roam_db": os.environ.get(DB_ENV_VAR) or None,
        "log_level": os.environ.get(LOG_LEVEL_ENV_VAR) or None,
    })

    if cli_overrides:
        settings = settings.merged(cli_overrides)

    return settings


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """
    Configure logging for a run.

    Args:
        level: Log level string (e.g. 'INFO', 'DEBUG').

    Returns:
        The root roamdeps logger.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s  %(name)-20s  %(levelname)-7s  %(message)s",
    )
    return logging.getLogger("roamdeps")
