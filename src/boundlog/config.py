"""TOML configuration loading from ~/.boundlog/config.toml."""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import ValidationError

from boundlog.exceptions import ConfigError
from boundlog.logger import log
from boundlog.models.config import LoggerConfig

CONFIG_DIR = Path.home() / ".boundlog"
CONFIG_FILE = CONFIG_DIR / "config.toml"
CONFIG_SECTION = "logger"


def load_config(path: str | Path | None = None) -> LoggerConfig:
    """Load the ``[logger]`` table from a TOML file, using defaults if the file is missing or unreadable.

    Values that are present but invalid raise ConfigError.
    """
    config_file = Path(path) if path else CONFIG_FILE
    if not config_file.exists():
        log.debug("No config file at %s, using defaults", config_file)
        return LoggerConfig()

    try:
        raw = toml.loads(config_file.read_text(encoding="utf-8"))
    except (OSError, toml.TomlDecodeError) as e:
        log.warning("Failed to read config %s, using defaults: %s", config_file, e)
        return LoggerConfig()

    log.debug("Loaded config: %s", raw)
    return _parse_raw_config(raw, config_file)


def _parse_raw_config(raw: dict, source: Path) -> LoggerConfig:
    """Parse a raw TOML dict into LoggerConfig."""
    section = raw.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] in {source} must be a table")
    try:
        return LoggerConfig(**section)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def save_config(config: LoggerConfig, path: str | Path | None = None) -> Path:
    """Write the configuration back as a ``[logger]`` table."""
    config_file = Path(path) if path else CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {CONFIG_SECTION: config.model_dump(exclude_none=True)}
    config_file.write_text(toml.dumps(data), encoding="utf-8")
    log.info("Saved config to %s", config_file)
    return config_file
