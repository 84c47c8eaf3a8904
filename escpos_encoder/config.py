"""
Configuration defaults, loading and validation.

Configuration is a flat JSON object. Keys missing from the file keep their
defaults; unknown keys are kept and ignored by the encoder.

Keys:
    - paper_width: int - Characters per line on the default font (42 for 80 mm paper)
    - substitute_char: str - Single ASCII character printed for unmappable text
    - max_raster_band_height: int - Rows per GS v 0 command (1-65535)
    - log_level: str - DEBUG, INFO, WARNING, ERROR or CRITICAL; a file that sets it
      changes the package logger level when loaded
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional, Union

from escpos_encoder.exceptions import InvalidOption, InvalidRange

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_CONFIG", "CONFIG_FILENAME", "load_config", "check_config", "merge_config"]

CONFIG_FILENAME: Final[str] = "escpos_encoder.json"

_PACKAGE_LOGGER: Final[str] = "escpos_encoder"

DEFAULT_CONFIG: Final[Mapping[str, Any]] = {
    "paper_width": 42,
    "substitute_char": "?",
    "max_raster_band_height": 255,
    "log_level": "INFO",
}

_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _positive_int(config: Mapping[str, Any], key: str, upper: int) -> None:
    value = config[key]
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= upper:
        raise InvalidRange(f"Config {key} must be an integer 1-{upper}, got {value!r}", value)


def check_config(config: Mapping[str, Any]) -> None:
    """
    Validate the known configuration keys.

    Raises:
        InvalidRange: If a numeric value is out of range.
        InvalidOption: If substitute_char or log_level is not allowed.
    """
    _positive_int(config, "paper_width", 0xFFFF)
    _positive_int(config, "max_raster_band_height", 0xFFFF)
    substitute = config["substitute_char"]
    if not isinstance(substitute, str) or len(substitute) != 1 or ord(substitute) > 0x7F:
        raise InvalidOption(
            f"Config substitute_char must be one ASCII character, got {substitute!r}", substitute
        )
    level = config["log_level"]
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        raise InvalidOption(
            f"Config log_level must be one of {', '.join(sorted(_LOG_LEVELS))}, got {level!r}",
            level,
        )


def merge_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Defaults updated with ``overrides``, validated."""
    config = dict(DEFAULT_CONFIG)
    if overrides:
        config.update(overrides)
    check_config(config)
    return config


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file or fall back to the defaults.

    A missing file, invalid JSON, a non-object document or out-of-range
    values log a warning and yield the defaults. A valid file that sets
    ``log_level`` applies it to the ``escpos_encoder`` logger.

    Args:
        config_path: Path to the JSON file. If None, looks for
                     'escpos_encoder.json' in the current directory.

    Returns:
        A dict holding every default key, with file values overriding them.

    Example:
        >>> config = load_config()
        >>> config["paper_width"]
        42
    """
    path = Path(config_path) if config_path is not None else Path(CONFIG_FILENAME)
    config = dict(DEFAULT_CONFIG)

    if not path.exists():
        logger.info("Config file %s not found; using defaults", path)
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
        if not isinstance(user_config, dict):
            raise ValueError(f"config must be a JSON object, got {type(user_config).__name__}")
        candidate = dict(config)
        candidate.update(user_config)
        check_config(candidate)
    except json.JSONDecodeError as e:
        logger.warning(
            "Could not parse %s: invalid JSON at line %d, column %d; using defaults",
            path,
            e.lineno,
            e.colno,
        )
        return config
    except OSError as e:
        logger.warning("Could not read %s: %s; using defaults", path, e)
        return config
    except ValueError as e:
        logger.warning("Invalid configuration in %s: %s; using defaults", path, e)
        return config

    if "log_level" in user_config:
        level = candidate["log_level"].upper()
        logging.getLogger(_PACKAGE_LOGGER).setLevel(level)
        logger.debug("Package log level set to %s", level)

    logger.info("Configuration loaded from %s", path)
    logger.debug("Configuration: %s", candidate)
    return candidate
