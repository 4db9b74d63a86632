"""cadence_lite.config_loader

Lightweight config loader for cadence_lite.

- Reads YAML (JSON documents are valid YAML too).
- Environment variables override file values.
- Exposes a typed dataclass `Config` and a `load_config()` helper that accepts
  an optional path override.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .cadence_exceptions import ConfigError
from .timezone_utils import DEFAULT_TIMEZONE, get_default_timezone, normalize_timezone_name

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "cadence_lite" / "config.yaml"

MAX_OCCURRENCES_LIMIT = 10000


@dataclass
class Config:
    """Typed configuration for cadence_lite.

    Fields:
        default_timezone: IANA zone used when an anchor or bound has none
        default_window_years: length in years of the CLI's default query window, passed
            to ``Cadence(window_years=...)`` (>= 1)
        max_occurrences: cap on occurrences listed by the CLI (1..10000)
        log_level: logging level name
    """

    default_timezone: str = field(default_factory=get_default_timezone)
    default_window_years: int = 3
    max_occurrences: int = 500
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Numeric-like values are coerced to int and clamped into range, and an
        unresolvable timezone falls back to the default; each coercion is
        logged as a warning.
        """
        if data is None:
            data = {}

        def _coerce_int(key: str, default: int) -> int:
            raw = data.get(key, default)
            try:
                return int(raw)
            except (TypeError, ValueError):
                logger.warning("Config %s=%r is not an int; using default %d", key, raw, default)
                return default

        window_years = _coerce_int("default_window_years", 3)
        if window_years < 1:
            logger.warning("default_window_years %d below minimum; coercing to 1", window_years)
            window_years = 1

        max_occurrences = _coerce_int("max_occurrences", 500)
        if max_occurrences < 1:
            logger.warning("max_occurrences %d below minimum; coercing to 1", max_occurrences)
            max_occurrences = 1
        elif max_occurrences > MAX_OCCURRENCES_LIMIT:
            logger.warning(
                "max_occurrences %d above maximum; coercing to %d",
                max_occurrences,
                MAX_OCCURRENCES_LIMIT,
            )
            max_occurrences = MAX_OCCURRENCES_LIMIT

        raw_tz = data.get("default_timezone")
        timezone = get_default_timezone() if raw_tz is None else normalize_timezone_name(str(raw_tz))
        if timezone is None:
            logger.warning("default_timezone %r not recognized; using %s", raw_tz, DEFAULT_TIMEZONE)
            timezone = DEFAULT_TIMEZONE

        log_level = data.get("log_level", "INFO")
        log_level = str(log_level).upper() if log_level is not None else "INFO"

        return cls(
            default_timezone=timezone,
            default_window_years=window_years,
            max_occurrences=max_occurrences,
            log_level=log_level,
        )


def build_config_from_env() -> dict[str, Any]:
    """Build configuration overrides from environment variables.

    Recognizes:
    - CADENCE_DEFAULT_TIMEZONE -> 'default_timezone'
    - CADENCE_WINDOW_YEARS -> 'default_window_years'
    - CADENCE_MAX_OCCURRENCES -> 'max_occurrences'
    - CADENCE_LOG_LEVEL -> 'log_level'
    """
    env_map = {
        "CADENCE_DEFAULT_TIMEZONE": "default_timezone",
        "CADENCE_WINDOW_YEARS": "default_window_years",
        "CADENCE_MAX_OCCURRENCES": "max_occurrences",
        "CADENCE_LOG_LEVEL": "log_level",
    }
    cfg: dict[str, Any] = {}
    for env_key, cfg_key in env_map.items():
        value = os.environ.get(env_key)
        if value:
            cfg[cfg_key] = value
    return cfg


def _load_yaml(path: Path) -> Any:
    """Load a YAML document; PyYAML is imported lazily to keep package import light."""
    import yaml  # noqa: PLC0415

    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse config file {path}: {exc}") from exc

    # safe_load returns None for empty files
    return {} if loaded is None else loaded


def load_config(path: str | os.PathLike[str] | None = None) -> Config:
    """Load configuration from a YAML file and the environment.

    Args:
        path: Optional path to the config file; defaults to
              ~/.config/cadence_lite/config.yaml

    Returns:
        Config dataclass instance with values from file, environment or defaults.

    Raises:
        ConfigError: If the file cannot be parsed or its top level is not a mapping
    """
    p = Path(path) if path else DEFAULT_CONFIG_PATH
    logger.debug("Attempting to load config from %s", p)

    raw: dict[str, Any] = {}
    if p.exists():
        loaded = _load_yaml(p)
        if not isinstance(loaded, dict):
            logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, loaded)
            raise ConfigError("Config file must contain a mapping at top level")
        raw = loaded
        logger.info("Loaded configuration from %s", p)
    else:
        logger.info("Config file %s not found; using defaults", p)

    raw.update(build_config_from_env())
    cfg = Config.from_dict(raw)
    logger.debug("Configuration values: %s", cfg)
    return cfg
