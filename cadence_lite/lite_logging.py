"""
Central logging configuration for cadence_lite.

Expansion runs inside rendering call stacks, so the package logs degraded
paths (empty windows, unsupported rules) at WARNING and per-expansion
summaries at DEBUG. This module wires those loggers to a colorized console
handler and lets the level be raised from the environment for troubleshooting.
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

logger = logging.getLogger(__name__)

PACKAGE_LOGGERS = [
    "cadence_lite",
    "cadence_lite.cadence",
    "cadence_lite.cadence_generators",
    "cadence_lite.event_occurrence",
    "cadence_lite.config_loader",
    "cadence_lite.timezone_utils",
]

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR")


def _env_debug() -> bool:
    return os.getenv("CADENCE_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")


def configure_lite_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> None:
    """
    Configure logging levels for cadence_lite.

    Args:
        debug_mode: Whether to enable debug logging for cadence_lite modules
        force_debug: Override debug mode setting (None to use env var detection)
        log_level: Configured level name for root and package loggers
            (DEBUG, INFO, WARNING, ERROR); ignored when debug logging is on

    Environment Variables:
        CADENCE_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        CADENCE_LOG_LEVEL: Overrides ``log_level``
    """
    if force_debug is not None:
        final_debug = force_debug
    elif _env_debug():
        final_debug = True
    else:
        final_debug = debug_mode

    level_name = (os.getenv("CADENCE_LOG_LEVEL", "") or log_level or "").strip().upper()
    if level_name and level_name not in LOG_LEVEL_NAMES:
        logger.warning("Unknown log level %r; using INFO", level_name)
        level_name = ""

    if final_debug:
        level = logging.DEBUG
    elif level_name:
        level = getattr(logging, level_name)
    else:
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Only add a handler if none exist, so host applications keep their own setup
    if not root_logger.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
        root_logger.addHandler(handler)

    for module in PACKAGE_LOGGERS:
        logging.getLogger(module).setLevel(level)

    if final_debug:
        root_logger.debug("Debug logging enabled for cadence_lite modules")


def reset_logging_to_debug() -> None:
    """Reset root and package loggers to DEBUG for troubleshooting."""
    logging.getLogger().setLevel(logging.DEBUG)
    for module in PACKAGE_LOGGERS:
        logging.getLogger(module).setLevel(logging.DEBUG)

    logging.getLogger().info("All cadence_lite loggers reset to DEBUG level for troubleshooting")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in PACKAGE_LOGGERS:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
