"""Command-line entry for cadence_lite.

Expands a stored recurrence rule and prints one occurrence per line:

  python -m cadence_lite rule.yaml --start 2024-01-01T09:00
  python -m cadence_lite rule.json --start 2024-01-01T09:00 --end 2024-01-01T10:00 \
      --window-start 2024-03-01 --window-end 2024-03-31 --timezone "Pacific Standard Time"
"""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .cadence import Cadence
from .cadence_exceptions import CadenceError, RecurrenceParseError
from .config_loader import load_config
from .lite_logging import configure_lite_logging
from .recurrence_models import QueryWindow, RecurrenceRule, parse_recurrence
from .timezone_utils import coerce_datetime, resolve_timezone

logger = logging.getLogger(__name__)


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for cadence_lite CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="cadence_lite",
        description="Expand a stored recurrence rule into occurrence start times",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cadence_lite rule.yaml --start 2024-01-01T09:00
  python -m cadence_lite rule.yaml --start 2024-01-01T09:00 --window-end 2024-06-30
        """,
    )
    parser.add_argument("rule_file", type=Path, help="YAML or JSON file holding the recurrence")
    parser.add_argument("--start", required=True, help="Anchor start (ISO-8601)")
    parser.add_argument("--end", help="Anchor end (ISO-8601); prints occurrence ends too")
    parser.add_argument("--window-start", help="Query window start (default: anchor start)")
    parser.add_argument("--window-end", help="Query window end (default: configured years after anchor)")
    parser.add_argument("--timezone", help="Zone for naive timestamps (IANA, Windows name or alias)")
    parser.add_argument("--limit", type=int, metavar="N", help="Maximum occurrences to print")
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_rule_file(path: Path) -> RecurrenceRule:
    """Read a recurrence rule from a YAML or JSON file.

    Raises:
        RecurrenceParseError: If the file is unreadable or not a valid rule
    """
    import yaml  # noqa: PLC0415

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise RecurrenceParseError(f"Cannot read recurrence file {path}: {e}") from e

    if not isinstance(data, dict):
        raise RecurrenceParseError(f"Recurrence file {path} must contain a mapping")
    return parse_recurrence(data)


def run(args: argparse.Namespace) -> int:
    """Expand the rule described by ``args`` and print its occurrences."""
    cfg = load_config(args.config)
    configure_lite_logging(debug_mode=args.debug, log_level=cfg.log_level)

    tz = resolve_timezone(args.timezone or cfg.default_timezone)
    rule = load_rule_file(args.rule_file)

    anchor = coerce_datetime(args.start, tz)
    if anchor is None:
        raise CadenceError(f"Invalid --start value: {args.start!r}")

    duration = None
    if args.end:
        anchor_end = coerce_datetime(args.end, tz)
        if anchor_end is None:
            raise CadenceError(f"Invalid --end value: {args.end!r}")
        duration = anchor_end - anchor

    cadence = Cadence(anchor, rule, window_years=cfg.default_window_years)
    window = QueryWindow(
        args.window_start or anchor,
        args.window_end or cadence.default_window().end,
    )
    limit = args.limit if args.limit is not None else cfg.max_occurrences

    logger.debug("Expanding %s from %s over %s (limit %d)", rule.pattern.value, anchor, window, limit)

    printed = 0
    for start in itertools.islice(cadence.generate(window), max(limit, 0)):
        if duration is None:
            print(start.isoformat())
        else:
            print(f"{start.isoformat()}\t{(start + duration).isoformat()}")
        printed += 1

    logger.info("Printed %d occurrences", printed)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Run the cadence_lite CLI.

    Returns:
        Process exit status: 0 on success, 2 on invalid input
    """
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        return run(args)
    except CadenceError as exc:
        print(f"cadence_lite: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
