"""Command line entry point for the price ticker."""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .config.loader import ConfigLoader
from .engine import EXIT_OK, PriceTickerEngine
from .errors import ConfigurationError
from .logging.config import configure_logging

EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="price-ticker",
        description="Display the bitcoin price, refreshed on a fixed interval. "
                    "Type 'q' then Enter, or press Ctrl+C, to quit."
    )
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML configuration file (default: config/ticker.yaml if present)")
    parser.add_argument("--log-level", default=None,
                        help="Log level for diagnostics written to stderr")
    parser.add_argument("--json-logs", action="store_true",
                        help="Emit diagnostics as JSON lines")
    parser.add_argument("--interval", type=int, default=None,
                        help="Ticks (seconds) between two fetches")
    parser.add_argument("--no-keyboard", action="store_true",
                        help="Do not listen for the quit command on stdin")
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Translate command line flags into configuration overrides."""
    overrides: dict[str, Any] = {}
    if args.log_level is not None:
        overrides.setdefault("logging", {})["level"] = args.log_level
    if args.json_logs:
        overrides.setdefault("logging", {})["format_json"] = True
    if args.interval is not None:
        overrides.setdefault("schedule", {})["interval_ticks"] = args.interval
    if args.no_keyboard:
        overrides.setdefault("shutdown", {})["keyboard_enabled"] = False
    return overrides


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, load configuration and run the poll loop."""
    try:
        args = build_parser().parse_args(argv)

        try:
            config = ConfigLoader.create(args.config).load(overrides_from_args(args))
        except ConfigurationError as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR

        configure_logging(level=config.logging.level, format_json=config.logging.format_json)

        return PriceTickerEngine(config).run()
    except KeyboardInterrupt:
        # Ctrl+C before the signal handlers were installed
        return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
