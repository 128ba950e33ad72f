"""Engine config validation CLI.

Usage:
    python -m wicalc.cli.run -config wi.yaml
    python -m wicalc.cli.run --set "water pressure=6 bar"
    python -m wicalc.cli.run --init -config my_engine.yaml

Outputs the parsed configuration as JSON to stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from ..core.config import (
    DEFAULT_CONFIG_FILE,
    default_config,
    load_config,
    merge_config,
    parse_engine_config,
    save_config,
)
from ..core.errors import ConfigReadError, ParseError
from ..core.logging import LEVELS, get_logger, set_log_level

log = get_logger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_PARSE_ERROR = 3


def _parse_override(item: str) -> tuple[str, str]:
    key, sep, value = item.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {item!r}")
    return key.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wicalc",
        description="Validate water-injection engine parameters",
    )
    parser.add_argument(
        "-config",
        "--config",
        dest="config",
        default=DEFAULT_CONFIG_FILE,
        help=f"YAML file containing engine parameters (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        type=_parse_override,
        default=[],
        metavar="KEY=VALUE",
        help="Override a config value, e.g. 'water pressure=6 bar' (repeatable)",
    )
    parser.add_argument("--init", action="store_true", help="Write the reference config and exit")
    parser.add_argument("--force", action="store_true", help="Allow --init to overwrite")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=list(LEVELS),
        help="Minimum level of JSON log lines on stderr (default: $WICALC_LOG_LEVEL or WARN)",
    )
    return parser


def _init_config(path: Path, overrides: dict[str, str], force: bool) -> int:
    if path.exists() and not force:
        print(f"Error: {path} already exists (use --force to overwrite)", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    try:
        config = merge_config(default_config(), overrides)
    except ConfigReadError as exc:
        print(f"Error reading config: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    try:
        save_config(config, path)
    except OSError as exc:
        print(f"Error writing config: {path}: {exc.strerror or exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print(f"Wrote {path}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Load, validate and echo the engine configuration.

    Args:
        argv: Command-line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 = success, 1 = config read error, 3 = quantity parse error).
    """
    args = build_parser().parse_args(argv)
    if args.log_level is not None:
        set_log_level(args.log_level)

    path = Path(args.config)
    overrides = dict(args.overrides)

    if args.init:
        return _init_config(path, overrides, args.force)

    try:
        config = load_config(path)
        if overrides:
            config = merge_config(config, overrides)
    except ConfigReadError as exc:
        print(f"Error reading config: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    try:
        parsed = parse_engine_config(config)
    except ParseError as exc:
        print(f"Error parsing config: {exc}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    log.info("config validated", path=str(path))
    print(json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
