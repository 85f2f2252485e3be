#!/usr/bin/env python3
"""Optimize SVG files in place."""

import argparse
import sys
from pathlib import Path

import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from svg_optimizer import __version__
from svg_optimizer.command import run_command
from svg_optimizer.config import load_rule_file
from svg_optimizer.errors import ConfigurationError
from svg_optimizer.utils import setup_logging


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code:
        - 0: Success
        - 1: Missing path or a file failed to optimize
        - 2: Rule file error
    """
    parser = argparse.ArgumentParser(description="Optimize SVG files in place.")
    parser.add_argument(
        "paths", type=Path, nargs="+", help="SVG files or directories to optimize"
    )
    parser.add_argument(
        "--config", "-c", type=Path, help="YAML rule file selecting which rules run"
    )
    parser.add_argument(
        "--dry-run",
        "-d",
        action="store_true",
        help="Only calculate potential savings without modifying files",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Suppress all output except errors"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    # Validate input paths exist
    for path in args.paths:
        if not path.exists():
            print(f"Error: Path not found: {path}", file=sys.stderr)
            return 1

    # Parse rule file
    config = None
    if args.config is not None:
        if not args.config.exists():
            print(f"Error: Rule file not found: {args.config}", file=sys.stderr)
            return 2
        try:
            config = load_rule_file(args.config)
        except (ConfigurationError, yaml.YAMLError, OSError) as e:
            print(f"Error: Failed to parse rule file: {e}", file=sys.stderr)
            return 2

    report = run_command(
        args.paths, config=config, dry_run=args.dry_run, quiet=args.quiet
    )

    return 1 if report.has_errors else 0


if __name__ == "__main__":
    sys.exit(main())
