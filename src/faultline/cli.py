"""Command-line entry point: ``faultline FILE``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from faultline import __version__
from faultline.locator.completer import UnsupportedCompleterError, available_completers
from faultline.oracle import OracleError, OracleRegistry, UnsupportedOracleError
from faultline.service.validation import ValidationService
from faultline.settings import Settings


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="faultline",
        description="Locate the line that makes a Drools DRL file fail to compile",
    )
    parser.add_argument("input", help="DRL file to check ('-' reads stdin)")
    parser.add_argument("--oracle", choices=OracleRegistry.available(),
                        help="Verifier oracle (default: ORACLE setting)")
    parser.add_argument("--completer", choices=available_completers(),
                        help="Prefix completion strategy (default: COMPLETER setting)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    overrides = {k: v for k, v in (("oracle", args.oracle), ("completer", args.completer)) if v}
    settings = Settings(**overrides)
    logging.basicConfig(level=settings.log_level.upper(), stream=sys.stderr)

    try:
        source = _read_source(args.input)
    except OSError as exc:
        print(f"Error: cannot read {args.input}: {exc}", file=sys.stderr)
        return 2

    try:
        service = ValidationService.from_settings(settings)
    except (UnsupportedOracleError, UnsupportedCompleterError, OracleError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        fault = service.locate(source)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    finally:
        service.close()

    if fault is None:
        print("No fault found.")
        return 0
    print(fault)
    return 1


if __name__ == "__main__":
    sys.exit(main())
