"""
Command-line stream driver.

    procnorm -t opentender-contracts -c ted < releases.json > contracts.json
    procnorm -t pnt -d "folder=Contratos|sujeto_id=1234" < pnt.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import ConfigError, build_config
from .dispatch import TRANSFORMS
from .logging_setup import setup_logging
from .stream import StreamError, process_stream

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procnorm",
        description="Normalize procurement records read from stdin into Contract, Buyer and Supplier records.",
    )
    parser.add_argument(
        "-t",
        "--transform",
        help=f"transform to apply; unknown values pass records through ({', '.join(sorted(TRANSFORMS))})",
    )
    parser.add_argument("-d", "--data", help="extra fields merged into every record, e.g. 'folder=Contratos|year=2021'")
    parser.add_argument("--field-delimiter", help="separator between extra-data pairs (default '|')")
    parser.add_argument("--value-delimiter", help="separator between key and value (default '=')")
    parser.add_argument("-c", "--country", help="country code of the source, or 'ted'")
    parser.add_argument("--strict", action="store_true", help="abort on the first record that fails to transform")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = build_config(
            args.transform,
            overlay_data=args.data,
            field_delimiter=args.field_delimiter,
            value_delimiter=args.value_delimiter,
            country=args.country,
            strict=args.strict,
        )
    except ConfigError as e:
        parser.exit(2, f"{parser.prog}: error: {e}\n")

    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8-sig")
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    if config.transform and config.transform not in TRANSFORMS:
        logger.warning("Unknown transform %r, records are passed through unchanged", config.transform)

    try:
        process_stream(sys.stdin, sys.stdout, config)
    except StreamError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
