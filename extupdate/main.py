"""
Command line entry point.

    extupdate redhat.java 1.1.0

Prints one record line when a newer version is published, nothing when the
extension is up to date, and exits non-zero on any failure.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from extupdate import __version__
from extupdate.core.config import get_settings
from extupdate.core.logging_config import configure_logging
from extupdate.domain.errors import ExtensionUpdateError
from extupdate.services.reporter import RENDERERS, render_record
from extupdate.services.update_checker import UpdateChecker

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extupdate",
        description="Check the Visual Studio Marketplace for a newer extension version.",
    )
    parser.add_argument("extension_id", help="Extension identifier in 'publisher.name' form.")
    parser.add_argument("baseline", nargs="?", default=None, help="Version currently known, if any.")
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=sorted(RENDERERS),
        default=None,
        help="Output format for the update record (default: nix).",
    )
    parser.add_argument(
        "--show-metadata",
        action="store_true",
        default=None,
        help="Print the parsed listing metadata to stderr.",
    )
    parser.add_argument("--marketplace-url", default=None, help=argparse.SUPPRESS)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings(
            output_format=args.output_format,
            show_metadata=args.show_metadata,
            marketplace_url=args.marketplace_url,
        )
        configure_logging(settings.log_level, verbose=args.verbose)
    except (ValidationError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        result = UpdateChecker(settings).check(args.extension_id, args.baseline)
    except ExtensionUpdateError as e:
        logger.debug(f"Check failed at stage {e.stage}", exc_info=True)
        print(f"Error: {e.kind}: {e}", file=sys.stderr)
        return 1

    if result.update is not None:
        print(render_record(result.update, settings.output_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
