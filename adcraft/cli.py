# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""
Command-line entry point.

    adcraft lamp.jpg --name "Lumen Arc Smart Lamp" \\
        --description "Eco lamp with clean ambient light" --output posters/
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from adcraft.errors import AdCraftError
from adcraft.runtime.serializers import ReportFormat, to_report
from adcraft.runtime.session import PosterSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adcraft",
        description="Compose a promotional poster from a product photo.",
    )
    parser.add_argument("image", type=Path, help="Product photo (PNG, JPEG or WebP)")
    parser.add_argument("--name", required=True, help="Product name (headline)")
    parser.add_argument("--description", required=True, help="Short product description")
    parser.add_argument("--tagline", help="Override the generated tagline")
    parser.add_argument("--cta", help="Override the generated call to action")
    parser.add_argument("--seed", type=int, help="Seed for repeatable copy")
    parser.add_argument(
        "--output", "-o", type=Path, default=Path("."),
        help="Directory for the PNG (default: current directory)",
    )
    parser.add_argument(
        "--report",
        choices=[f.value for f in ReportFormat],
        default=ReportFormat.MARKDOWN.value,
        help="Report format printed to stdout",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    for flag, value in (("--tagline", args.tagline), ("--cta", args.cta)):
        if value is not None and not value.strip():
            parser.error(f"{flag} cannot be blank")

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    session = PosterSession(seed=args.seed)
    try:
        session.upload_file(args.image)
        session.generate(args.name, args.description)
        if args.tagline is not None or args.cta is not None:
            session.edit(tagline=args.tagline, cta=args.cta)
        path = session.export(args.output)
    except AdCraftError as e:
        print(f"adcraft: {session.status}", file=sys.stderr)
        logger.debug("Failure detail: %s", e.detail)
        return 1

    # Edits change the copy after generation; report what was drawn
    result = session.result
    if args.tagline is not None or args.cta is not None:
        result = replace(result, tagline=session.tagline, cta=session.cta)

    print(to_report(result, poster=session.poster, format=ReportFormat(args.report)))
    logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
