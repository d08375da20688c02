"""Command-line entry point.

    hngrep [options] PATTERN

Prints the stories in a Hacker News list whose title matches PATTERN.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv
from rich.console import Console

from config.settings import Settings
from hngrep.errors import HNGrepError
from hngrep.formatter import OutputFormat, render
from hngrep.matcher import compile_pattern
from hngrep.models import Category
from hngrep.search import SearchOrchestrator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hngrep",
        usage="%(prog)s [options] PATTERN",
        description="Print Hacker News stories whose title matches PATTERN.",
    )
    parser.add_argument("pattern", metavar="PATTERN", help="regular expression searched for in each title")

    # Only one list per run; combining the flags is a usage error.
    lists = parser.add_mutually_exclusive_group()
    lists.add_argument("-new", "--new", dest="category", action="store_const",
                       const=Category.NEW, help="new stories (default)")
    lists.add_argument("-top", "--top", dest="category", action="store_const",
                       const=Category.TOP, help="top stories")
    lists.add_argument("-best", "--best", dest="category", action="store_const",
                       const=Category.BEST, help="best stories")
    parser.set_defaults(category=Category.NEW)

    parser.add_argument("-i", "--ignore-case", action="store_true",
                        help="match titles case-insensitively")
    parser.add_argument("-n", "--limit", type=int, default=None, metavar="N",
                        help="only search the first N stories of the list")
    parser.add_argument("-f", "--format", dest="fmt", default=OutputFormat.TEXT.value,
                        choices=[f.value for f in OutputFormat],
                        help="output format (default: text)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log progress to standard error")
    return parser


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    """Run the CLI and return the process exit status."""
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )
    console = console or Console()

    try:
        settings = Settings()
        settings.validate()
        compiled = compile_pattern(args.pattern, ignore_case=args.ignore_case)
        with SearchOrchestrator(settings) as orchestrator:
            result = orchestrator.search(compiled, category=args.category, limit=args.limit)
    except (HNGrepError, ValueError) as exc:
        logger.error("hngrep: %s", exc)
        return 1

    render(result, OutputFormat(args.fmt), console)
    return 0


if __name__ == "__main__":
    sys.exit(main())
