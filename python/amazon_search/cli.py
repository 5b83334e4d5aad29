from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .browser import run_search
from .conditions import is_valid_condition, parse_condition
from .models import TOP_N
from .presenter import render_json, render_report
from .settings import HEADLESS, configure_logging

logger = logging.getLogger("amazon_search")

MISSING_TERM_MESSAGE = "Please provide a search term as the first argument."
INVALID_CONDITION_MESSAGE = "Please provide a valid price condition as the second argument (e.g., 20< or 30>)."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amazon-search",
        description="Search Amazon and list the best-rated products matching a price condition.",
        epilog='A condition of "20<" keeps prices below 20; "30>" keeps prices above 30.',
    )
    parser.add_argument("search_term", nargs="?", help="Search term, e.g. 'usb c cable'")
    parser.add_argument("condition", nargs="?", help="Price condition: <number>< or <number>>")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    parser.add_argument("--limit", type=int, default=TOP_N, help=f"Max results to show (at most {TOP_N})")
    parser.add_argument("--show-browser", action="store_true", help="Run the browser with a visible window")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.limit < 1:
        parser.error("--limit must be at least 1")
    configure_logging()

    search_term = (args.search_term or "").strip()
    if not search_term:
        print(MISSING_TERM_MESSAGE, file=sys.stderr)
        return 1
    if not args.condition or not is_valid_condition(args.condition):
        print(INVALID_CONDITION_MESSAGE, file=sys.stderr)
        return 1
    condition = parse_condition(args.condition)

    try:
        results = run_search(
            search_term,
            condition,
            headless=HEADLESS and not args.show_browser,
            limit=args.limit,
        )
    except Exception:
        logger.exception("search failed for %r", search_term)
        return 1

    if args.format == "json":
        print(render_json(results))
    else:
        print(render_report(results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
