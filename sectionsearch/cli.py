"""
CLI (Command Line Interface).

Quick terminal commands on top of the search engine, e.g.:

    sectionsearch search "csci 5"
    sectionsearch search intro --filter dept=math --filter instr=smith
    sectionsearch filter --filter code=csci05
    sectionsearch distance kitten sitting

Note:
- Section data is read from sectionsearch/data/sections.json unless --data is given
- Log level comes from SECTIONSEARCH_LOG_LEVEL (default WARNING) or -v
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import List

from rich import box
from rich.console import Console
from rich.table import Table

from sectionsearch.distance import edit_distance
from sectionsearch.filters import Filter, parse_filter_key, parse_filters
from sectionsearch.matching import matches_text, search_sections
from sectionsearch.model import Section, stringify_section_code
from sectionsearch.storage import load_sections

logger = logging.getLogger(__name__)

console = Console()

DEFAULT_LIMIT = 20


def setup_logging(verbose: bool = False) -> None:
    """
    Configure the root logger once.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    level_name = os.getenv("SECTIONSEARCH_LOG_LEVEL", "WARNING").upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def _parse_filter_args(exprs: List[str]) -> List[Filter] | None:
    try:
        return parse_filters(exprs)
    except ValueError as e:
        print(f"Invalid filter: {e}")
        return None


def _check_limit(limit: int) -> bool:
    if limit < 1:
        print("--limit must be >= 1")
        return False
    return True


def _print_sections(sections: List[Section], text: str, limit: int) -> None:
    """
    Print sections as a table (max `limit` rows).
    """
    table = Table(box=box.SIMPLE)
    table.add_column("Code", style="bold", no_wrap=True)
    table.add_column("Title")
    table.add_column("Instructors")
    if text:
        table.add_column("Score", justify="right")

    for s in sections[:limit]:
        row = [
            stringify_section_code(s.identifier),
            s.course.title or "(no title)",
            ", ".join(i.name for i in s.instructors),
        ]
        if text:
            row.append(str(matches_text(text, s)))
        table.add_row(*row)

    console.print(table)
    if len(sections) > limit:
        print(f"... and {len(sections) - limit} more results")


def _cmd_search(args: argparse.Namespace) -> int:
    """
    Rank sections by free text, after applying the structured filters.
    """
    text = args.text or ""
    if not text.strip():
        print("Please provide a search text.")
        return 1
    if not _check_limit(args.limit):
        return 1

    filters = _parse_filter_args(args.filter)
    if filters is None:
        return 1

    # a trailing filter keyword turns into a filter chip in the web search box
    key = parse_filter_key(text)
    if key is not None:
        print(f"Hint: '{key.value}' is a filter keyword, use --filter {key.value}=VALUE to filter by it.")

    results = search_sections(load_sections(args.data), text, filters)
    if not results:
        print("No results.")
        return 0

    _print_sections(results, text, args.limit)
    return 0


def _cmd_filter(args: argparse.Namespace) -> int:
    """
    List sections that pass all structured filters, in data order.
    """
    if not _check_limit(args.limit):
        return 1

    filters = _parse_filter_args(args.filter)
    if filters is None:
        return 1
    if not filters:
        print("Please provide at least one --filter.")
        return 1

    results = search_sections(load_sections(args.data), "", filters)
    if not results:
        print("No results.")
        return 0

    _print_sections(results, "", args.limit)
    return 0


def _cmd_distance(args: argparse.Namespace) -> int:
    for name in ("insert", "delete", "replace"):
        if getattr(args, name) < 0:
            print(f"--{name} must be >= 0")
            return 1

    d = edit_distance(args.start, args.end, insert=args.insert, delete=args.delete, replace=args.replace)
    print(d)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="sectionsearch", description="Course section search")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_data_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--data", type=str, default=None, help="Path to sections.json")
        p.add_argument(
            "--filter",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Structured filter (dept, title, desc, code, instr, days, area, time, campus); repeatable",
        )
        p.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="Max rows to print")

    p_search = sub.add_parser("search", help="Search sections by free text")
    p_search.add_argument("text", type=str, help="Search text (e.g. 'csci 5')")
    add_data_args(p_search)

    p_filter = sub.add_parser("filter", help="List sections matching structured filters")
    add_data_args(p_filter)

    p_dist = sub.add_parser("distance", help="Edit distance between two strings")
    p_dist.add_argument("start", type=str)
    p_dist.add_argument("end", type=str)
    p_dist.add_argument("--insert", type=int, default=1, help="Insertion cost")
    p_dist.add_argument("--delete", type=int, default=1, help="Deletion cost")
    p_dist.add_argument("--replace", type=int, default=1, help="Substitution cost")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "search":
        raise SystemExit(_cmd_search(args))
    if args.command == "filter":
        raise SystemExit(_cmd_filter(args))
    if args.command == "distance":
        raise SystemExit(_cmd_distance(args))

    raise SystemExit(2)
