"""
Command line interface.

    python -m deskentry show /usr/share/applications/org.gnome.Nautilus.desktop
    python -m deskentry find firefox org.mozilla.firefox
    python -m deskentry search "web browser" --locale fr_FR
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .codec.decoder import decode_from_path
from .codec.errors import DecodeError
from .config import settings
from .searcher.app_searcher import AppSearcher

logger = logging.getLogger("deskentry")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deskentry", description="Desktop entry decoder and app matcher")
    parser.add_argument("--locale", action="append", default=None, metavar="TAG", help="Preferred locale (repeatable)")
    parser.add_argument("--dir", action="append", default=None, metavar="PATH", help="Search directory (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Decode one file and print it back")
    show.add_argument("path")

    find = sub.add_parser("find", help="Find the entry for window app ids")
    find.add_argument("app_ids", nargs="+", metavar="APPID")

    search = sub.add_parser("search", help="Rank entries against a free-text query")
    search.add_argument("query")
    search.add_argument("--limit", type=int, default=10)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.command == "show":
        try:
            entry = decode_from_path(args.path, args.locale)
        except DecodeError as e:
            logger.error("❌ %s: %s", args.path, e)
            return 1
        print(f"# {entry.identifier}")
        print(entry.render(), end="")
        return 0

    searcher = AppSearcher(directories=args.dir, locales=args.locale)

    if args.command == "find":
        entry = searcher.find_by_id(*args.app_ids)
        if entry is None:
            print("no match")
            return 1
        print(f"{entry.identifier}\t{entry.path}")
        return 0

    results = searcher.search(args.query, limit=args.limit)
    for score, entry in results:
        print(f"{score:.3f}\t{entry.identifier}\t{entry.get('name', searcher.locales) or ''}")
    return 0 if results else 1


if __name__ == "__main__":
    sys.exit(main())
