import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import config
from .core import ListingCatalogApp
from .exceptions import FetchError
from .models import FileRecord
from .query.state import QueryState
from .reporting import ReportGenerator


def setup_logging(verbose: bool):
    """Sets up logging to the console."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Silence chatty libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("charset_normalizer").setLevel(logging.WARNING)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Listing Catalog: search an Apache directory listing")

    p.add_argument("url", nargs="?", default=config.DEFAULT_BASE_URL, help="Base URL of the directory listing")
    p.add_argument("--html", type=Path, default=None, help="Read the listing from a saved HTML file instead of fetching")
    p.add_argument("--refresh", action="store_true", help="Ignore any cached listing")

    p.add_argument("--bookmark", default=None, help="Query string to start from (e.g. 'search=motion&type=document')")
    p.add_argument("--search", default=None, help="Search text")
    p.add_argument("--sort", choices=sorted(config.SORT_KEYS), default=None, help="Sort key")
    p.add_argument("--order", choices=list(config.SORT_ORDERS), default=None, help="Sort direction")
    p.add_argument("--person", default=None, help="Only files for this person ('all' for everyone)")
    p.add_argument("--type", dest="file_type", default=None, help="Only files of this type ('all' for every type)")

    p.add_argument("--json", action="store_true", help="Print matching records as JSON")
    p.add_argument("--csv", type=Path, default=None, help="Also write matching records to this CSV file")
    p.add_argument("--summary", action="store_true", help="Print per-type and per-person totals")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def build_state(args) -> QueryState:
    """Bookmark first, then explicit flags override it."""
    base = QueryState.from_query_string(args.bookmark) if args.bookmark else QueryState()
    return QueryState(
        search=args.search if args.search is not None else base.search,
        sort=args.sort or base.sort,
        order=args.order or base.order,
        person=args.person or base.person,
        type=args.file_type or base.type,
    )


def print_table(records: Sequence[FileRecord]):
    print("type     | date             | size     | person                    | name")
    print("---------+------------------+----------+---------------------------+-----")
    for rec in records:
        print(f"{rec.type.ljust(8)} | {rec.date.ljust(16)} | {rec.size.rjust(8)} | {rec.person[:25].ljust(25)} | {rec.display_name}")


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    app = ListingCatalogApp(args.url)
    show_progress = sys.stderr.isatty()

    try:
        if args.html:
            app.load_html(args.html.read_text(encoding="utf-8", errors="replace"), show_progress=show_progress)
        else:
            app.load(refresh=args.refresh, show_progress=show_progress)
    except FetchError as e:
        logging.error(f"Failed to load files: {e}")
        for failure in e.failures:
            logging.error(f"  {failure}")
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1

    state = build_state(args)
    results = app.query(state)
    logging.info(f"{len(results)} of {len(app.files)} files match")

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        print_table(results)

    if args.summary:
        print()
        print(ReportGenerator(results).summary())

    if args.csv:
        ReportGenerator(results).write_csv(args.csv)

    if state.has_active_filters or state.search:
        logging.info(f"Bookmark: ?{state.to_query_string()}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
