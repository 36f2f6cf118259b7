"""
CLI script to query the full-text index.

Prints (type, id) pairs in relevance order; no records are loaded.

Usage:
    python scripts/run_search.py "solar panels"
    python scripts/run_search.py "solar panels" --only Article --only Comment
    python scripts/run_search.py "solar" --parent 12 --limit 0
    python scripts/run_search.py "solar panels" --advanced --and
    python scripts/run_search.py "solar panels" --page 2 --per-page 20
    python scripts/run_search.py "solar" --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from polysearch.core import get_config, ConfigurationError
from polysearch.core.config_loader import reload_config
from polysearch.database import init_schema, get_statistics
from polysearch.search import FulltextSearch, CountingPaginator


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search the shared full-text index"
    )

    parser.add_argument("query", help="Free-text query")

    parser.add_argument("--config", type=str, help="Path to custom config.json file")
    parser.add_argument("--init", action="store_true", help="Create the schema if missing")
    parser.add_argument("--only", action="append", help="Restrict to a type (repeatable)")
    parser.add_argument("--parent", action="append", help="Restrict to a parent id (repeatable)")
    parser.add_argument("--limit", type=int, help="Maximum results, 0 for all")
    parser.add_argument("--offset", type=int, help="Results to skip")
    parser.add_argument("--page", type=int, help="Page number, overrides --limit/--offset")
    parser.add_argument("--per-page", type=int, help="Page size when paginating")
    parser.add_argument("--advanced", action="store_true", help="Use weighted advanced search")
    parser.add_argument("--and", dest="and_search", action="store_true", help="Require all terms (with --advanced)")
    parser.add_argument("--phrase", action="store_true", help="Match the query as one phrase")

    return parser.parse_args()


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    if args.init:
        init_schema()

    paginator = CountingPaginator(args.per_page or config.search.per_page)
    engine = FulltextSearch(paginator=paginator, config=config)

    if args.phrase:
        engine.use_phrase_search()
    if args.advanced:
        engine.use_advanced_search()
    if args.and_search:
        engine.use_and_search()

    options = {"active_record": False, "only": args.only}
    if args.parent:
        options["parent_id"] = args.parent if len(args.parent) > 1 else args.parent[0]
    if args.page is not None:
        options["page"] = args.page
    if args.limit is not None:
        options["limit"] = args.limit
    if args.offset is not None:
        options["offset"] = args.offset

    results = engine.search(args.query, **options)

    print("=" * 60)
    print(f"Query:   {args.query!r}")
    print(f"Table:   {engine.table_name} ({engine.dialect.name})")
    print(f"Indexed: {get_statistics()['total_rows']:,} rows")
    print("=" * 60)

    first_rank = getattr(results, "offset", args.offset or 0) + 1
    for rank, (owner_type, owner_id) in enumerate(results, start=first_rank):
        print(f"{rank:>4}. {owner_type} #{owner_id}")

    if hasattr(results, "total_entries"):
        print("-" * 60)
        print(
            f"Page {results.current_page}/{results.total_pages} "
            f"({results.per_page} per page, {results.total_entries:,} total)"
        )

    if not results:
        print("No results.")

    sys.exit(0)


if __name__ == "__main__":
    main()
