"""
CLI script to load rows into the full-text index from a JSON file.

The file holds a list of objects with "type", "id", "value" and an
optional "parent_id". Existing rows for the same (type, id) are replaced.

Usage:
    python scripts/index_rows.py rows.json
    python scripts/index_rows.py rows.json --reset
    python scripts/index_rows.py rows.json --config path/to/config.json
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from polysearch.core import get_config, get_logger, ConfigurationError
from polysearch.core.config_loader import reload_config
from polysearch.database import FulltextRowRepository, init_schema, reset_schema, get_statistics


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Load rows into the shared full-text index"
    )

    parser.add_argument("rows_file", help="JSON file with the rows to index")
    parser.add_argument("--reset", action="store_true", help="Drop existing rows first")
    parser.add_argument("--config", type=str, help="Path to custom config.json file")

    return parser.parse_args()


def main():
    """Main entry point for the row loader CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    logger = get_logger(__name__)

    rows_path = Path(args.rows_file)
    try:
        with open(rows_path, "r", encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: cannot read {rows_path}: {e}")
        sys.exit(1)

    if args.reset:
        reset_schema()
    else:
        init_schema()

    repository = FulltextRowRepository()
    loaded = 0
    skipped = 0

    for entry in rows:
        if "type" not in entry or "id" not in entry:
            logger.warning(f"Skipping row without type/id: {entry}")
            skipped += 1
            continue
        repository.upsert(entry["type"], entry["id"], entry.get("value", ""), entry.get("parent_id"))
        loaded += 1

    stats = get_statistics()

    print("=" * 60)
    print(f"Rows loaded:   {loaded:,}")
    print(f"Rows skipped:  {skipped:,}")
    print(f"Total indexed: {stats['total_rows']:,}")
    for owner_type, count in stats["rows_by_type"].items():
        print(f"  {owner_type:<20} {count:,}")
    print("=" * 60)

    sys.exit(1 if skipped else 0)


if __name__ == "__main__":
    main()
