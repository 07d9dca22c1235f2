#!/usr/bin/env python3
"""Load the JSON-LD corpus into the SQLite item store.

Reads DISCOVERY_DATA_DIR and DISCOVERY_SQLITE_PATH. Existing items are
cleared before loading.
"""

import logging
import sys
from pathlib import Path
sys.path.insert(0, ".")

from catalog_discovery.config import settings
from catalog_discovery.stores import SQLiteItemStore


def main() -> int:
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(message)s")
    print(f"Loading data from: {settings.data_dir}")
    print(f"SQLite store: {settings.sqlite_path}")

    if not Path(settings.data_dir).is_dir():
        print(f"Error loading data: data directory does not exist: {settings.data_dir}")
        return 1

    try:
        store = SQLiteItemStore(settings.sqlite_path)
        total = store.load_directory(settings.data_dir)
    except Exception as e:
        print(f"Error loading data: {e}")
        return 1

    print(f"Total loaded: {total} items")
    return 0


if __name__ == "__main__":
    sys.exit(main())
