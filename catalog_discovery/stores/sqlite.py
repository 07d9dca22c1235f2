"""
SQLite document store with an FTS5 text index.

Items are stored as JSON documents keyed by insertion order. A
companion FTS5 table indexes the descriptor name, short and long
descriptions and the type identifier. Its word tokens follow the
in-process rule (underscore is a word character, diacritics are kept), and
phrase matches are a superset of whole-word matches, so callers use it as a
pre-filter.
"""

import asyncio
import json
import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Iterable, Optional

from .base import Item, ItemStore, item_descriptor, item_type
from .memory import load_corpus

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def match_phrase(term: str) -> str:
    """Quote ``term`` as a single FTS5 phrase so operators in it are literal."""
    return '"' + term.replace('"', '""') + '"'


class SQLiteItemStore(ItemStore):
    """SQLite-backed store with server-side text search."""

    name = "sqlite"
    supports_text_search = True

    def __init__(self, db_path: str | Path = "./data/catalog.db"):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def _init_database(self):
        """Initialize database tables."""
        with closing(self._connect()) as conn, conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS items (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    type TEXT,
                    document TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_items_type ON items (type);

                CREATE VIRTUAL TABLE IF NOT EXISTS item_search USING fts5(
                    name, short_desc, long_desc, type,
                    tokenize = "unicode61 remove_diacritics 0 tokenchars '_'"
                );
            """)

    def load_items(self, items: Iterable[Item], replace: bool = True) -> int:
        """
        Store ``items``, clearing existing ones first when ``replace`` is set.

        Returns:
            Number of items inserted
        """
        inserted = 0
        with closing(self._connect()) as conn, conn:
            if replace:
                conn.execute("DELETE FROM item_search")
                conn.execute("DELETE FROM items")
                logger.info("Cleared existing items")

            for item in items:
                cursor = conn.execute(
                    "INSERT INTO items (type, document) VALUES (?, ?)",
                    (item_type(item), json.dumps(item)),
                )
                descriptor = item_descriptor(item)
                conn.execute(
                    "INSERT INTO item_search (rowid, name, short_desc, long_desc, type) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (
                        cursor.lastrowid,
                        _text(descriptor.get("schema:name")),
                        _text(descriptor.get("beckn:shortDesc")),
                        _text(descriptor.get("beckn:longDesc")),
                        _text(item.get("@type")),
                    ),
                )
                inserted += 1

        logger.info("Stored %d items in %s", inserted, self.db_path)
        return inserted

    def load_directory(self, data_dir: str | Path) -> int:
        """Replace the stored items with the JSON-LD corpus under ``data_dir``."""
        return self.load_items(load_corpus(data_dir))

    def _query(
        self,
        types: Optional[frozenset[str]],
        text_search: Optional[str],
    ) -> list[Item]:
        sql = "SELECT items.document FROM items"
        where: list[str] = []
        params: list[str] = []

        if text_search:
            sql += " JOIN item_search ON item_search.rowid = items.id"
            where.append("item_search MATCH ?")
            params.append(match_phrase(text_search))

        if types is not None:
            placeholders = ", ".join("?" for _ in types)
            where.append(f"items.type IN ({placeholders})")
            params.extend(sorted(types))

        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY items.id"

        with closing(self._connect()) as conn:
            rows = conn.execute(sql, params).fetchall()
        return [json.loads(row[0]) for row in rows]

    async def list_items(
        self,
        types: Optional[frozenset[str]] = None,
        text_search: Optional[str] = None,
    ) -> list[Item]:
        if types is not None and not types:
            return []
        return await asyncio.to_thread(self._query, types, text_search)

    async def count(self) -> int:
        def _count() -> int:
            with closing(self._connect()) as conn:
                return conn.execute("SELECT COUNT(*) FROM items").fetchone()[0]

        return await asyncio.to_thread(_count)
