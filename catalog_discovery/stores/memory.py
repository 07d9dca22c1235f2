"""In-memory item store backed by a directory of JSON-LD corpus files."""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from .base import Item, ItemStore, corpus_items, item_type

logger = logging.getLogger(__name__)


def load_corpus(data_dir: str | Path) -> list[Item]:
    """
    Read every ``*.jsonld`` file under ``data_dir`` and concatenate their items.

    Files are read in name order. Unreadable files are logged and skipped.
    """
    root = Path(data_dir)
    logger.info("Loading data from: %s", root)

    items: list[Item] = []
    if not root.is_dir():
        logger.warning("Data directory does not exist: %s", root)
        return items

    for path in sorted(root.glob("*.jsonld")):
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Error loading %s: %s", path.name, e)
            continue

        loaded = corpus_items(document)
        if loaded:
            items.extend(loaded)
            logger.debug("Loaded %d items from %s", len(loaded), path.name)

    logger.info("Total loaded %d items from JSON-LD files", len(items))
    return items


class MemoryItemStore(ItemStore):
    """Holds the whole corpus in memory; type filtering only."""

    name = "memory"
    supports_text_search = False

    def __init__(self, items: Iterable[Item] = ()):
        self._items: tuple[Item, ...] = tuple(items)

    @classmethod
    def from_directory(cls, data_dir: str | Path) -> "MemoryItemStore":
        return cls(load_corpus(data_dir))

    async def list_items(
        self,
        types: Optional[frozenset[str]] = None,
        text_search: Optional[str] = None,
    ) -> list[Item]:
        if types is None:
            return list(self._items)
        return [item for item in self._items if item_type(item) in types]

    async def count(self) -> int:
        return len(self._items)
