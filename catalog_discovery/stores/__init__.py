"""Item storage backends for the discovery engine."""

from typing import Optional

from ..config import Settings, settings as default_settings
from .base import Item, ItemStore, corpus_items, item_descriptor, item_type
from .memory import MemoryItemStore, load_corpus
from .sqlite import SQLiteItemStore


def create_store(settings: Optional[Settings] = None) -> ItemStore:
    """Build the store selected by ``settings.store_backend``."""
    settings = settings or default_settings
    backend = settings.store_backend.lower()
    if backend == "memory":
        return MemoryItemStore.from_directory(settings.data_dir)
    if backend == "sqlite":
        return SQLiteItemStore(settings.sqlite_path)
    raise ValueError(f"Unknown store backend: {settings.store_backend}")


__all__ = [
    "Item",
    "ItemStore",
    "MemoryItemStore",
    "SQLiteItemStore",
    "corpus_items",
    "create_store",
    "item_descriptor",
    "item_type",
    "load_corpus",
]
