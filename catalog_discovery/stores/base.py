"""Base item store types and protocol."""

from abc import ABC, abstractmethod
from typing import Any, Optional

Item = dict[str, Any]


def item_type(item: Item) -> Optional[str]:
    """Type identifier of an item, or None when it has none."""
    value = item.get("@type")
    return value if isinstance(value, str) else None


def item_descriptor(item: Item) -> dict:
    """The item's ``beckn:descriptor`` block, or an empty dict."""
    descriptor = item.get("beckn:descriptor")
    return descriptor if isinstance(descriptor, dict) else {}


def corpus_items(document: Any) -> list[Item]:
    """Items of one JSON-LD corpus document (its ``beckn:items`` array)."""
    if not isinstance(document, dict):
        return []
    items = document.get("beckn:items") or []
    return [item for item in items if isinstance(item, dict)]


class ItemStore(ABC):
    """Base protocol for item storage backends."""

    name: str = "base"
    supports_text_search: bool = False

    @abstractmethod
    async def list_items(
        self,
        types: Optional[frozenset[str]] = None,
        text_search: Optional[str] = None,
    ) -> list[Item]:
        """
        Enumerate items in storage order.

        Args:
            types: Keep only items of these types. None means no type
                constraint; an empty set means no items.
            text_search: Search term, honoured only when
                ``supports_text_search`` is True. Stores may return a superset
                of the whole-word matches; the engine narrows them.
        """
        ...

    async def count(self) -> int:
        """Total number of stored items."""
        return len(await self.list_items())

    async def close(self):
        """Release backend resources."""
        return None
