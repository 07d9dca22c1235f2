"""Response synthesis: catalog envelope and per-item context annotation."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Sequence

from ..schema.hierarchy import HierarchyTable
from ..schema.registry import TypeRegistry
from ..stores.base import Item, item_type
from .models import (
    Catalog,
    CatalogDescriptor,
    DiscoveryResult,
    RequestContext,
    ResponseContext,
)


@dataclass(frozen=True)
class CatalogFamily:
    """Descriptor used when a page holds any type under ``root``."""
    root: str
    name: str
    short_desc: str


# Checked in order; first family with a member in the page wins
CATALOG_FAMILIES: tuple[CatalogFamily, ...] = (
    CatalogFamily(
        root="beckn:ElectronicItem",
        name="Electronic Catalog",
        short_desc="Latest electronics, smartphones and televisions",
    ),
    CatalogFamily(
        root="beckn:GroceryItem",
        name="Grocery Catalog",
        short_desc="Fresh groceries and organic products",
    ),
)

DEFAULT_DESCRIPTOR = CatalogDescriptor(name="Beckn Catalog", short_desc="Items catalog")


def utc_timestamp(now: datetime) -> str:
    """ISO-8601 UTC timestamp with milliseconds and a ``Z`` suffix."""
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResponseSynthesizer:
    """Wraps a page of items in a catalog and stamps their contexts."""

    def __init__(
        self,
        hierarchy: HierarchyTable,
        registry: TypeRegistry,
        provider_id: str = "tech-store-001",
        start_date: str = "2025-01-27",
        end_date: str = "2026-12-31",
        families: Sequence[CatalogFamily] = CATALOG_FAMILIES,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.hierarchy = hierarchy
        self.registry = registry
        self.provider_id = provider_id
        self.start_date = start_date
        self.end_date = end_date
        self.families = tuple(families)
        self.clock = clock

    def describe(self, page_items: Sequence[Item]) -> CatalogDescriptor:
        """Pick the catalog descriptor from the types present in the page."""
        types = {t for t in map(item_type, page_items) if t}
        for family in self.families:
            members = self.hierarchy.descendants(family.root)
            if types & members:
                return CatalogDescriptor(family.name, family.short_desc)
        return DEFAULT_DESCRIPTOR

    def annotate(self, item: Item) -> Item:
        """Shallow copy of ``item`` with its own ``@context``."""
        return {**item, "@context": self.registry.context_uri_for(item_type(item))}

    def synthesize(
        self,
        page_items: Sequence[Item],
        context: RequestContext,
        total_matches: int = 0,
    ) -> DiscoveryResult:
        catalog = Catalog(
            descriptor=self.describe(page_items),
            provider_id=self.provider_id,
            start_date=self.start_date,
            end_date=self.end_date,
            items=[self.annotate(item) for item in page_items],
        )
        return DiscoveryResult(
            context=ResponseContext(
                ts=utc_timestamp(self.clock()),
                msgid=context.msgid,
                traceid=context.traceid,
                network_id=context.network_id,
                schema_context=list(context.schema_context),
            ),
            catalogs=[catalog],
            total_matches=total_matches,
        )
