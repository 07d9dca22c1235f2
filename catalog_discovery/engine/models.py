"""Request and result types for the discovery engine."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..stores.base import Item
from .pagination import Pagination


@dataclass
class DiscoveryRequest:
    """Raw discover request, as received from a caller."""
    context: Optional[Mapping[str, Any]] = None
    text_search: Any = None
    filters: Any = None
    pagination: Optional[Mapping[str, Any]] = None
    # Browser search requires a search term or a filter
    require_search: bool = False


@dataclass(frozen=True)
class RequestContext:
    """Validated request context."""
    ts: Any
    msgid: Any
    traceid: Any
    network_id: Any
    schema_context: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidatedRequest:
    """A request that passed validation."""
    context: RequestContext
    pagination: Pagination
    text_search: Optional[str] = None
    filters: Optional[str] = None

    @property
    def type_constrained(self) -> bool:
        """True when the caller asked for specific types at all."""
        return bool(self.context.schema_context)


@dataclass
class CatalogDescriptor:
    name: str
    short_desc: str


@dataclass
class Catalog:
    """Synthesized catalog wrapping one page of items."""
    descriptor: CatalogDescriptor
    provider_id: str
    start_date: str
    end_date: str
    items: list[Item] = field(default_factory=list)


@dataclass
class ResponseContext:
    ts: str
    msgid: Any
    traceid: Any
    network_id: Any
    schema_context: list[str] = field(default_factory=list)


@dataclass
class DiscoveryResult:
    """Successful discover response."""
    context: ResponseContext
    catalogs: list[Catalog]
    total_matches: int = 0
