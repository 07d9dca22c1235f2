"""
Discovery query engine.

Pipeline per request:
1. Validate context and pagination
2. Resolve schema contexts to types and expand them over the hierarchy
3. Fetch candidates from the item store (the only await), pre-filtered
   by text when the store indexes it
4. Filter: type, text search, structured filter
5. Paginate and synthesize the catalog response
"""

import logging
import re
from typing import Optional

from ..config import Settings, settings as default_settings
from ..schema.loader import load_registry
from ..schema.registry import TypeRegistry
from ..stores import create_store
from ..stores.base import ItemStore
from .expansion import TypeExpander
from .models import DiscoveryRequest, DiscoveryResult
from .pagination import paginate
from .pipeline import FilterPipeline
from .synthesizer import ResponseSynthesizer
from .validator import ContextValidator

logger = logging.getLogger(__name__)

# Terms without word characters cannot be tokenized by a store index
HAS_WORD = re.compile(r"\w")


class DiscoveryEngine:
    """
    Answers discover requests over an item store.

    The hierarchy (through the registry) is injected and never modified, so
    one engine can serve any number of concurrent requests.

    Usage:
        engine = DiscoveryEngine(store, registry)
        result = await engine.discover(DiscoveryRequest(context={...}))
    """

    def __init__(
        self,
        store: ItemStore,
        registry: TypeRegistry,
        validator: Optional[ContextValidator] = None,
        synthesizer: Optional[ResponseSynthesizer] = None,
        pipeline: Optional[FilterPipeline] = None,
    ):
        self.store = store
        self.registry = registry
        self.hierarchy = registry.hierarchy
        self.validator = validator or ContextValidator(registry)
        self.expander = TypeExpander(self.hierarchy, registry)
        self.pipeline = pipeline or FilterPipeline()
        self.synthesizer = synthesizer or ResponseSynthesizer(self.hierarchy, registry)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DiscoveryEngine":
        """Load schemas and open the configured store."""
        settings = settings or default_settings
        registry = load_registry(settings)
        return cls(
            store=create_store(settings),
            registry=registry,
            validator=ContextValidator(
                registry,
                default_page=settings.default_page,
                default_limit=settings.default_limit,
                max_limit=settings.max_limit,
            ),
            synthesizer=ResponseSynthesizer(
                registry.hierarchy,
                registry,
                provider_id=settings.provider_id,
                start_date=settings.catalog_start_date,
                end_date=settings.catalog_end_date,
            ),
        )

    async def discover(self, request: DiscoveryRequest) -> DiscoveryResult:
        """
        Execute a discover request.

        Raises:
            DiscoveryError: On validation or filter failure
        """
        validated = self.validator.validate(
            request.context,
            request.pagination,
            text_search=request.text_search,
            filters=request.filters,
            require_search=request.require_search,
        )

        requested = self.expander.resolve(validated.context.schema_context)
        expanded = self.expander.expand(requested)
        constrained = validated.type_constrained
        logger.debug("Mapped schema types: %s -> %s", requested, sorted(expanded))

        # Text search only runs once a type constraint resolved
        text_search = validated.text_search if expanded else None

        # Store-side search is a coarse pre-filter; the whole-word pass below decides
        prefilter = (
            text_search
            if text_search and self.store.supports_text_search and HAS_WORD.search(text_search)
            else None
        )

        items = await self.store.list_items(
            types=expanded if constrained else None,
            text_search=prefilter,
        )

        items = self.pipeline.run(
            items,
            expanded,
            constrained,
            text_search=text_search,
            filters=validated.filters,
        )

        page = validated.pagination
        page_items = paginate(items, page.page, page.limit)
        logger.debug(
            "Pagination: page %d, limit %d, showing %d of %d items",
            page.page, page.limit, len(page_items), len(items),
        )

        return self.synthesizer.synthesize(page_items, validated.context, total_matches=len(items))

    async def close(self):
        await self.store.close()
