"""Discovery query engine."""

from .engine import DiscoveryEngine
from .expansion import TypeExpander
from .models import (
    Catalog,
    CatalogDescriptor,
    DiscoveryRequest,
    DiscoveryResult,
    RequestContext,
    ResponseContext,
    ValidatedRequest,
)
from .pagination import Pagination, paginate
from .pipeline import FilterPipeline, scoped_expression, word_pattern
from .synthesizer import CATALOG_FAMILIES, CatalogFamily, ResponseSynthesizer
from .validator import REQUIRED_CONTEXT_FIELDS, ContextValidator

__all__ = [
    # Engine
    "DiscoveryEngine",
    # Stages
    "ContextValidator",
    "TypeExpander",
    "FilterPipeline",
    "ResponseSynthesizer",
    "paginate",
    "scoped_expression",
    "word_pattern",
    # Models
    "Catalog",
    "CatalogDescriptor",
    "CatalogFamily",
    "CATALOG_FAMILIES",
    "DiscoveryRequest",
    "DiscoveryResult",
    "Pagination",
    "RequestContext",
    "ResponseContext",
    "ValidatedRequest",
    "REQUIRED_CONTEXT_FIELDS",
]
