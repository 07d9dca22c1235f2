"""Item-type schema: hierarchy, registry and loader."""

from .hierarchy import HierarchyTable
from .registry import TypeRegistry, local_name
from .loader import load_hierarchy, load_registry, normalize_type_id

__all__ = [
    "HierarchyTable",
    "TypeRegistry",
    "local_name",
    "load_hierarchy",
    "load_registry",
    "normalize_type_id",
]
