"""Type expansion over the hierarchy."""

from typing import Iterable, Sequence

from ..schema.hierarchy import HierarchyTable
from ..schema.registry import TypeRegistry


class TypeExpander:
    """
    Resolve schema-context URIs to types and expand them to their descendants.

    Usage:
        expander = TypeExpander(hierarchy, registry)
        types = expander.resolve(["https://.../ElectronicItem/schema-context.jsonld"])
        expander.expand(types)
        # frozenset({"beckn:ElectronicItem", "beckn:SmartphoneItem", ...})
    """

    def __init__(self, hierarchy: HierarchyTable, registry: TypeRegistry):
        self.hierarchy = hierarchy
        self.registry = registry

    def resolve(self, schema_context: Sequence[str]) -> list[str]:
        """Types named by ``schema_context``, in order, without duplicates."""
        resolved: list[str] = []
        for uri in schema_context:
            if self.registry.is_base_context(uri):
                continue
            type_id = self.registry.resolve(uri)
            if type_id and type_id not in resolved:
                resolved.append(type_id)
        return resolved

    def expand(self, types: Iterable[str]) -> frozenset[str]:
        """Union of the descendant sets of ``types`` (each type included)."""
        expanded: set[str] = set()
        for type_id in types:
            expanded |= self.hierarchy.descendants(type_id)
        return frozenset(expanded)
