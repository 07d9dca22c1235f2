"""Materialized item-type hierarchy.

Built once from parent -> child edges, then frozen. Every node maps to its
full descendant set, including itself, so a filter for a parent type matches
items of any depth below it.
"""

from types import MappingProxyType
from typing import Iterable, Mapping

from ..errors import HierarchyError


class HierarchyTable:
    """
    Read-only mapping of type identifier -> descendant identifiers.

    Usage:
        table = HierarchyTable.from_edges({
            "beckn:ElectronicItem": ["beckn:SmartphoneItem", "beckn:TelevisionItem"],
        })
        table.descendants("beckn:ElectronicItem")
        # frozenset({"beckn:ElectronicItem", "beckn:SmartphoneItem", "beckn:TelevisionItem"})
    """

    def __init__(self, closure: Mapping[str, frozenset[str]]):
        self._closure = MappingProxyType(dict(closure))

    @classmethod
    def from_edges(
        cls,
        edges: Mapping[str, Iterable[str]],
        nodes: Iterable[str] = (),
    ) -> "HierarchyTable":
        """
        Build the transitive, reflexive closure of ``edges``.

        Args:
            edges: Parent type -> direct child types
            nodes: Extra types with no edges (leaf types without a parent)

        Raises:
            HierarchyError: If the edges contain a cycle
        """
        children: dict[str, set[str]] = {}
        for parent, kids in edges.items():
            children.setdefault(parent, set()).update(kids)
            for kid in kids:
                children.setdefault(kid, set())
        for node in nodes:
            children.setdefault(node, set())

        closure: dict[str, frozenset[str]] = {}
        visiting: set[str] = set()

        def visit(node: str) -> frozenset[str]:
            if node in closure:
                return closure[node]
            if node in visiting:
                raise HierarchyError(f"Type hierarchy contains a cycle through {node}")
            visiting.add(node)
            found = {node}
            for kid in sorted(children[node]):
                found |= visit(kid)
            visiting.discard(node)
            closure[node] = frozenset(found)
            return closure[node]

        for node in sorted(children):
            visit(node)

        return cls(closure)

    def descendants(self, type_id: str) -> frozenset[str]:
        """Descendants of ``type_id``; an unknown type is only its own descendant."""
        return self._closure.get(type_id, frozenset((type_id,)))

    @property
    def types(self) -> frozenset[str]:
        return frozenset(self._closure)

    def as_dict(self) -> dict[str, list[str]]:
        return {parent: sorted(kids) for parent, kids in sorted(self._closure.items())}

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._closure

    def __len__(self) -> int:
        return len(self._closure)
