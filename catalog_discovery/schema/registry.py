"""Type registry: resolves schema-context URIs to registered item types."""

import re
from typing import Optional

from .hierarchy import HierarchyTable

# URI segments are separated by path, fragment and CURIE delimiters
_SEGMENT_SPLIT = re.compile(r"[/#:]")
_DOCUMENT_SUFFIXES = (".jsonld", ".json")
_QUERY = re.compile(r"\?[^#]*")


def local_name(type_id: str) -> str:
    """Strip the prefix of a type identifier (``beckn:SmartphoneItem`` -> ``SmartphoneItem``)."""
    return _SEGMENT_SPLIT.split(type_id)[-1]


def uri_segments(uri: str) -> list[str]:
    """Split a URI into comparable segments, dropping the query and document suffixes."""
    segments = []
    for segment in _SEGMENT_SPLIT.split(_QUERY.sub("", uri)):
        for suffix in _DOCUMENT_SUFFIXES:
            if segment.endswith(suffix):
                segment = segment[: -len(suffix)]
                break
        if segment:
            segments.append(segment)
    return segments


class TypeRegistry:
    """
    Known item types and the context URI of each.

    A schema-context URI resolves to a type when one of its segments equals
    the type's local name. Names are compared longest-first so that
    ``TelevisionItem`` wins over a registered ``Item``.
    """

    def __init__(
        self,
        hierarchy: HierarchyTable,
        base_context_uri: str,
        context_template: str,
        context_uris: Optional[dict[str, str]] = None,
    ):
        self.hierarchy = hierarchy
        self.base_context_uri = base_context_uri
        self.context_template = context_template
        self._context_uris = dict(context_uris or {})

        by_name: dict[str, str] = {}
        for type_id in sorted(hierarchy.types):
            by_name.setdefault(local_name(type_id), type_id)
        self._names = sorted(by_name, key=lambda n: (-len(n), n))
        self._by_name = by_name

    def is_base_context(self, uri: str) -> bool:
        return uri == self.base_context_uri

    def resolve(self, uri: str) -> Optional[str]:
        """Type identifier referenced by ``uri``, or None when none matches."""
        if not isinstance(uri, str):
            return None
        segments = set(uri_segments(uri))
        for name in self._names:
            if name in segments:
                return self._by_name[name]
        return None

    def context_uri_for(self, type_id: Optional[str]) -> str:
        """Context URI for an item of ``type_id``."""
        if not isinstance(type_id, str) or type_id not in self.hierarchy:
            return self.base_context_uri
        if type_id in self._context_uris:
            return self._context_uris[type_id]
        return self.context_template.format(name=local_name(type_id))
