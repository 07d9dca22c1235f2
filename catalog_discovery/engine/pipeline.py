"""
Item filter pipeline.

Stages run in a fixed order over the candidate items:
1. Type: keep items whose @type is in the expanded type set
2. Text search: whole-word, case-insensitive match on descriptor text and @type
3. Structured filter: RFC 9535 JSONPath expression addressed at the items array
"""

import logging
import re
from typing import Optional, Sequence

import jsonpath

from ..errors import InvalidFilterError
from ..stores.base import Item, item_descriptor, item_type

logger = logging.getLogger(__name__)

# Descriptor fields searched by the text stage, besides @type
SEARCH_FIELDS = ("schema:name", "beckn:shortDesc", "beckn:longDesc")


def word_pattern(term: str) -> re.Pattern:
    """Regex matching ``term`` as a whole word, ignoring case."""
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


def scoped_expression(filters: str) -> str:
    """Rewrite a caller filter so that its root is the items array."""
    expression = filters.strip()
    if expression.startswith("$"):
        expression = expression[1:]
    return f"$.items{expression}"


class FilterPipeline:
    """Applies the type, text and structured filter stages."""

    def filter_by_type(
        self,
        items: Sequence[Item],
        expanded_types: frozenset[str],
        type_constrained: bool,
    ) -> list[Item]:
        if not type_constrained:
            return list(items)
        return [item for item in items if item_type(item) in expanded_types]

    def matches_text(self, item: Item, pattern: re.Pattern) -> bool:
        descriptor = item_descriptor(item)
        candidates = [descriptor.get(f) for f in SEARCH_FIELDS] + [item.get("@type")]
        return any(isinstance(c, str) and pattern.search(c) for c in candidates)

    def search_text(self, items: Sequence[Item], term: str) -> list[Item]:
        pattern = word_pattern(term)
        return [item for item in items if self.matches_text(item, pattern)]

    def apply_path_filter(self, items: Sequence[Item], filters: str) -> list[Item]:
        """
        Evaluate a JSONPath filter against ``{"items": items}``.

        Matched objects are kept; a matched array contributes its objects.

        Raises:
            InvalidFilterError: If the expression cannot be parsed or evaluated
        """
        query = scoped_expression(filters)
        try:
            matches = jsonpath.compile(query).findall({"items": list(items)})
        except Exception as e:
            logger.debug("Invalid JSONPath filter: %s - %s", filters, e)
            raise InvalidFilterError(filters, str(e)) from e

        result: list[Item] = []
        for value in matches:
            if isinstance(value, dict):
                result.append(value)
            elif isinstance(value, list):
                result.extend(v for v in value if isinstance(v, dict))
        logger.debug("JSONPath filter '%s': %d -> %d items", query, len(items), len(result))
        return result

    def run(
        self,
        items: Sequence[Item],
        expanded_types: frozenset[str],
        type_constrained: bool,
        text_search: Optional[str] = None,
        filters: Optional[str] = None,
    ) -> list[Item]:
        """
        Run all stages.

        Args:
            items: Candidate items from storage
            expanded_types: Types allowed by the request, after expansion
            type_constrained: Whether the request named any schema context
            text_search: Whole-word term; ignored when no type resolved
            filters: JSONPath expression
        """
        before = len(items)
        result = self.filter_by_type(items, expanded_types, type_constrained)
        logger.debug("Schema type filter %s: %d -> %d items", sorted(expanded_types), before, len(result))

        if text_search and expanded_types:
            before = len(result)
            result = self.search_text(result, text_search)
            logger.debug("Text search '%s': %d -> %d items", text_search, before, len(result))

        if filters:
            result = self.apply_path_filter(result, filters)

        return result