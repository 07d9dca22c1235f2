"""
Request context validation.

Checks run in a fixed order and the first failure is raised:
context presence, required fields, schema_context shape, pagination,
schema_context entries, search-parameter types, then (browser search
only) search-parameter presence.
"""

import logging
from typing import Any, Mapping, Optional

from ..errors import (
    InvalidFilterError,
    InvalidPaginationError,
    InvalidSchemaContextError,
    MissingContextError,
    MissingContextFieldError,
    MissingSearchParametersError,
)
from ..schema.registry import TypeRegistry
from .models import RequestContext, ValidatedRequest
from .pagination import Pagination

logger = logging.getLogger(__name__)

REQUIRED_CONTEXT_FIELDS = ("ts", "msgid", "traceid", "network_id", "schema_context")


def _as_int(value: Any) -> Optional[int]:
    """Integer value of ``value``, or None if it is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def normalize_term(value: Optional[str]) -> Optional[str]:
    """Strip a search term or filter; blank means not supplied."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class ContextValidator:
    """Validates request context and pagination against the type registry."""

    def __init__(
        self,
        registry: TypeRegistry,
        default_page: int = 1,
        default_limit: int = 20,
        max_limit: int = 100,
    ):
        self.registry = registry
        self.default_page = default_page
        self.default_limit = default_limit
        self.max_limit = max_limit

    def validate(
        self,
        context: Optional[Mapping[str, Any]],
        pagination: Optional[Mapping[str, Any]] = None,
        text_search: Any = None,
        filters: Any = None,
        require_search: bool = False,
    ) -> ValidatedRequest:
        """
        Validate a raw request.

        Raises:
            DiscoveryError: The first violated rule, in precedence order
        """
        if context is None or not isinstance(context, Mapping):
            raise MissingContextError()

        for field in REQUIRED_CONTEXT_FIELDS:
            if _is_missing(context.get(field)):
                raise MissingContextFieldError(field)

        schema_context = context["schema_context"]
        if not isinstance(schema_context, (list, tuple)):
            raise InvalidSchemaContextError("schema_context must be an array")

        page = self.validate_pagination(pagination)
        self.validate_schema_context(schema_context)

        text_search = normalize_term(self.check_text_search(text_search))
        filters = normalize_term(self.check_filters(filters))
        if require_search:
            self.require_search_parameters(text_search, filters)

        logger.debug("Request validation passed - schema contexts: %s", schema_context)

        return ValidatedRequest(
            context=RequestContext(
                ts=context["ts"],
                msgid=context["msgid"],
                traceid=context["traceid"],
                network_id=context["network_id"],
                schema_context=tuple(schema_context),
            ),
            pagination=page,
            text_search=text_search,
            filters=filters,
        )

    def validate_pagination(self, pagination: Optional[Mapping[str, Any]]) -> Pagination:
        """Check page then limit; omitted keys fall back to defaults."""
        if pagination is None:
            return Pagination(self.default_page, self.default_limit)
        if not isinstance(pagination, Mapping):
            raise InvalidPaginationError("Pagination must be an object", "pagination", pagination)

        page = self.default_page
        raw_page = pagination.get("page")
        if raw_page is not None:
            page = _as_int(raw_page)
            if page is None or page < 1:
                raise InvalidPaginationError("Page must be a positive integer", "page", raw_page)

        limit = self.default_limit
        raw_limit = pagination.get("limit")
        if raw_limit is not None:
            limit = _as_int(raw_limit)
            if limit is None or not 1 <= limit <= self.max_limit:
                raise InvalidPaginationError(
                    f"Limit must be between 1 and {self.max_limit}", "limit", raw_limit
                )

        return Pagination(page, limit)

    def validate_schema_context(self, schema_context: list[Any]):
        """Every entry must be the base context or name a registered type."""
        for entry in schema_context:
            if isinstance(entry, str) and self.registry.is_base_context(entry):
                continue
            if self.registry.resolve(entry) is None:
                logger.debug("Invalid schema context: %s", entry)
                raise InvalidSchemaContextError(f"Invalid schema context: {entry}", entry)

    def check_text_search(self, text_search: Any) -> Optional[str]:
        if text_search is not None and not isinstance(text_search, str):
            raise MissingSearchParametersError(
                "text_search must be a string",
                {"field": "text_search", "value": text_search},
            )
        return text_search

    def check_filters(self, filters: Any) -> Optional[str]:
        if filters is not None and not isinstance(filters, str):
            raise InvalidFilterError(filters, "filters must be a string")
        return filters

    def require_search_parameters(self, text_search: Optional[str], filters: Optional[str]):
        if not text_search and not filters:
            raise MissingSearchParametersError()
