"""Error types for discovery requests.

Every validation failure is a ``DiscoveryError`` carrying a stable
``ErrorCode`` and an HTTP status. The API layer renders them as
``{"error": {"code", "message", "details"}}``.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Stable error codes returned to callers."""
    MISSING_CONTEXT = "MISSING_CONTEXT"
    MISSING_CONTEXT_FIELD = "MISSING_CONTEXT_FIELD"
    INVALID_SCHEMA_CONTEXT = "INVALID_SCHEMA_CONTEXT"
    MISSING_SCHEMA_CONTEXT = "MISSING_SCHEMA_CONTEXT"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    MISSING_SEARCH_PARAMETERS = "MISSING_SEARCH_PARAMETERS"
    INVALID_FILTER = "INVALID_FILTER"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DiscoveryError(Exception):
    """Base error for a rejected discovery request."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 400

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Serialize as the error response body."""
        error: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


class MissingContextError(DiscoveryError):
    code = ErrorCode.MISSING_CONTEXT

    def __init__(self):
        super().__init__("Context is required")


class MissingContextFieldError(DiscoveryError):
    code = ErrorCode.MISSING_CONTEXT_FIELD

    def __init__(self, field: str):
        super().__init__(f"Context field '{field}' is required", {"field": field})
        self.field = field


class InvalidSchemaContextError(DiscoveryError):
    code = ErrorCode.INVALID_SCHEMA_CONTEXT

    def __init__(self, message: str, schema_context: Any = None):
        details = {"schema_context": schema_context} if schema_context is not None else None
        super().__init__(message, details)
        self.schema_context = schema_context


class MissingSchemaContextError(DiscoveryError):
    code = ErrorCode.MISSING_SCHEMA_CONTEXT

    def __init__(self):
        super().__init__("At least one schema_context is required")


class InvalidPaginationError(DiscoveryError):
    code = ErrorCode.INVALID_PAGINATION

    def __init__(self, message: str, field: str, value: Any = None):
        super().__init__(message, {"field": field, "value": value})
        self.field = field


class MissingSearchParametersError(DiscoveryError):
    code = ErrorCode.MISSING_SEARCH_PARAMETERS

    def __init__(
        self,
        message: str = "Either text_search or filters is required",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class InvalidFilterError(DiscoveryError):
    code = ErrorCode.INVALID_FILTER

    def __init__(self, filter_text: str, error: str):
        super().__init__(
            "Invalid JSONPath filter expression",
            {"filter": filter_text, "error": error},
        )
        self.filter_text = filter_text


class InternalError(DiscoveryError):
    code = ErrorCode.INTERNAL_ERROR
    status_code = 500

    def __init__(self):
        super().__init__("An unexpected error occurred while processing the request")


class HierarchyError(Exception):
    """Schema metadata could not be turned into a type hierarchy."""
