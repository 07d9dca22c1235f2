"""API routes and schemas."""

from .routes import router, get_engine
from .schemas import (
    DiscoverRequest,
    DiscoverResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "router",
    "get_engine",
    "DiscoverRequest",
    "DiscoverResponse",
    "ErrorResponse",
    "HealthResponse",
]
