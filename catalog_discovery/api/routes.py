"""FastAPI routes for catalog discovery."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from .schemas import (
    DiscoverRequest,
    DiscoverResponse,
    ErrorResponse,
    HealthResponse,
)
from ..config import settings
from ..engine import DiscoveryEngine, DiscoveryRequest
from ..engine.synthesizer import utc_timestamp
from ..errors import DiscoveryError, InternalError, MissingSchemaContextError

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}


def get_engine(request: Request) -> DiscoveryEngine:
    """Engine built at startup and held on the application state."""
    return request.app.state.engine


async def _run_discovery(engine: DiscoveryEngine, request: DiscoveryRequest) -> DiscoverResponse:
    """Run the engine, hiding unexpected failures behind INTERNAL_ERROR."""
    try:
        result = await engine.discover(request)
    except DiscoveryError:
        raise
    except Exception:
        logger.exception("Internal server error while handling discover")
        raise InternalError()

    return DiscoverResponse.from_result(result)


@router.get("/health", response_model=HealthResponse)
async def health_check(engine: DiscoveryEngine = Depends(get_engine)):
    """Check service health and loaded data."""
    return HealthResponse(
        status="healthy",
        store=engine.store.name,
        item_types=len(engine.hierarchy),
        items=await engine.store.count(),
    )


@router.post(
    "/discover",
    response_model=DiscoverResponse,
    operation_id="discover",
    responses=ERROR_RESPONSES,
)
async def discover(
    request: Optional[DiscoverRequest] = None,
    engine: DiscoveryEngine = Depends(get_engine),
):
    """
    Discover catalog items.

    Items are narrowed by the types named in ``context.schema_context``
    (including all their subtypes), then by a whole-word ``text_search``,
    then by a JSONPath ``filters`` expression, and returned one page at a
    time inside a synthesized catalog.
    """
    if request is None:
        request = DiscoverRequest()
    logger.debug(
        "POST /discover - text_search: %s, filters: %s",
        request.text_search, request.filters,
    )
    return await _run_discovery(engine, DiscoveryRequest(
        context=request.context,
        text_search=request.text_search,
        filters=request.filters,
        pagination=request.pagination,
    ))


@router.get(
    "/discover/browser-search",
    response_model=DiscoverResponse,
    operation_id="browser_search",
    responses=ERROR_RESPONSES,
)
async def browser_search(
    schema_context: list[str] = Query(default=[], description="Schema context URIs (repeatable)"),
    text_search: Optional[str] = Query(default=None, description="Whole-word search term"),
    filters: Optional[str] = Query(default=None, description="JSONPath filter expression"),
    page: Optional[int] = Query(default=None, description="Page number (>= 1)"),
    limit: Optional[int] = Query(default=None, description="Page size (1-100)"),
    engine: DiscoveryEngine = Depends(get_engine),
):
    """
    Browser-friendly discovery over query parameters.

    The request context is generated server-side. At least one schema
    context and one of ``text_search`` or ``filters`` are required.
    """
    if not schema_context:
        raise MissingSchemaContextError()

    context = {
        "ts": utc_timestamp(datetime.now(timezone.utc)),
        "msgid": str(uuid.uuid4()),
        "traceid": str(uuid.uuid4()),
        "network_id": settings.network_id,
        "schema_context": schema_context,
    }
    pagination = {
        key: value
        for key, value in (("page", page), ("limit", limit))
        if value is not None
    }

    return await _run_discovery(engine, DiscoveryRequest(
        context=context,
        text_search=text_search,
        filters=filters,
        pagination=pagination,
        require_search=True,
    ))
