"""FastAPI application entry point with MCP server support."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_mcp import FastApiMCP

from .api import router
from .config import settings
from .engine import DiscoveryEngine
from .errors import DiscoveryError, InvalidPaginationError, MissingContextError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if getattr(app.state, "engine", None) is None:
        # Schema load failures abort startup
        app.state.engine = DiscoveryEngine.from_settings(settings)

    logger.info("Catalog discovery starting on %s:%s", settings.host, settings.port)
    logger.info("Item store: %s", app.state.engine.store.name)
    logger.info("MCP Server: http://%s:%s/mcp", settings.host, settings.port)

    yield

    # Shutdown
    await app.state.engine.close()
    logger.info("Catalog discovery shutting down")


app = FastAPI(
    title="Catalog Discovery",
    description="Discover typed catalog items by schema context, text search and JSONPath filters",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DiscoveryError)
async def discovery_error_handler(request: Request, exc: DiscoveryError) -> JSONResponse:
    """Render discovery errors as ``{"error": {...}}``."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def request_shape_error(exc: RequestValidationError) -> DiscoveryError:
    """
    Map a FastAPI request validation failure to a discovery error.

    Unparseable page/limit query parameters are INVALID_PAGINATION; any
    other failure (a body that is not a JSON object) means no usable context.
    """
    for error in exc.errors():
        loc = error.get("loc", ())
        if len(loc) == 2 and loc[0] == "query" and loc[1] in ("page", "limit"):
            field = loc[1]
            if field == "page":
                message = "Page must be a positive integer"
            else:
                message = f"Limit must be between 1 and {settings.max_limit}"
            return InvalidPaginationError(message, field, error.get("input"))
    return MissingContextError()


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request shape failures in the discovery error envelope."""
    logger.debug("Request validation failed: %s", exc.errors())
    error = request_shape_error(exc)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Include API routes
app.include_router(router, prefix="/beckn/v1", tags=["discovery"])

# MCP Server - exposes discovery endpoints as MCP tools
mcp = FastApiMCP(
    app,
    name="Catalog Discovery MCP",
    description="Typed catalog discovery with hierarchy-aware type filters",
    include_operations=["discover", "browser_search"],
)
mcp.mount_http()  # Mounts at /mcp by default


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Catalog Discovery",
        "version": "1.0.0",
        "docs": "/docs",
        "mcp": "/mcp",
        "endpoints": {
            "health": "/beckn/v1/health",
            "discover": "/beckn/v1/discover",
            "browser_search": "/beckn/v1/discover/browser-search",
        },
    }


def run():
    """Run the application with uvicorn."""
    import uvicorn
    uvicorn.run(
        "catalog_discovery.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    run()
