"""Stdio MCP server for catalog discovery.

Exposes the discover operation via Model Context Protocol using stdio
transport, backed by the same engine as the HTTP API.

Usage:
    python -m catalog_discovery.mcp_server

Claude Desktop config:
    {
        "mcpServers": {
            "catalog-discovery": {
                "command": "python",
                "args": ["-m", "catalog_discovery.mcp_server"],
                "cwd": "/path/to/catalog/discovery"
            }
        }
    }
"""

import asyncio
import json
import logging
from typing import Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .api.schemas import DiscoverResponse
from .engine import DiscoveryEngine, DiscoveryRequest
from .errors import DiscoveryError, InternalError

logger = logging.getLogger(__name__)

# Initialize MCP server
server = Server("catalog-discovery")

_engine: Optional[DiscoveryEngine] = None


def get_engine() -> DiscoveryEngine:
    """Engine built from settings on first use."""
    global _engine
    if _engine is None:
        _engine = DiscoveryEngine.from_settings()
    return _engine


DISCOVER_TOOL = Tool(
    name="discover",
    description="""Discover catalog items (electronics, groceries, ...) by type, text and JSONPath filter.

Types come from context.schema_context URIs and include all subtypes, e.g. an ElectronicItem
context also returns smartphones and televisions. text_search matches whole words only.
filters is a JSONPath expression whose root is the items array, e.g. $[?@.brand == "Acme" && @.price < 1000].""",
    inputSchema={
        "type": "object",
        "properties": {
            "context": {
                "type": "object",
                "description": "ts, msgid, traceid, network_id and schema_context (array of URIs)",
            },
            "text_search": {"type": "string", "description": "Whole-word search term"},
            "filters": {"type": "string", "description": "JSONPath filter expression"},
            "pagination": {
                "type": "object",
                "properties": {
                    "page": {"type": "integer", "default": 1},
                    "limit": {"type": "integer", "default": 20},
                },
            },
        },
        "required": ["context"],
    },
)


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available discovery tools."""
    return [DISCOVER_TOOL]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Execute a discovery tool."""
    if name == "discover":
        return await _tool_discover(arguments, get_engine())
    return [TextContent(type="text", text=f"Unknown tool: {name}")]


async def _tool_discover(args: dict, engine: DiscoveryEngine) -> list[TextContent]:
    """Execute discover tool; errors are returned as their JSON body."""
    request = DiscoveryRequest(
        context=args.get("context"),
        text_search=args.get("text_search"),
        filters=args.get("filters"),
        pagination=args.get("pagination"),
    )
    try:
        result = await engine.discover(request)
        payload = DiscoverResponse.from_result(result).model_dump(by_alias=True)
    except DiscoveryError as e:
        payload = e.to_dict()
    except Exception:
        logger.exception("Internal error in discover tool")
        payload = InternalError().to_dict()

    return [TextContent(type="text", text=json.dumps(payload, indent=2, default=str))]


async def main():
    """Run the MCP server with stdio transport."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


if __name__ == "__main__":
    asyncio.run(main())
