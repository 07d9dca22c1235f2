#!/usr/bin/env python
"""Standalone MCP server runner."""
import asyncio
import sys
import os

# Ensure the project is in the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# Import and run
from catalog_discovery.mcp_server import main
asyncio.run(main())
