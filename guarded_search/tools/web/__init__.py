# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Web domain tools: search."""

from mcp.server.fastmcp import FastMCP

from guarded_search.pipeline import SearchPipeline
from guarded_search.tools.web.search import register_web_search


def register_web_tools(mcp: FastMCP, pipeline: SearchPipeline) -> None:
    """Register all web-domain tools with the MCP server.

    Args:
        mcp (FastMCP): The MCP server instance to register tools with.
        pipeline (SearchPipeline): Pipeline serving web_search calls.
    """
    register_web_search(mcp, pipeline)
