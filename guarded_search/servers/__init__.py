# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Server factory and registry."""
from typing import Optional

from mcp.server.fastmcp import FastMCP

from guarded_search.config import settings
from guarded_search.pipeline import SearchPipeline


def create_server(server_key: str, pipeline: Optional[SearchPipeline] = None) -> FastMCP:
    """Create a FastMCP instance and register domain tools for the given key.

    Args:
        server_key (str): Key identifying the server configuration in settings,
            e.g. "web".
        pipeline (Optional[SearchPipeline]): Pipeline serving the web tools.
            Built from settings and the configured provider when omitted.

    Returns:
        FastMCP: A configured FastMCP server instance with domain tools registered.

    Raises:
        ValueError: If the server_key does not match any known server.
        ProviderInitError: If the configured search provider cannot be built.
    """
    cfg = settings.SERVERS[server_key]
    mcp = FastMCP(cfg.name, host=cfg.host, port=cfg.port)

    match server_key:
        case "web":
            from guarded_search.providers import get_provider
            from guarded_search.tools.web import register_web_tools

            if pipeline is None:
                provider = get_provider(settings.SEARCH_PROVIDER)
                pipeline = SearchPipeline.from_settings(provider, settings)
            register_web_tools(mcp, pipeline)
        case _:
            raise ValueError(f"Unknown server: {server_key}")

    return mcp
