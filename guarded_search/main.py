# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Server entry point."""

import logging
import sys

import anyio

from guarded_search.common.errors import ProviderInitError
from guarded_search.config import settings
from guarded_search.servers import create_server

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Send log records to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def main(mcp) -> None:
    """Serve the web MCP server over its configured transport."""
    cfg = settings.SERVERS["web"]
    logger.info("%s server started (provider=%s, transport=%s)", cfg.name, settings.SEARCH_PROVIDER, cfg.transport)
    match cfg.transport:
        case "stdio":
            await mcp.run_stdio_async()
        case "sse":
            await mcp.run_sse_async()
        case "streamable-http":
            await mcp.run_streamable_http_async()
        case _:
            raise ValueError(f"Unknown transport: {cfg.transport}")


def run() -> None:
    """Build the server and run it; exit with status 1 if the provider fails to initialize."""
    configure_logging()
    try:
        mcp = create_server("web")
    except ProviderInitError as e:
        logger.error("Failed to initialize provider %s: %s", settings.SEARCH_PROVIDER, e)
        sys.exit(1)
    anyio.run(main, mcp)


if __name__ == "__main__":
    run()
