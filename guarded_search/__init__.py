# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Guarded web search MCP server."""

__version__ = "0.1.0"
