# Copyright (c) 2026 Heureum AI. All rights reserved.

"""MCP tool registrations, grouped by domain."""
