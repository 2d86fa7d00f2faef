# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Shared infrastructure: cache, rate limiting, sanitization, content safety, errors."""

from guarded_search.common.cache import TTLCache
from guarded_search.common.content_safety import (
    BOUNDARY_END,
    BOUNDARY_START,
    detect_query_injection,
    format_search_output,
    is_suspicious,
    neutralize_markers,
)
from guarded_search.common.errors import (
    ErrorCategory,
    ProviderError,
    ProviderInitError,
    classify_error,
    classify_message,
    user_message,
)
from guarded_search.common.rate_limit import SlidingWindowRateLimiter
from guarded_search.common.sanitize import sanitize_query, sanitize_response

__all__ = [
    "TTLCache",
    "BOUNDARY_START",
    "BOUNDARY_END",
    "detect_query_injection",
    "format_search_output",
    "is_suspicious",
    "neutralize_markers",
    "ErrorCategory",
    "ProviderError",
    "ProviderInitError",
    "classify_error",
    "classify_message",
    "user_message",
    "SlidingWindowRateLimiter",
    "sanitize_query",
    "sanitize_response",
]
