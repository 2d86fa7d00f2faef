# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Error taxonomy and provider error classification.

Provider failures are mapped to a fixed set of categories, each with a
stable user-facing message. Raw provider errors are logged, never returned,
except for the first 200 characters in the generic case.
"""
from __future__ import annotations

import asyncio
import enum
from typing import Optional

MAX_ERROR_DETAIL_LENGTH = 200


class ErrorCategory(enum.Enum):
    """Every way a web_search request can be rejected or fail."""

    RATE_LIMITED = "rate_limited"
    EMPTY_QUERY = "empty_query"
    INJECTION_REJECTED = "injection_rejected"
    AUTHENTICATION_FAILED = "authentication_failed"
    UPSTREAM_RATE_LIMITED = "upstream_rate_limited"
    TIMEOUT = "timeout"
    SAFETY_BLOCKED = "safety_blocked"
    PROVIDER_FAILURE = "provider_failure"
    PROVIDER_INIT_FAILED = "provider_init_failed"


class ProviderError(Exception):
    """Raised by a search provider.

    Providers that know why a call failed pass an explicit ``category``;
    otherwise the message text is classified.
    """

    def __init__(self, message: str, category: Optional[ErrorCategory] = None) -> None:
        super().__init__(message)
        self.category = category


class ProviderInitError(Exception):
    """Raised when the configured search provider cannot be constructed."""


# Ordered (substrings, category) rules, first match wins. Substring matching
# is case-sensitive.
ERROR_RULES: tuple[tuple[tuple[str, ...], ErrorCategory], ...] = (
    (("API_KEY",), ErrorCategory.AUTHENTICATION_FAILED),
    (("429", "quota", "rate"), ErrorCategory.UPSTREAM_RATE_LIMITED),
    (("timeout", "aborted", "DEADLINE"), ErrorCategory.TIMEOUT),
    (("SAFETY", "blocked"), ErrorCategory.SAFETY_BLOCKED),
)

_MESSAGE_TEMPLATES: dict[ErrorCategory, str] = {
    ErrorCategory.RATE_LIMITED: "[web_search error: rate limit exceeded, try again later]",
    ErrorCategory.EMPTY_QUERY: "[web_search error: query was empty after sanitization]",
    ErrorCategory.INJECTION_REJECTED: "[web_search error: query rejected by content filter]",
    ErrorCategory.AUTHENTICATION_FAILED: "[web_search error: authentication failed]",
    ErrorCategory.UPSTREAM_RATE_LIMITED: "[web_search error: {provider} rate limit, try again later]",
    ErrorCategory.TIMEOUT: "[web_search error: request timed out]",
    ErrorCategory.SAFETY_BLOCKED: "[web_search error: query blocked by {provider} safety filters]",
    ErrorCategory.PROVIDER_FAILURE: "[web_search error: {detail}]",
    ErrorCategory.PROVIDER_INIT_FAILED: "[web_search error: search provider unavailable]",
}


def error_text(exc: BaseException) -> str:
    """Return the message of an exception, falling back to its type name."""
    return str(exc) or type(exc).__name__


def classify_message(message: str) -> ErrorCategory:
    """Classify a free-text provider error message.

    Args:
        message (str): The raw error message.

    Returns:
        ErrorCategory: The first matching category from ERROR_RULES, or
            PROVIDER_FAILURE when nothing matches.
    """
    for needles, category in ERROR_RULES:
        if any(needle in message for needle in needles):
            return category
    return ErrorCategory.PROVIDER_FAILURE


def classify_error(exc: BaseException) -> ErrorCategory:
    """Classify an exception raised by a provider call.

    An explicit ProviderError category wins, timeouts raised by the runtime
    map to TIMEOUT, and anything else falls back to message matching.

    Args:
        exc (BaseException): The exception raised by the provider.

    Returns:
        ErrorCategory: The category used to build the user message.
    """
    if isinstance(exc, ProviderError) and exc.category is not None:
        return exc.category
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCategory.TIMEOUT
    return classify_message(error_text(exc))


def user_message(category: ErrorCategory, detail: str = "", provider_label: str = "provider") -> str:
    """Build the fixed user-facing message for a category.

    Args:
        category (ErrorCategory): The error category.
        detail (str): Raw error text; only used for PROVIDER_FAILURE and cut
            to MAX_ERROR_DETAIL_LENGTH characters.
        provider_label (str): Human-readable provider name.

    Returns:
        str: A bracketed message starting with ``[web_search error:``.
    """
    return _MESSAGE_TEMPLATES[category].format(
        provider=provider_label,
        detail=detail[:MAX_ERROR_DETAIL_LENGTH],
    )
