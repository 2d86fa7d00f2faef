# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Tests for provider error classification and user messages."""
import asyncio

import pytest

from guarded_search.common.errors import (
    ERROR_RULES,
    ErrorCategory,
    ProviderError,
    classify_error,
    classify_message,
    user_message,
)


class TestClassifyMessage:
    """Tests for free-text error classification."""

    def test_rule_order(self):
        """Rules are evaluated auth, rate limit, timeout, safety."""
        assert [category for _, category in ERROR_RULES] == [
            ErrorCategory.AUTHENTICATION_FAILED,
            ErrorCategory.UPSTREAM_RATE_LIMITED,
            ErrorCategory.TIMEOUT,
            ErrorCategory.SAFETY_BLOCKED,
        ]

    @pytest.mark.parametrize(
        "message, expected",
        [
            ("API_KEY_INVALID: API key not valid", ErrorCategory.AUTHENTICATION_FAILED),
            ("429 quota exceeded", ErrorCategory.UPSTREAM_RATE_LIMITED),
            ("Resource has been exhausted (check quota).", ErrorCategory.UPSTREAM_RATE_LIMITED),
            ("rate exceeded", ErrorCategory.UPSTREAM_RATE_LIMITED),
            ("request timeout after 30s", ErrorCategory.TIMEOUT),
            ("The operation was aborted", ErrorCategory.TIMEOUT),
            ("DEADLINE_EXCEEDED", ErrorCategory.TIMEOUT),
            ("finishReason: SAFETY", ErrorCategory.SAFETY_BLOCKED),
            ("prompt blocked", ErrorCategory.SAFETY_BLOCKED),
            ("Internal server error", ErrorCategory.PROVIDER_FAILURE),
        ],
    )
    def test_categories(self, message: str, expected: ErrorCategory):
        """Verify each substring rule."""
        assert classify_message(message) == expected

    def test_priority_auth_over_timeout(self):
        """A message matching several rules takes the first."""
        assert classify_message("API_KEY check hit a timeout") == ErrorCategory.AUTHENTICATION_FAILED

    def test_priority_rate_over_safety(self):
        """Rate-limit wording wins over safety wording."""
        assert classify_message("429: blocked by quota") == ErrorCategory.UPSTREAM_RATE_LIMITED

    def test_case_sensitive(self):
        """Substring matching is case-sensitive."""
        assert classify_message("api_key missing") == ErrorCategory.PROVIDER_FAILURE
        assert classify_message("Timeout") == ErrorCategory.PROVIDER_FAILURE


class TestClassifyError:
    """Tests for exception classification."""

    def test_explicit_category_wins(self):
        """A ProviderError category overrides the message text."""
        exc = ProviderError("API_KEY timeout", category=ErrorCategory.SAFETY_BLOCKED)
        assert classify_error(exc) == ErrorCategory.SAFETY_BLOCKED

    def test_provider_error_without_category_uses_message(self):
        """Without a category the message is classified."""
        assert classify_error(ProviderError("429 Too Many Requests")) == ErrorCategory.UPSTREAM_RATE_LIMITED

    @pytest.mark.parametrize("exc", [TimeoutError(), asyncio.TimeoutError()])
    def test_timeout_exceptions(self, exc):
        """Runtime timeouts map to TIMEOUT even with an empty message."""
        assert classify_error(exc) == ErrorCategory.TIMEOUT

    def test_generic_exception(self):
        """Verify that any other exception falls back to message matching."""
        assert classify_error(RuntimeError("boom")) == ErrorCategory.PROVIDER_FAILURE


class TestUserMessage:
    """Tests for user-facing message templates."""

    @pytest.mark.parametrize(
        "category, expected",
        [
            (ErrorCategory.RATE_LIMITED, "[web_search error: rate limit exceeded, try again later]"),
            (ErrorCategory.EMPTY_QUERY, "[web_search error: query was empty after sanitization]"),
            (ErrorCategory.INJECTION_REJECTED, "[web_search error: query rejected by content filter]"),
            (ErrorCategory.AUTHENTICATION_FAILED, "[web_search error: authentication failed]"),
            (ErrorCategory.UPSTREAM_RATE_LIMITED, "[web_search error: Gemini rate limit, try again later]"),
            (ErrorCategory.TIMEOUT, "[web_search error: request timed out]"),
            (ErrorCategory.SAFETY_BLOCKED, "[web_search error: query blocked by Gemini safety filters]"),
        ],
    )
    def test_fixed_templates(self, category: ErrorCategory, expected: str):
        """Verify that fixed categories never include raw detail."""
        assert user_message(category, detail="secret internals", provider_label="Gemini") == expected

    def test_generic_message_truncated(self):
        """Raw detail in the generic message is capped at 200 characters."""
        detail = "x" * 500
        assert user_message(ErrorCategory.PROVIDER_FAILURE, detail=detail) == f"[web_search error: {'x' * 200}]"

    def test_all_categories_have_templates(self):
        """Every category produces a bracketed web_search error."""
        for category in ErrorCategory:
            message = user_message(category, detail="d")
            assert message.startswith("[web_search error: ")
            assert message.endswith("]")
