# Copyright (c) 2026 Heureum AI. All rights reserved.

"""
Guarded web search request pipeline.

Each request passes, in order: rate limit, query sanitization, injection
filter, cache lookup, provider call, response sanitization and formatting.
The first failing step ends the request with an error result; nothing in
here raises for a per-request failure.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from guarded_search.common.cache import TTLCache
from guarded_search.common.content_safety import detect_query_injection, format_search_output
from guarded_search.common.errors import ErrorCategory, classify_error, error_text, user_message
from guarded_search.common.rate_limit import SlidingWindowRateLimiter
from guarded_search.common.sanitize import (
    MAX_QUERY_LENGTH,
    MAX_RESPONSE_LENGTH,
    sanitize_query,
    sanitize_response,
)
from guarded_search.config import Settings
from guarded_search.models import ToolResult
from guarded_search.providers.base import SearchProvider

logger = logging.getLogger(__name__)

MIN_RESULTS = 1
MAX_RESULTS = 10
DEFAULT_RESULTS = 5


class SearchPipeline:
    """Runs web_search requests against one provider.

    Owns its rate-limit window and cache, so separate instances share no
    state.
    """

    def __init__(
        self,
        provider: SearchProvider,
        rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        cache: Optional[TTLCache] = None,
        *,
        max_query_length: int = MAX_QUERY_LENGTH,
        max_response_length: int = MAX_RESPONSE_LENGTH,
        cache_enabled: bool = True,
        provider_timeout: Optional[float] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            provider (SearchProvider): The search backend.
            rate_limiter (Optional[SlidingWindowRateLimiter]): Admission
                control. Defaults to 30 requests per 60 seconds.
            cache (Optional[TTLCache]): Result cache keyed by sanitized
                query. Defaults to a 15 minute, 100 entry cache.
            max_query_length (int): Maximum sanitized query length.
            max_response_length (int): Maximum sanitized summary length.
            cache_enabled (bool): Whether successful results are cached.
            provider_timeout (Optional[float]): Seconds to wait for the
                provider. None or a non-positive value waits indefinitely.
        """
        self.provider = provider
        # Both define __len__, so an empty instance is falsy
        self.rate_limiter = rate_limiter if rate_limiter is not None else SlidingWindowRateLimiter()
        self.cache = cache if cache is not None else TTLCache()
        self._max_query_length = max_query_length
        self._max_response_length = max_response_length
        self._cache_enabled = cache_enabled
        self._provider_timeout = provider_timeout if provider_timeout and provider_timeout > 0 else None

    @classmethod
    def from_settings(cls, provider: SearchProvider, settings: Settings) -> "SearchPipeline":
        """Build a pipeline using thresholds from a Settings object."""
        return cls(
            provider,
            SlidingWindowRateLimiter(
                max_requests=settings.RATE_LIMIT_MAX,
                window=settings.RATE_LIMIT_WINDOW,
            ),
            TTLCache(ttl=settings.CACHE_TTL, max_size=settings.CACHE_MAX_SIZE),
            max_query_length=settings.MAX_QUERY_LENGTH,
            max_response_length=settings.MAX_RESPONSE_LENGTH,
            cache_enabled=settings.CACHE_ENABLED,
            provider_timeout=settings.PROVIDER_TIMEOUT,
        )

    @property
    def max_query_length(self) -> int:
        """Maximum sanitized query length accepted by this pipeline."""
        return self._max_query_length

    def _reject(self, category: ErrorCategory, detail: str = "") -> ToolResult:
        """Build an error result for a category."""
        label = getattr(self.provider, "label", self.provider.get_name())
        return ToolResult.from_text(
            user_message(category, detail=detail, provider_label=label),
            is_error=True,
        )

    async def run(self, query: str, max_results: int = DEFAULT_RESULTS) -> ToolResult:
        """Handle one web_search request.

        Args:
            query (str): Raw caller query.
            max_results (int): Maximum number of sources to request,
                clamped to MIN_RESULTS..MAX_RESULTS.

        Returns:
            ToolResult: The formatted search result, or an error result with
                ``is_error=True``.
        """
        if not self.rate_limiter.check():
            logger.warning("Rate limit exceeded", extra={"category": ErrorCategory.RATE_LIMITED.value})
            return self._reject(ErrorCategory.RATE_LIMITED)

        clean_query = sanitize_query(query, self._max_query_length)
        if not clean_query:
            logger.warning(
                "Query empty after sanitization",
                extra={"category": ErrorCategory.EMPTY_QUERY.value},
            )
            return self._reject(ErrorCategory.EMPTY_QUERY)

        rule = detect_query_injection(clean_query)
        if rule is not None:
            logger.warning(
                "Injection pattern detected in query (rule=%r): %s",
                rule,
                clean_query[:100],
                extra={"query": clean_query[:100], "category": ErrorCategory.INJECTION_REJECTED.value},
            )
            return self._reject(ErrorCategory.INJECTION_REJECTED)

        if self._cache_enabled:
            cached = self.cache.get(clean_query)
            if cached is not None:
                logger.debug("Cache hit: %s", clean_query[:60], extra={"query": clean_query[:60]})
                return cached

        max_results = min(max(max_results, MIN_RESULTS), MAX_RESULTS)
        provider_name = self.provider.get_name()
        logger.info(
            "web_search called: query=%r max_results=%d provider=%s",
            clean_query[:100],
            max_results,
            provider_name,
            extra={"query": clean_query[:100], "max_results": max_results, "provider": provider_name},
        )

        try:
            result = await self._search(clean_query, max_results)
        except Exception as e:
            message = error_text(e)
            category = classify_error(e)
            logger.error(
                "web_search failed (%s): %s",
                category.value,
                message,
                extra={"query": clean_query[:100], "category": category.value, "error": message},
            )
            return self._reject(category, detail=message)

        clean_summary = sanitize_response(result.summary, self._max_response_length)
        output = format_search_output(clean_summary, result.sources)

        logger.info(
            "web_search completed: query=%r response_length=%d source_count=%d",
            clean_query[:60],
            len(clean_summary),
            len(result.sources),
            extra={
                "query": clean_query[:60],
                "response_length": len(clean_summary),
                "source_count": len(result.sources),
            },
        )

        tool_result = ToolResult.from_text(output)
        if self._cache_enabled:
            self.cache.set(clean_query, tool_result)
        return tool_result

    async def _search(self, query: str, max_results: int):
        """Call the provider, applying the configured timeout."""
        if self._provider_timeout is None:
            return await self.provider.search(query, max_results)
        return await asyncio.wait_for(
            self.provider.search(query, max_results),
            timeout=self._provider_timeout,
        )
