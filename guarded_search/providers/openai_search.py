# Copyright (c) 2026 Heureum AI. All rights reserved.

"""OpenAI search provider.

Uses OpenAI's Chat Completions API with web_search_options on a
search-preview model. url_citation annotations become the sources.
"""
import logging
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse

import openai
from openai import AsyncOpenAI

from guarded_search.common.errors import ErrorCategory, ProviderError, ProviderInitError
from guarded_search.providers.base import SearchResult, Source

logger = logging.getLogger(__name__)

_TRACKING_PARAMS = {"utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content"}


def _strip_tracking_params(url: str) -> str:
    """Remove UTM tracking parameters from a URL."""
    parsed = urlparse(url)
    params = parse_qs(parsed.query)
    cleaned = {k: v for k, v in params.items() if k not in _TRACKING_PARAMS}
    new_query = urlencode(cleaned, doseq=True)
    return urlunparse(parsed._replace(query=new_query))


def _error_category(exc: openai.OpenAIError) -> ErrorCategory | None:
    """Map an OpenAI SDK exception to an error category, if it has a clear one."""
    if isinstance(exc, openai.AuthenticationError):
        return ErrorCategory.AUTHENTICATION_FAILED
    if isinstance(exc, openai.RateLimitError):
        return ErrorCategory.UPSTREAM_RATE_LIMITED
    if isinstance(exc, openai.APITimeoutError):
        return ErrorCategory.TIMEOUT
    return None


class OpenAISearchProvider:
    """Web search through an OpenAI search-preview model."""

    label = "OpenAI"

    def __init__(self, api_key: str, model: str = "gpt-4o-mini-search-preview", client=None) -> None:
        """Initialize the provider.

        Args:
            api_key (str): OpenAI API key.
            model (str): Search-capable chat model name.
            client: Optional pre-built ``AsyncOpenAI`` client (used by tests).

        Raises:
            ProviderInitError: If no API key is configured.
        """
        if client is None:
            if not api_key:
                raise ProviderInitError(
                    "OpenAI provider needs an API key. Set OPENAI_API_KEY in your .env file."
                )
            # Reuse connection pool across calls
            client = AsyncOpenAI(api_key=api_key)
        self._client = client
        self._model = model

    def get_name(self) -> str:
        return "openai"

    async def search(self, query: str, max_results: int) -> SearchResult:
        """Run a web search query.

        Args:
            query (str): The sanitized search query.
            max_results (int): Maximum number of sources to return.

        Returns:
            SearchResult: Summary text and up to ``max_results`` unique sources.

        Raises:
            ProviderError: On OpenAI API errors.
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": query}],
                web_search_options={"search_context_size": "medium"},
            )
        except openai.OpenAIError as e:
            error_type = type(e).__name__
            logger.error("OpenAI search API error (%s): %s", error_type, e)
            raise ProviderError(str(e) or error_type, category=_error_category(e)) from e

        message = response.choices[0].message
        text = message.content or ""

        sources: list[Source] = []
        seen: set[str] = set()
        for ann in getattr(message, "annotations", None) or []:
            citation = getattr(ann, "url_citation", None)
            if citation is None:
                continue
            url = _strip_tracking_params(citation.url)
            if url in seen:
                continue
            seen.add(url)
            sources.append(Source(title=citation.title or url, url=url))
            if len(sources) >= max_results:
                break

        return SearchResult(summary=text, sources=sources)
