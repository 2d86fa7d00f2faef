# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Gemini search provider.

Uses the google-genai SDK with the Google Search grounding tool. The model
answer becomes the summary and the grounding chunks become the sources.
"""
import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from guarded_search.common.errors import ErrorCategory, ProviderError, ProviderInitError
from guarded_search.providers.base import SearchResult, Source

logger = logging.getLogger(__name__)

_BLOCKING_FINISH_REASONS = {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"}


def _status_category(code: int) -> ErrorCategory | None:
    """Map an HTTP status code from the Gemini API to an error category."""
    if code in (401, 403):
        return ErrorCategory.AUTHENTICATION_FAILED
    if code == 429:
        return ErrorCategory.UPSTREAM_RATE_LIMITED
    if code in (408, 504):
        return ErrorCategory.TIMEOUT
    return None


class GeminiSearchProvider:
    """Web search through Gemini with Google Search grounding."""

    label = "Gemini"

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash", client=None) -> None:
        """Initialize the provider.

        Args:
            api_key (str): Gemini API key.
            model (str): Gemini model name.
            client: Optional pre-built ``genai.Client`` (used by tests).

        Raises:
            ProviderInitError: If no API key is configured.
        """
        if client is None:
            if not api_key:
                raise ProviderInitError(
                    "Gemini provider needs an API key. Set GEMINI_API_KEY in your .env file."
                )
            client = genai.Client(api_key=api_key)
        self._client = client
        self._model = model

    def get_name(self) -> str:
        return "gemini"

    async def search(self, query: str, max_results: int) -> SearchResult:
        """Run a grounded Gemini query.

        Args:
            query (str): The sanitized search query.
            max_results (int): Maximum number of sources to return.

        Returns:
            SearchResult: Summary text and up to ``max_results`` unique sources.

        Raises:
            ProviderError: On API errors, timeouts and safety blocks.
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=query,
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                ),
            )
        except genai_errors.APIError as e:
            logger.error("Gemini API error (%s): %s", e.code, e)
            raise ProviderError(str(e), category=_status_category(e.code or 0)) from e
        except httpx.TimeoutException as e:
            raise ProviderError(f"Gemini request timeout: {e}", category=ErrorCategory.TIMEOUT) from e

        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and getattr(feedback, "block_reason", None):
            raise ProviderError(
                f"Query blocked: {feedback.block_reason}",
                category=ErrorCategory.SAFETY_BLOCKED,
            )

        candidates = response.candidates or []
        candidate = candidates[0] if candidates else None
        finish_reason = getattr(candidate, "finish_reason", None)
        reason_name = getattr(finish_reason, "name", finish_reason)
        if reason_name in _BLOCKING_FINISH_REASONS:
            raise ProviderError(
                f"Response blocked: {reason_name}",
                category=ErrorCategory.SAFETY_BLOCKED,
            )

        return SearchResult(
            summary=response.text or "",
            sources=self._extract_sources(candidate, max_results),
        )

    @staticmethod
    def _extract_sources(candidate, max_results: int) -> list[Source]:
        """Collect unique web sources from grounding metadata."""
        metadata = getattr(candidate, "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        sources: list[Source] = []
        seen: set[str] = set()
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            uri = getattr(web, "uri", None)
            if not uri or uri in seen:
                continue
            seen.add(uri)
            sources.append(Source(title=web.title or uri, url=uri))
            if len(sources) >= max_results:
                break
        return sources
