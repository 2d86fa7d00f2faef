# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Search provider registry."""

from guarded_search.common.errors import ProviderInitError
from guarded_search.config import settings
from guarded_search.providers.base import SearchProvider, SearchResult, Source


def get_provider(name: str) -> SearchProvider:
    """Build the search provider registered under ``name``.

    Args:
        name (str): Provider name, e.g. "gemini" or "openai".

    Returns:
        SearchProvider: A ready-to-use provider instance.

    Raises:
        ProviderInitError: If the name is unknown, the provider is missing
            required configuration, or its SDK client fails to build.
    """
    try:
        match name.strip().lower():
            case "gemini":
                from guarded_search.providers.gemini_search import GeminiSearchProvider

                return GeminiSearchProvider(
                    api_key=settings.GEMINI_API_KEY,
                    model=settings.GEMINI_SEARCH_MODEL,
                )
            case "openai":
                from guarded_search.providers.openai_search import OpenAISearchProvider

                return OpenAISearchProvider(
                    api_key=settings.OPENAI_API_KEY,
                    model=settings.OPENAI_SEARCH_MODEL,
                )
            case _:
                raise ProviderInitError(f"Unknown search provider: {name}")
    except ProviderInitError:
        raise
    except Exception as e:
        raise ProviderInitError(f"Failed to initialize {name} provider: {e}") from e


__all__ = ["SearchProvider", "SearchResult", "Source", "get_provider"]
