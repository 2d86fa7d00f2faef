# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Search provider contract."""
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field


class Source(BaseModel):
    """A web page cited by the provider.

    Attributes:
        title (str): Page title as reported by the provider.
        url (str): Page URL.
    """

    title: str
    url: str


class SearchResult(BaseModel):
    """Raw provider output for one query.

    Attributes:
        summary (str): Provider-written summary of the search results.
        sources (list[Source]): Cited pages, in provider order.
    """

    summary: str = ""
    sources: list[Source] = Field(default_factory=list)


@runtime_checkable
class SearchProvider(Protocol):
    """A web-search backend.

    ``search`` raises on failure. Raising ``ProviderError`` with an explicit
    category skips message-based classification.
    """

    label: str

    def get_name(self) -> str: ...

    async def search(self, query: str, max_results: int) -> SearchResult: ...
