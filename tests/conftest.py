# Copyright (c) 2026 Heureum AI. All rights reserved.

"""Shared test configuration."""
import os
from unittest.mock import AsyncMock

import pytest

# Ensure test environment
os.environ.setdefault("SEARCH_PROVIDER", "gemini")
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("CACHE_ENABLED", "True")

from guarded_search.common.cache import TTLCache  # noqa: E402
from guarded_search.common.rate_limit import SlidingWindowRateLimiter  # noqa: E402
from guarded_search.pipeline import SearchPipeline  # noqa: E402
from guarded_search.providers.base import SearchResult, Source  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeProvider:
    """Provider stub with an AsyncMock ``search``."""

    label = "Gemini"

    def __init__(self) -> None:
        self.search = AsyncMock(
            return_value=SearchResult(
                summary="Mocked summary",
                sources=[Source(title="Example", url="https://example.com")],
            )
        )

    def get_name(self) -> str:
        return "gemini"


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def provider() -> FakeProvider:
    """A provider returning one mocked result."""
    return FakeProvider()


@pytest.fixture
def pipeline(provider, clock) -> SearchPipeline:
    """A pipeline with fresh state, driven by the fake clock."""
    return SearchPipeline(
        provider,
        SlidingWindowRateLimiter(max_requests=30, window=60.0, clock=clock),
        TTLCache(ttl=900.0, max_size=100, clock=clock),
    )
