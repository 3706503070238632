"""Pytest configuration and fixtures."""

import pytest

from slidelayout.cache.canvas_cache import CanvasMetadataCache
from slidelayout.cache.providers import CanvasProviderError, CanvasSizeProvider
from slidelayout.config import LayoutSettings
from slidelayout.engine.data_models import CanvasSize, LayoutRef
from slidelayout.engine.layout_engine import LayoutEngine


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingProvider(CanvasSizeProvider):
    """Provider returning a fixed size and counting calls."""

    def __init__(self, size: CanvasSize, layouts: list[LayoutRef] | None = None):
        self.size = size
        self.layouts = layouts or []
        self.size_calls = 0
        self.layout_calls = 0

    async def fetch_canvas_size(self, document_id: str) -> CanvasSize:
        self.size_calls += 1
        return self.size

    async def fetch_layouts(self, document_id: str) -> list[LayoutRef]:
        self.layout_calls += 1
        return list(self.layouts)


class FailingProvider(CanvasSizeProvider):
    """Provider that always fails."""

    def __init__(self):
        self.calls = 0

    async def fetch_canvas_size(self, document_id: str) -> CanvasSize:
        self.calls += 1
        raise CanvasProviderError(document_id, "connection refused")

    async def fetch_layouts(self, document_id: str) -> list[LayoutRef]:
        self.calls += 1
        raise CanvasProviderError(document_id, "connection refused")


@pytest.fixture
def canvas() -> CanvasSize:
    """Standard 16:9 canvas."""
    return CanvasSize(width=720, height=405)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CanvasMetadataCache:
    """Cache with a 300s TTL on the fake clock."""
    return CanvasMetadataCache(ttl_seconds=300, clock=clock)


@pytest.fixture
def provider(canvas: CanvasSize) -> RecordingProvider:
    return RecordingProvider(
        canvas,
        layouts=[LayoutRef(object_id="layout_1", name="TITLE"), LayoutRef(object_id="layout_2")],
    )


@pytest.fixture
def failing_provider() -> FailingProvider:
    return FailingProvider()


@pytest.fixture
def settings() -> LayoutSettings:
    """Default settings, independent of the environment and any .env file."""
    return LayoutSettings(_env_file=None)


@pytest.fixture
def engine(
    provider: RecordingProvider,
    cache: CanvasMetadataCache,
    settings: LayoutSettings,
) -> LayoutEngine:
    return LayoutEngine(provider, cache=cache, settings=settings)
