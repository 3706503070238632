"""Canvas metadata cache and the providers it fetches from."""

from slidelayout.cache.providers import (
    CanvasProviderError,
    CanvasSizeProvider,
    HttpCanvasSizeProvider,
    StaticCanvasSizeProvider,
)
from slidelayout.cache.canvas_cache import (
    CacheStats,
    CanvasMetadataCache,
    get_cached_canvas_size,
    get_cached_layouts,
)

__all__ = [
    "CanvasProviderError",
    "CanvasSizeProvider",
    "HttpCanvasSizeProvider",
    "StaticCanvasSizeProvider",
    "CacheStats",
    "CanvasMetadataCache",
    "get_cached_canvas_size",
    "get_cached_layouts",
]
