"""Canvas metadata caching.

Fetching a presentation just to learn its page size costs a network round
trip, so sizes (plus layout and master ids) are cached per document for a
short TTL. Any structural mutation of a document must invalidate its entry.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Sequence

from slidelayout.cache.providers import CanvasSizeProvider
from slidelayout.engine.data_models import (
    DEFAULT_CANVAS,
    CachedCanvasEntry,
    CanvasSize,
    LayoutRef,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


@dataclass
class CacheStats:
    """Snapshot of the cache for debugging."""

    size: int
    entries: list[tuple[str, float]] = field(default_factory=list)  # (document id, age in seconds)


class CanvasMetadataCache:
    """Per-document canvas metadata with lazy TTL expiry.

    Expired entries are dropped when read; there is no background eviction.
    Entries are immutable snapshots, so concurrent writers simply overwrite
    each other.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CachedCanvasEntry] = {}

    def get(self, document_id: str) -> CachedCanvasEntry | None:
        """Get the entry for a document, or None if absent or expired."""
        entry = self._entries.get(document_id)
        if entry is None:
            return None

        if self._clock() - entry.timestamp > self.ttl_seconds:
            del self._entries[document_id]
            return None

        return entry

    def set(
        self,
        document_id: str,
        dimensions: CanvasSize,
        layouts: Sequence[LayoutRef] = (),
        masters: Sequence[LayoutRef] = (),
    ) -> CachedCanvasEntry:
        """Store a fresh entry, replacing any previous one."""
        entry = CachedCanvasEntry(
            dimensions=dimensions,
            layouts=tuple(layouts),
            masters=tuple(masters),
            timestamp=self._clock(),
        )
        self._entries[document_id] = entry
        return entry

    def invalidate(self, document_id: str) -> bool:
        """Drop the entry for a document. Returns whether one existed."""
        existed = self._entries.pop(document_id, None) is not None
        if existed:
            logger.debug("Invalidated canvas metadata for %s", document_id)
        return existed

    def on_mutation(self, document_id: str) -> None:
        """Mutation notifier hook: the document changed, forget what we know about it."""
        self.invalidate(document_id)

    def clear(self) -> None:
        """Clear all cache entries."""
        self._entries.clear()

    def stats(self) -> CacheStats:
        """Entry count and age of each entry."""
        now = self._clock()
        return CacheStats(
            size=len(self._entries),
            entries=[(doc_id, now - e.timestamp) for doc_id, e in self._entries.items()],
        )

    def __len__(self) -> int:
        return len(self._entries)


async def get_cached_canvas_size(
    cache: CanvasMetadataCache,
    provider: CanvasSizeProvider,
    document_id: str,
    default: CanvasSize = DEFAULT_CANVAS,
) -> CanvasSize:
    """Canvas size of a document, from the cache or the provider.

    A failing provider is not retried here: the default size is used and
    cached like a real answer until the entry expires or is invalidated.
    """
    cached = cache.get(document_id)
    if cached is not None:
        return cached.dimensions

    try:
        dimensions = await provider.fetch_canvas_size(document_id)
    except Exception as e:
        logger.warning(
            "Failed to fetch canvas size for %s, using defaults: %s", document_id, e
        )
        dimensions = default

    cache.set(document_id, dimensions)
    return dimensions


async def get_cached_layouts(
    cache: CanvasMetadataCache,
    provider: CanvasSizeProvider,
    document_id: str,
    default: CanvasSize = DEFAULT_CANVAS,
) -> list[LayoutRef]:
    """Layouts of a document, from the cache or the provider.

    A fresh fetch keeps the cached dimensions and masters. On failure an
    empty list is returned and the cache is left alone.
    """
    cached = cache.get(document_id)
    if cached is not None and cached.layouts:
        return list(cached.layouts)

    try:
        layouts = await provider.fetch_layouts(document_id)
    except Exception as e:
        logger.warning("Failed to fetch layouts for %s: %s", document_id, e)
        return []

    cache.set(
        document_id,
        cached.dimensions if cached is not None else default,
        layouts,
        cached.masters if cached is not None else (),
    )
    return list(layouts)
