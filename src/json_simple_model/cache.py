"""ConversionCache: lock-guarded LRU memo for typed accessor results.

Each view instance owns its own cache -- there is no class-level shared
state.  Entries are keyed by ``(key, requested type)`` so asking for the
same key as two different types never returns a stale result of the
wrong type.  Explicit ``None`` results are memoized like any other value.

The conversion itself runs outside the lock: a conversion callback that
reads the same view again cannot deadlock.  When two threads miss on the
same key concurrently both compute, and the first stored result wins.

Example::

    cache = ConversionCache(max_size=64)
    cache.get_or_compute(("age", int), lambda: 30)  # computes
    cache.get_or_compute(("age", int), lambda: 31)  # returns 30
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Any

from cachetools import LRUCache

__all__ = ["ConversionCache"]

_MISSING = object()


class ConversionCache:
    """LRU-backed memo table for converted values.

    Args:
        max_size: Maximum number of results to hold.  Defaults to 128.
            When exceeded, the least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 128) -> None:
        self._cache: LRUCache[Hashable, Any] = LRUCache(maxsize=max_size)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Memo surface
    # ------------------------------------------------------------------

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the memoized result for ``key``, computing it on a miss.

        Args:
            key: Hashable cache key, usually ``(field key, requested type)``.
            compute: Zero-argument callable producing the result.  Exceptions
                it raises propagate and nothing is stored.

        Returns:
            The cached or freshly computed result (may be None).
        """
        with self._lock:
            cached = self._cache.get(key, _MISSING)
        if cached is not _MISSING:
            return cached

        result = compute()

        with self._lock:
            # First writer wins so every caller observes one result.
            return self._cache.setdefault(key, result)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
