"""ViewConfig: per-class behaviour switches for typed views.

ViewConfig is a frozen (immutable) dataclass.  A view class carries one as
its ``config`` class attribute; subclasses override it to change caching
or equality semantics for all of their instances.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ViewConfig"]


@dataclass(frozen=True, slots=True)
class ViewConfig:
    """Immutable configuration for a TypedView class.

    Attributes:
        cache_conversions: When True, each instance memoizes ``get()`` results
            per (key, requested type).  Default True.
        max_cache_size: Maximum number of memoized results per instance (>= 1).
            The least-recently-used entry is silently evicted beyond this.
        null_equals_missing: When True, an object entry holding null is
            treated as equivalent to a missing key for equality and hashing.
            Default True.
    """

    cache_conversions: bool = True
    max_cache_size: int = 128
    null_equals_missing: bool = True

    def __post_init__(self) -> None:
        if self.max_cache_size < 1:
            msg = f"max_cache_size must be >= 1, got {self.max_cache_size}"
            raise ValueError(msg)
