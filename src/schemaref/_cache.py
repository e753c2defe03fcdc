"""Provides ResolutionCache, which memoizes the results of resolutions."""

import threading

from .types import ResolveResult

# a cache key is (kind of target, target, max_depth, include_circular, max_nesting);
# the kind is "name" or "pointer", so a schema name is never confused with a pointer
type CacheKey = tuple[str, str, int, bool, int]


class ResolutionCache:
    """A thread-safe store of finished resolution results.

    Entries are written once and never updated. If two callers compute the same key at
    the same time, the first result stored is kept; since resolution is deterministic
    for an unchanging document, the results are equal anyway.

    Schemas are copied on the way in and on the way out, so that a caller mutating a
    returned schema cannot alter the cache or the document.

    """

    def __init__(self):
        self._entries: dict[CacheKey, ResolveResult] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key: CacheKey):
        return key in self._entries

    def get(self, key: CacheKey) -> ResolveResult | None:
        """Return a copy of the cached result, or None if there is none."""
        result = self._entries.get(key)
        if result is None:
            return None
        return result.detached()

    def put(self, key: CacheKey, result: ResolveResult) -> ResolveResult:
        """Store the result unless the key is already present.

        Returns a copy of whichever result ends up stored under the key.

        """
        with self._lock:
            stored = self._entries.setdefault(key, result.detached())
        return stored.detached()

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()
