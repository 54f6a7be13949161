"""
Path normalization for findpath.

Resolves directories and candidate names into absolute, normalized paths and
computes parent directories. Recent results are memoized in a bounded cache
with oldest-first eviction.
"""

import os
import threading
from typing import Dict, Tuple, Any


class PathNormalizer:
    """
    Resolves path segments and parent directories with a bounded cache.

    Only inputs that are already absolute once joined are cached, so results
    never depend on the process working directory at the time of caching.
    """

    def __init__(self, max_size: int = 1000):
        """
        Initialize the normalizer.

        Args:
            max_size: Maximum number of entries per cache (0 disables caching)
        """
        self.max_size = max_size
        self._resolve_cache: Dict[Tuple[str, ...], str] = {}
        self._parent_cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    def resolve(self, *segments: str) -> str:
        """
        Join and normalize segments into an absolute path.

        Later absolute segments replace earlier ones. Empty segments are
        ignored, and no segments at all resolve to the working directory.
        A leading double slash is kept, as POSIX allows it to carry an
        implementation-defined meaning; Node's path.resolve collapses it.
        """
        parts = tuple(os.fspath(segment) for segment in segments if segment)
        joined = os.path.join(*parts) if parts else ''

        if not os.path.isabs(joined):
            return os.path.abspath(joined or os.curdir)

        with self._lock:
            cached = self._resolve_cache.get(parts)
        if cached is not None:
            return cached

        resolved = os.path.normpath(joined)
        self._store(self._resolve_cache, parts, resolved)
        return resolved

    def parent_of(self, directory: str) -> str:
        """Return the parent directory; a filesystem root is its own parent."""
        with self._lock:
            cached = self._parent_cache.get(directory)
        if cached is not None:
            return cached

        parent = os.path.dirname(directory)
        if os.path.isabs(directory):
            self._store(self._parent_cache, directory, parent)
        return parent

    def root_of(self, directory: str) -> str:
        """Return the filesystem root (drive and anchor) of an absolute path."""
        drive, _ = os.path.splitdrive(directory)
        return drive + os.sep

    def _store(self, cache: Dict[Any, str], key: Any, value: str) -> None:
        if self.max_size <= 0:
            return
        with self._lock:
            if key not in cache and len(cache) >= self.max_size:
                # Dicts keep insertion order, so the first key is the oldest
                del cache[next(iter(cache))]
            cache[key] = value

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._resolve_cache.clear()
            self._parent_cache.clear()

    def cache_info(self) -> Dict[str, int]:
        """
        Get the current cache occupancy.

        Returns:
            Dictionary with the sizes of both caches and the configured bound
        """
        with self._lock:
            return {
                'resolve_entries': len(self._resolve_cache),
                'parent_entries': len(self._parent_cache),
                'max_size': self.max_size,
            }
