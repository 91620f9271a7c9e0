"""
Response cache for the place-search and geocoding adapters (diskcache).

Entries are keyed by (namespace, normalized query) and tagged with their
namespace, so one adapter's entries can be counted or evicted without
touching the other's. Only successful responses are stored.
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Any, Optional

import diskcache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path("data/cache")
DEFAULT_CACHE_SIZE_LIMIT = 512 * 1024 * 1024  # 512 MB, responses are small JSON

_cache: Optional["AppCache"] = None


class AppCache:
    """Namespaced lookup cache backed by diskcache (SQLite)."""

    def __init__(
        self,
        cache_dir: Path = DEFAULT_CACHE_DIR,
        timeout: float = 30.0,
        size_limit: int = DEFAULT_CACHE_SIZE_LIMIT,
    ):
        """
        Args:
            cache_dir: Directory for cache files
            timeout: Seconds to wait for the SQLite lock
            size_limit: Maximum cache size in bytes (0 for unlimited)
        """
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = diskcache.Cache(
            str(self.cache_dir),
            timeout=timeout,
            size_limit=size_limit,
            tag_index=True,
        )

    @staticmethod
    def _key(namespace: str, query: str) -> tuple[str, str]:
        return namespace, " ".join(query.split()).lower()

    def get(self, namespace: str, query: str) -> Any | None:
        return self._cache.get(self._key(namespace, query))

    def set(self, namespace: str, query: str, value: Any, ttl_days: int | None = None) -> None:
        """Store a response; it expires after ttl_days when given."""
        expire = ttl_days * 86400 if ttl_days else None
        self._cache.set(self._key(namespace, query), value, expire=expire, tag=namespace)

    def delete(self, namespace: str, query: str) -> bool:
        return bool(self._cache.delete(self._key(namespace, query)))

    def clear_namespace(self, namespace: str) -> int:
        """Evict every entry of one adapter; returns how many were removed."""
        removed = self._cache.evict(namespace)
        logger.debug(f"Evicted {removed} entries from cache namespace {namespace!r}")
        return removed

    def count(self, namespace: str | None = None) -> int:
        if namespace is None:
            return len(self._cache)
        return self._namespace_counts().get(namespace, 0)

    def _namespace_counts(self) -> Counter:
        return Counter(key[0] for key in self._cache if isinstance(key, tuple))

    def stats(self) -> dict:
        """Entry counts per namespace plus disk usage."""
        return {
            "total": len(self._cache),
            "by_namespace": dict(self._namespace_counts()),
            "size_mb": round(self._cache.volume() / (1024 * 1024), 2),
            "cache_dir": str(self.cache_dir),
        }

    def close(self) -> None:
        self._cache.close()


def get_cache(cache_dir: Path = DEFAULT_CACHE_DIR, timeout: float = 30.0) -> AppCache:
    """Process-wide cache instance, created on first use."""
    global _cache
    if _cache is None:
        _cache = AppCache(cache_dir, timeout=timeout)
    return _cache
