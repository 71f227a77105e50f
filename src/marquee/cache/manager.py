# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Namespaced in-memory cache with TTL expiry, LRU eviction and statistics.

The :class:`CacheManager` is the primary public interface for the caching
layer.  Every entry lives under a ``namespace`` (one per upstream data
source) so a whole source can be invalidated at once without scanning keys
by identity.

Expiry is lazy: ``get`` drops an expired entry when it sees one, so reads
never depend on the background :meth:`CacheManager.cleanup` sweep having
run.  The sweep only reclaims memory held by entries that are written once
and never read again.

Eviction is least-recently-used by timestamp scan.  Nothing maintains a live
ordering; when a new key arrives at capacity the entry with the oldest
``last_accessed_at`` is found in one pass over the store.  Ties go to the
entry written earliest, since the store keeps write order and a rewrite moves
a key to the end.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from marquee.cache.entry import CacheEntry
from marquee.core.constants import DEFAULT_MAX_SIZE, DEFAULT_TTL_SECONDS, KEY_SEPARATOR
from marquee.core.exceptions import ConfigurationError

logger = logging.getLogger("marquee.cache.manager")

CacheId = str | int

_MISSING = object()


class CacheStats:
    """Hit/miss/set/eviction/clear counters."""

    __slots__ = ("clears", "evictions", "hits", "misses", "sets")

    def __init__(self) -> None:
        self.hits: int = 0
        self.misses: int = 0
        self.sets: int = 0
        self.evictions: int = 0
        self.clears: int = 0

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        return self.hits / self.total if self.total else 0.0

    def to_dict(self) -> dict[str, object]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "sets": self.sets,
            "evictions": self.evictions,
            "clears": self.clears,
            "hit_rate": round(self.hit_rate, 4),
        }


class CacheManager:
    """Bounded, namespaced key-value cache.

    Args:
        max_size: Maximum number of entries held at once.
        default_ttl: Time-to-live in seconds used when ``set`` gets no TTL.
        clock: Monotonic time source, in seconds.  Injectable for tests.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise ConfigurationError(f"Cache max_size must be at least 1, got {max_size}")
        if default_ttl <= 0:
            raise ConfigurationError(f"Cache default_ttl must be positive, got {default_ttl}")
        self._store: dict[str, CacheEntry] = {}
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._clock = clock
        self._stats = CacheStats()
        logger.info("Cache initialised (max_size=%d, default_ttl=%ss)", max_size, default_ttl)

    @staticmethod
    def make_key(namespace: str, item_id: CacheId) -> str:
        """Build the composite ``namespace:id`` key."""
        return f"{namespace}{KEY_SEPARATOR}{item_id}"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, namespace: str, item_id: CacheId) -> Any | None:
        """Return the cached value, or ``None`` on a miss.

        A stored ``None`` is also returned as ``None``; use :meth:`has` to
        tell the two apart.  Every call counts as exactly one hit or one
        miss.  An expired entry is removed as a side effect and reported as
        a miss.
        """
        value = self._lookup(namespace, item_id)
        return None if value is _MISSING else value

    def has(self, namespace: str, item_id: CacheId) -> bool:
        """Return ``True`` if a live entry exists, even one holding ``None``.

        This is *not* a pure read: like :meth:`get` it counts a hit or miss,
        refreshes the entry's recency and drops an expired entry.  Use
        :meth:`peek` when a read must leave no trace.
        """
        return self._lookup(namespace, item_id) is not _MISSING

    def peek(self, namespace: str, item_id: CacheId) -> Any | None:
        """Return the live value without touching stats, recency or storage."""
        entry = self._store.get(self.make_key(namespace, item_id))
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry.value

    def batch_get(self, namespace: str, ids: Iterable[CacheId]) -> dict[CacheId, Any]:
        """Look up several ids in one namespace; misses are left out."""
        results: dict[CacheId, Any] = {}
        for item_id in ids:
            value = self._lookup(namespace, item_id)
            if value is not _MISSING:
                results[item_id] = value
        return results

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(
        self,
        namespace: str,
        item_id: CacheId,
        value: Any,
        ttl: float | None = None,
    ) -> None:
        """Store *value* under ``namespace:id``.

        Args:
            namespace: Data-source namespace.
            item_id: Identifier within the namespace.
            value: Any value; stored by reference.
            ttl: Time-to-live in seconds; ``default_ttl`` if ``None``.
        """
        key = self.make_key(namespace, item_id)
        ttl = self._default_ttl if ttl is None else ttl
        now = self._clock()

        if key in self._store:
            # Rewrites move to the end of the write order.
            del self._store[key]
        elif len(self._store) >= self._max_size:
            self._evict_oldest()

        self._store[key] = CacheEntry(
            value=value,
            namespace=namespace,
            item_id=item_id,
            created_at=now,
            expires_at=now + ttl,
        )
        self._stats.sets += 1

    def batch_set(
        self,
        namespace: str,
        entries: Mapping[CacheId, Any],
        ttl: float | None = None,
    ) -> None:
        """Store every ``id -> value`` pair of *entries*, in mapping order."""
        for item_id, value in entries.items():
            self.set(namespace, item_id, value, ttl=ttl)

    def delete(self, namespace: str, item_id: CacheId) -> bool:
        """Remove one entry.

        Returns:
            ``True`` if the entry existed and was removed.
        """
        try:
            del self._store[self.make_key(namespace, item_id)]
        except KeyError:
            return False
        self._stats.evictions += 1
        return True

    def clear_namespace(self, namespace: str) -> int:
        """Remove every entry in *namespace* and return how many went."""
        keys = [k for k, entry in self._store.items() if entry.namespace == namespace]
        for k in keys:
            del self._store[k]
        self._stats.evictions += len(keys)
        logger.info(
            "Cleared %d entries from namespace %s",
            len(keys),
            namespace,
            extra={"namespace": namespace},
        )
        return len(keys)

    def clear(self) -> int:
        """Flush the whole cache.

        Returns:
            Number of entries removed.
        """
        count = len(self._store)
        self._store.clear()
        self._stats.clears += 1
        self._stats.evictions += count
        logger.info("Cache cleared: %d entries removed", count)
        return count

    def cleanup(self) -> int:
        """Remove all expired entries and return how many were removed."""
        now = self._clock()
        expired = [k for k, entry in self._store.items() if entry.is_expired(now)]
        for k in expired:
            del self._store[k]
        if expired:
            self._stats.evictions += len(expired)
            logger.info("Cleaned up %d expired cache entries", len(expired))
        return len(expired)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._store)

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    @property
    def stats(self) -> CacheStats:
        """Return the live statistics counters."""
        return self._stats

    def __len__(self) -> int:
        return len(self._store)

    def get_stats(self) -> dict[str, object]:
        return {"size": self.size, "max_size": self._max_size, **self._stats.to_dict()}

    def log_stats(self) -> dict[str, object]:
        stats = self.get_stats()
        logger.info(
            "Cache statistics: size=%d/%d hits=%d misses=%d hit_rate=%.2f%% evictions=%d",
            stats["size"],
            stats["max_size"],
            stats["hits"],
            stats["misses"],
            self._stats.hit_rate * 100,
            stats["evictions"],
        )
        return stats

    def namespace_entries(self, namespace: str) -> list[dict[str, object]]:
        """List the entries of one namespace without touching them."""
        now = self._clock()
        return [
            entry.describe(now)
            for entry in self._store.values()
            if entry.namespace == namespace
        ]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _evict_oldest(self) -> None:
        """Drop the least recently used entry; the earliest write wins ties."""
        if not self._store:
            return
        oldest_key = min(self._store, key=lambda k: self._store[k].last_accessed_at)
        del self._store[oldest_key]
        self._stats.evictions += 1
        logger.debug("Evicted least recently used entry %s", oldest_key)

    def _lookup(self, namespace: str, item_id: CacheId) -> Any:
        """Shared read path; returns ``_MISSING`` on a miss."""
        key = self.make_key(namespace, item_id)
        entry = self._store.get(key)
        if entry is None:
            self._stats.misses += 1
            return _MISSING

        now = self._clock()
        if entry.is_expired(now):
            del self._store[key]
            self._stats.misses += 1
            self._stats.evictions += 1
            logger.debug("Cache entry %s expired on read", key)
            return _MISSING

        entry.touch(now)
        self._stats.hits += 1
        return entry.value
