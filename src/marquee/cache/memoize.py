# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache-aside helper for remote lookups."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from marquee.cache.manager import CacheId, CacheManager

logger = logging.getLogger("marquee.cache.memoize")


async def get_or_fetch(
    cache: CacheManager,
    namespace: str,
    item_id: CacheId,
    fetch: Callable[[], Awaitable[Any]],
    ttl: float | None = None,
) -> Any | None:
    """Return the cached value for ``namespace:item_id`` or fetch and cache it.

    Errors raised by *fetch* propagate unchanged and nothing is cached.  A
    ``None`` result is returned but not cached, since ``None`` is how the
    cache reports a miss.
    """
    cached = cache.get(namespace, item_id)
    if cached is not None:
        return cached

    value = await fetch()
    if value is None:
        logger.debug("Fetch for %s returned nothing; not caching", cache.make_key(namespace, item_id))
        return None
    cache.set(namespace, item_id, value, ttl=ttl)
    return value
