# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Namespaced TTL/LRU cache for upstream lookups."""

from marquee.cache.manager import CacheManager, CacheStats
from marquee.cache.memoize import get_or_fetch

__all__ = ["CacheManager", "CacheStats", "get_or_fetch"]
