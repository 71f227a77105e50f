# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""marquee - Caching and subscription lifecycle core for the movie picker."""

__version__ = "0.1.0"

from marquee.cache import CacheManager, CacheStats, get_or_fetch
from marquee.runtime import Runtime, build_runtime
from marquee.subscriptions import (
    CallbackCancellable,
    Cancellable,
    ScopeChangedEvent,
    SubscriptionRegistry,
)

__all__ = [
    "CacheManager",
    "CacheStats",
    "CallbackCancellable",
    "Cancellable",
    "Runtime",
    "ScopeChangedEvent",
    "SubscriptionRegistry",
    "__version__",
    "build_runtime",
    "get_or_fetch",
]
