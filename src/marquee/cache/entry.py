# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache entry record with expiry and access timestamps."""

from __future__ import annotations

from typing import Any


class CacheEntry:
    """A single cached value plus its bookkeeping timestamps.

    Timestamps are readings of the owning cache's monotonic clock, in seconds.
    """

    __slots__ = (
        "created_at",
        "expires_at",
        "item_id",
        "last_accessed_at",
        "namespace",
        "value",
    )

    def __init__(
        self,
        *,
        value: Any,
        namespace: str,
        item_id: str | int,
        created_at: float,
        expires_at: float,
    ) -> None:
        self.value = value
        self.namespace = namespace
        self.item_id = item_id
        self.created_at = created_at
        self.expires_at = expires_at
        self.last_accessed_at = created_at

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def touch(self, now: float) -> None:
        self.last_accessed_at = now

    def describe(self, now: float) -> dict[str, object]:
        """Diagnostic view of the entry's timing, relative to *now*."""
        return {
            "id": self.item_id,
            "created_at": self.created_at,
            "expires_at": self.expires_at,
            "last_accessed_at": self.last_accessed_at,
            "expires_in": round(self.expires_at - now, 3),
        }
