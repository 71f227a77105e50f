# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Subscription lifecycle tracking with scoped and global teardown."""

from marquee.subscriptions.base import CallbackCancellable, Cancellable
from marquee.subscriptions.events import ScopeChangedEvent
from marquee.subscriptions.registry import (
    ActiveSubscription,
    SubscriptionRecord,
    SubscriptionRegistry,
)

__all__ = [
    "ActiveSubscription",
    "CallbackCancellable",
    "Cancellable",
    "ScopeChangedEvent",
    "SubscriptionRecord",
    "SubscriptionRegistry",
]
