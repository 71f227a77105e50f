# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Subscription registry: at most one live subscription per id.

Each push subscription opened by the application is registered here with
the cancellation capability its ``subscribe()`` call returned.  The registry
then owns teardown:

* registering an id that is already live cancels the old subscription first,
  unless the same capability is registered again, which only moves it to the
  new scope;
* subscriptions can be grouped under a scope (e.g. a UI tab) and cancelled
  together when that scope ends, either explicitly or through a
  :class:`~marquee.subscriptions.events.ScopeChangedEvent`;
* :meth:`SubscriptionRegistry.cancel_all` is the final safety net run at
  process exit (see :mod:`marquee.runtime`).

Teardown is best effort.  A capability that raises is logged and the
record is dropped anyway, so one misbehaving listener never stops the rest
of a cleanup pass.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from marquee.core.constants import GLOBAL_SCOPE_LABEL
from marquee.subscriptions.base import CallbackCancellable, Cancellable
from marquee.subscriptions.events import ScopeChangedEvent

logger = logging.getLogger("marquee.subscriptions.registry")


@dataclass(frozen=True)
class SubscriptionRecord:
    """A live subscription owned by the registry."""

    subscription_id: str
    cancellable: Cancellable
    scope: str | None
    registered_at: float


@dataclass(frozen=True)
class ActiveSubscription:
    """Read-only diagnostic view of a live subscription."""

    subscription_id: str
    scope: str | None
    age: float  # seconds since registration

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.subscription_id,
            "scope": self.scope or GLOBAL_SCOPE_LABEL,
            "age": round(self.age, 3),
        }


class SubscriptionRegistry:
    """Track live subscriptions by id with an optional scope index.

    Args:
        clock: Monotonic time source, in seconds.  Injectable for tests.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._records: dict[str, SubscriptionRecord] = {}
        self._by_scope: dict[str, set[str]] = {}
        self._current_scope: str | None = None
        self._clock = clock

    @property
    def current_scope(self) -> str | None:
        return self._current_scope

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, subscription_id: object) -> bool:
        return subscription_id in self._records

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        subscription_id: str,
        cancellable: Cancellable | Callable[[], object],
        scope: str | None = None,
    ) -> bool:
        """Take ownership of a subscription's cancellation capability.

        A bare callable (the usual return value of ``subscribe()``) is
        wrapped in :class:`CallbackCancellable`.  Invalid input is logged
        and ignored rather than raised.

        Returns:
            ``True`` if the subscription was stored.
        """
        if not subscription_id or not isinstance(subscription_id, str):
            logger.error("Invalid subscription registration: empty id %r", subscription_id)
            return False
        if not isinstance(cancellable, Cancellable):
            if not callable(cancellable):
                logger.error(
                    "Invalid subscription registration for %s: %r is not cancellable",
                    subscription_id,
                    cancellable,
                )
                return False
            cancellable = CallbackCancellable(cancellable)

        existing = self._records.get(subscription_id)
        if existing is not None:
            if _same_capability(existing.cancellable, cancellable):
                # Re-registration of the live capability only refreshes the record.
                self._forget(existing)
                cancellable = existing.cancellable
            else:
                logger.warning(
                    "Replacing existing subscription: %s",
                    subscription_id,
                    extra={"subscription_id": subscription_id, "scope": existing.scope},
                )
                self.cancel(subscription_id)

        scope = scope or None
        self._records[subscription_id] = SubscriptionRecord(
            subscription_id=subscription_id,
            cancellable=cancellable,
            scope=scope,
            registered_at=self._clock(),
        )
        if scope is not None:
            self._by_scope.setdefault(scope, set()).add(subscription_id)

        logger.debug(
            "Registered subscription %s (scope: %s); %d active",
            subscription_id,
            scope or GLOBAL_SCOPE_LABEL,
            len(self._records),
        )
        return True

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def cancel(self, subscription_id: str) -> bool:
        """Cancel and forget one subscription.

        Returns:
            ``True`` if a record existed.  The record is removed even when
            its capability raises.
        """
        record = self._records.get(subscription_id)
        if record is None:
            logger.debug("Subscription not found: %s", subscription_id)
            return False

        self._forget(record)
        self._invoke(record)
        return True

    def cancel_scope(self, scope: str) -> int:
        """Cancel every subscription registered under *scope*.

        Returns:
            Number of subscriptions removed.
        """
        members = self._by_scope.pop(scope, None)
        if not members:
            return 0

        cancelled = 0
        for subscription_id in list(members):
            record = self._records.pop(subscription_id, None)
            if record is None:
                continue
            self._invoke(record)
            cancelled += 1

        logger.info("Cancelled %d subscriptions for scope %s", cancelled, scope)
        return cancelled

    def cancel_all(self) -> int:
        """Cancel every live subscription.

        Returns:
            Number of subscriptions removed.
        """
        records = list(self._records.values())
        self._records.clear()
        self._by_scope.clear()

        for record in records:
            self._invoke(record)

        if records:
            logger.info("Cancelled all %d subscriptions", len(records))
        return len(records)

    def on_scope_changed(self, event: ScopeChangedEvent) -> int:
        """Release the previous scope's subscriptions when the scope moves.

        Returns:
            Number of subscriptions cancelled.
        """
        previous = event.previous_scope or self._current_scope
        cancelled = 0
        if previous and previous != event.new_scope:
            logger.info("Scope changed: %s -> %s", previous, event.new_scope)
            cancelled = self.cancel_scope(previous)
        self._current_scope = event.new_scope
        return cancelled

    @contextlib.contextmanager
    def scoped(self, scope: str) -> Iterator[str]:
        """Cancel everything registered under *scope* when the block exits."""
        try:
            yield scope
        finally:
            self.cancel_scope(scope)

    def __enter__(self) -> SubscriptionRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel_all()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def get_active(self) -> list[ActiveSubscription]:
        """Snapshot of live subscriptions, in registration order."""
        now = self._clock()
        return [
            ActiveSubscription(
                subscription_id=record.subscription_id,
                scope=record.scope,
                age=now - record.registered_at,
            )
            for record in self._records.values()
        ]

    def get_stats(self) -> dict[str, object]:
        active = self.get_active()
        by_scope: dict[str, int] = {}
        for sub in active:
            label = sub.scope or GLOBAL_SCOPE_LABEL
            by_scope[label] = by_scope.get(label, 0) + 1
        oldest = max((sub.age for sub in active), default=0.0)
        return {
            "total": len(active),
            "by_scope": by_scope,
            "oldest_age": round(oldest),
            "subscriptions": [sub.to_dict() for sub in active],
        }

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _forget(self, record: SubscriptionRecord) -> None:
        """Drop a record and its scope membership without cancelling it."""
        self._records.pop(record.subscription_id, None)
        if record.scope is not None:
            members = self._by_scope.get(record.scope)
            if members is not None:
                members.discard(record.subscription_id)
                if not members:
                    del self._by_scope[record.scope]

    @staticmethod
    def _invoke(record: SubscriptionRecord) -> None:
        try:
            record.cancellable.cancel()
        except Exception:
            logger.exception("Error cancelling subscription %s", record.subscription_id)
        else:
            logger.debug("Cancelled subscription %s", record.subscription_id)


def _same_capability(current: Cancellable, new: Cancellable) -> bool:
    """True when *new* stands for the capability *current* already holds."""
    if current is new:
        return True
    return (
        isinstance(current, CallbackCancellable)
        and isinstance(new, CallbackCancellable)
        and current.callback is new.callback
    )
