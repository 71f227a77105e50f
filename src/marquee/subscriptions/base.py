# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cancellation capability for push subscriptions."""

from __future__ import annotations

import abc
from collections.abc import Callable


class Cancellable(abc.ABC):
    """The right to stop a live subscription and release what backs it.

    Whoever holds a ``Cancellable`` owns the decision of when to call
    :meth:`cancel`.  The :class:`~marquee.subscriptions.registry.SubscriptionRegistry`
    takes that ownership on ``register`` and calls it at most once.
    """

    @abc.abstractmethod
    def cancel(self) -> None:
        """Stop receiving updates and release backing resources."""


class CallbackCancellable(Cancellable):
    """Adapt a zero-argument unsubscribe callback to :class:`Cancellable`.

    The callback runs at most once, even if :meth:`cancel` is called again
    or the first call raised.
    """

    def __init__(self, callback: Callable[[], object]) -> None:
        self._callback = callback
        self._cancelled = False

    @property
    def callback(self) -> Callable[[], object]:
        return self._callback

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._callback()

    def __repr__(self) -> str:
        name = getattr(self._callback, "__qualname__", type(self._callback).__name__)
        return f"CallbackCancellable({name}, cancelled={self._cancelled})"
