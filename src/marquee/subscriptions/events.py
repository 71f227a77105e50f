# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scope-change event dispatched when the active view changes."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class ScopeChangedEvent(BaseModel):
    """The active scope (e.g. a UI tab) moved from one value to another.

    ``previous_scope`` may be left unset; the registry then uses the scope it
    last recorded as current.
    """

    new_scope: str | None
    previous_scope: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
