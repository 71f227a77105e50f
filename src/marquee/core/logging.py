# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Logging setup for the ``marquee`` logger tree.

Cached values are upstream payloads (metadata search results, content
warnings) and the URLs that produced them, so every formatter scrubs
provider credentials before a record leaves the process.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from marquee.core.config import Settings

ROOT_LOGGER = "marquee"

# Keep a short prefix of each secret so log lines stay correlatable.
_SECRETS = (
    re.compile(r"(api_key=[a-zA-Z0-9]{4})[a-zA-Z0-9]*"),
    re.compile(r"(AIza[0-9A-Za-z\-_]{4})[0-9A-Za-z\-_]{31}"),
    re.compile(r"(eyJ[a-zA-Z0-9\-_]{6})[a-zA-Z0-9\-_.]*"),
    re.compile(r"(Bearer\s+[a-zA-Z0-9\-._~+/]{10})[a-zA-Z0-9\-._~+/]*"),
)

# Record attributes passed through ``extra=`` that belong in JSON output.
_CONTEXT_FIELDS = ("namespace", "subscription_id", "scope")

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def redact_sensitive(text: str) -> str:
    for pattern in _SECRETS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
        }
        for field in _CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info and record.exc_info[1]:
            payload["exception"] = redact_sensitive(self.formatException(record.exc_info))
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self, fmt: str = _TEXT_FORMAT) -> None:
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        return redact_sensitive(super().format(record))


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Logger:
    """Attach a single stderr handler to the ``marquee`` logger.

    Safe to call repeatedly; earlier handlers are replaced.  Unknown level
    names fall back to ``INFO``.
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    return root


def configure_logging(settings: Settings) -> logging.Logger:
    """Apply ``log_level`` and ``log_format`` from settings."""
    return setup_logging(settings.log_level, settings.log_format)
