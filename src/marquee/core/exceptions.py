# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for marquee."""


class MarqueeError(Exception):
    """Base exception for all marquee errors."""


class ConfigurationError(MarqueeError):
    """Invalid or missing configuration."""
