# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache namespaces and lifecycle defaults."""

# One stable namespace per upstream data source.
NAMESPACE_METADATA = "tmdb"
NAMESPACE_CONTENT_WARNINGS = "ddd"
NAMESPACE_AVAILABILITY = "platform"
NAMESPACE_RECOMMENDATIONS = "recommendations"

KEY_SEPARATOR = ":"

DEFAULT_MAX_SIZE = 500
DEFAULT_TTL_SECONDS = 30 * 60
CLEANUP_INTERVAL_SECONDS = 5 * 60
STATS_INTERVAL_SECONDS = 10 * 60

# Label used in diagnostics for subscriptions registered without a scope.
GLOBAL_SCOPE_LABEL = "global"
