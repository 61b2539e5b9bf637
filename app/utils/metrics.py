"""
Prometheus Metrics Module

Provides application metrics using the prometheus_client library.
Metrics are exposed at /metrics endpoint for Prometheus scraping.
"""

import time
from collections.abc import Callable
from functools import wraps

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, Info, generate_latest
from starlette.responses import Response

# =============================================================================
# Application Info
# =============================================================================

APP_INFO = Info("lms_app", "Language mode switch application information")


def set_app_info(version: str, environment: str) -> None:
    """Set application info labels."""
    APP_INFO.info({"version": version, "environment": environment})


# =============================================================================
# Database Metrics
# =============================================================================

DB_QUERIES_TOTAL = Counter(
    "lms_db_queries_total",
    "Total database queries executed",
    ["operation"],
)

DB_QUERY_DURATION_SECONDS = Histogram(
    "lms_db_query_duration_seconds",
    "Database query duration in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

# =============================================================================
# Cache Metrics
# =============================================================================

REDIS_CONNECTED = Gauge(
    "lms_redis_connected",
    "Redis connection status (1 = connected, 0 = disconnected)",
)

CACHE_HITS_TOTAL = Counter(
    "lms_cache_hits_total",
    "Total cache hits",
    ["cache_type"],
)

CACHE_MISSES_TOTAL = Counter(
    "lms_cache_misses_total",
    "Total cache misses",
    ["cache_type"],
)

CACHE_ERRORS_TOTAL = Counter(
    "lms_cache_errors_total",
    "Cache backend failures treated as misses",
    ["operation"],
)

# =============================================================================
# Language Mode Metrics
# =============================================================================

MODE_RESOLUTIONS_TOTAL = Counter(
    "lms_mode_resolutions_total",
    "Language mode resolutions by source and resulting mode",
    ["source", "mode"],
)


# =============================================================================
# Helper Functions
# =============================================================================


def track_db_query(operation: str = "query"):
    """
    Decorator to track database query metrics.

    Usage:
        @track_db_query("load_override")
        async def load_override(self, page_id, language_id):
            ...
    """

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start_time
                DB_QUERIES_TOTAL.labels(operation=operation).inc()
                DB_QUERY_DURATION_SECONDS.labels(operation=operation).observe(duration)

        return wrapper

    return decorator


def record_cache_hit(cache_type: str = "default") -> None:
    """Record a cache hit."""
    CACHE_HITS_TOTAL.labels(cache_type=cache_type).inc()


def record_cache_miss(cache_type: str = "default") -> None:
    """Record a cache miss."""
    CACHE_MISSES_TOTAL.labels(cache_type=cache_type).inc()


def record_cache_error(operation: str) -> None:
    CACHE_ERRORS_TOTAL.labels(operation=operation).inc()


def record_mode_resolution(source: str, mode: str) -> None:
    """Record one resolver outcome (source: skipped/cache/override/unset/automatic)."""
    MODE_RESOLUTIONS_TOTAL.labels(source=source, mode=mode or "unset").inc()


def metrics_response() -> Response:
    """Render all registered metrics in the Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
