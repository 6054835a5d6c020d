"""
Prometheus metrics for budget alerts.

Counts fired alerts, period resets and swallowed storage failures. Storage
failures never reach the caller, so this counter is the only place they
become visible in aggregate.
"""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from prometheus_client import Counter, Histogram

# ============================================================================
# Alert Metrics
# ============================================================================

alerts_fired_total = Counter(
    "budget_alerts_fired_total",
    "Total number of threshold crossings that fired an alert",
    ["threshold", "severity"],
)

alert_resets_total = Counter(
    "budget_alert_resets_total",
    "Total number of alert state resets for a budget",
    ["reason"],  # reason: period_changed
)

alert_dismissals_total = Counter(
    "budget_alert_dismissals_total",
    "Total number of visible alerts dismissed by the user",
)

evaluation_duration_seconds = Histogram(
    "budget_alert_evaluation_duration_seconds",
    "Duration of one spending update evaluation in seconds",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

# ============================================================================
# Storage Metrics
# ============================================================================

storage_failures_total = Counter(
    "budget_alert_storage_failures_total",
    "Total number of alert store operations that failed and were degraded",
    ["operation"],  # operation: get, set, delete_all_for_budget
)

# ============================================================================
# Helper Functions
# ============================================================================

P = ParamSpec("P")
R = TypeVar("R")


def track_evaluation_duration(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator observing wall time of a spending update evaluation."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            evaluation_duration_seconds.observe(time.perf_counter() - start)

    return wrapper
