"""
Kernel - Infrastructure shared by the alert modules

Time, configuration, logging, metrics, storage backends and diagnostics.
Nothing here knows about thresholds or messages.
"""

from budget_alerts.kernel.alert_policy import AlertPolicy, default_alert_policy
from budget_alerts.kernel.diagnostics import (
    DiagnosticSink,
    LoggingDiagnosticSink,
    NullDiagnosticSink,
    RecordingDiagnosticSink,
)
from budget_alerts.kernel.errors import (
    AlertStorageError,
    BudgetAlertError,
    StorageCapacityExceeded,
)
from budget_alerts.kernel.kv_store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from budget_alerts.kernel.periods import current_period_key, period_key_for
from budget_alerts.kernel.time import RealTimeProvider, TestTimeProvider, TimeProvider

__all__ = [
    # Time
    "TimeProvider",
    "RealTimeProvider",
    "TestTimeProvider",
    "period_key_for",
    "current_period_key",
    # Configuration
    "AlertPolicy",
    "default_alert_policy",
    # Storage backends
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    # Diagnostics
    "DiagnosticSink",
    "NullDiagnosticSink",
    "LoggingDiagnosticSink",
    "RecordingDiagnosticSink",
    # Errors
    "BudgetAlertError",
    "AlertStorageError",
    "StorageCapacityExceeded",
]
