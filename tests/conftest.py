"""
Pytest configuration and shared fixtures

Every test gets its own key-value backend and a frozen clock, so alert
records never leak between tests and month rollover is a single set_time().
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

import pytest

from budget_alerts.alerts.models import Budget
from budget_alerts.alerts.monitor import BudgetAlertMonitor
from budget_alerts.alerts.storage import AlertStateStore
from budget_alerts.kernel.alert_policy import AlertPolicy
from budget_alerts.kernel.diagnostics import RecordingDiagnosticSink
from budget_alerts.kernel.kv_store import InMemoryKeyValueStore, SQLiteKeyValueStore
from budget_alerts.kernel.time import TestTimeProvider


@pytest.fixture
def temp_db() -> Iterator[Path]:
    """Provide a temporary database file that's cleaned up after test"""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def test_time() -> TestTimeProvider:
    """Controllable clock fixed at 2026-01-15 12:00 UTC (mid-month)"""
    return TestTimeProvider(datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def kv_backend() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def sqlite_backend(temp_db: Path) -> SQLiteKeyValueStore:
    return SQLiteKeyValueStore(temp_db)


@pytest.fixture
def diagnostics() -> RecordingDiagnosticSink:
    return RecordingDiagnosticSink()


@pytest.fixture
def alert_store(
    kv_backend: InMemoryKeyValueStore, diagnostics: RecordingDiagnosticSink
) -> AlertStateStore:
    return AlertStateStore(kv_backend, diagnostics=diagnostics)


@pytest.fixture
def policy() -> AlertPolicy:
    return AlertPolicy()


@pytest.fixture
def monitor(
    alert_store: AlertStateStore, policy: AlertPolicy, test_time: TestTimeProvider
) -> BudgetAlertMonitor:
    return BudgetAlertMonitor(alert_store, policy, test_time)


@pytest.fixture
def budget() -> Budget:
    """15M dong budget for January 2026 - 80% is exactly 12M"""
    return Budget(budget_id="b1", amount=15_000_000, period_key="2026-01")
