"""
Tests for the alert state store adapter

Round-trips, key layout, prefix isolation between budgets, and graceful
degradation on corrupt records and failing backends.
"""

import json
from datetime import datetime, timezone

import pytest

from budget_alerts.alerts.storage import AlertStateStore
from budget_alerts.kernel.diagnostics import RecordingDiagnosticSink
from budget_alerts.kernel.errors import AlertStorageError, StorageCapacityExceeded
from budget_alerts.kernel.kv_store import InMemoryKeyValueStore
from budget_alerts.kernel.metrics import storage_failures_total

FIRED_AT = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class ExplodingBackend:
    """Backend whose every operation fails"""

    def get(self, key):
        raise AlertStorageError("read failed")

    def set(self, key, value):
        raise AlertStorageError("write failed")

    def delete(self, key):
        raise AlertStorageError("delete failed")

    def keys(self, prefix=""):
        raise AlertStorageError("scan failed")


# =============================================================================
# Round trip
# =============================================================================


def test_missing_record_is_untriggered(alert_store):
    record = alert_store.get("b1", 80)

    assert record.triggered is False
    assert record.fired_at is None
    assert record.budget_id == "b1"
    assert record.threshold == 80


@pytest.mark.parametrize("triggered", [True, False])
def test_set_then_get_round_trip(alert_store, triggered):
    assert alert_store.set("b1", 80, triggered, FIRED_AT) is True

    record = alert_store.get("b1", 80)
    assert record.triggered is triggered
    assert record.fired_at == FIRED_AT


def test_persisted_key_and_value_shape(alert_store, kv_backend):
    alert_store.set("b1", 100, True, FIRED_AT)

    raw = kv_backend.get("budgetAlert:b1:100")
    assert raw is not None
    value = json.loads(raw)
    assert value["triggered"] is True
    assert value["threshold"] == 100
    assert datetime.fromisoformat(value["timestamp"].replace("Z", "+00:00")) == FIRED_AT


def test_custom_namespace(kv_backend):
    store = AlertStateStore(kv_backend, namespace="myApp")
    store.set("b1", 80, True, FIRED_AT)

    assert kv_backend.keys() == ["myApp:b1:80"]


def test_has_triggered(alert_store):
    assert alert_store.has_triggered("b1", 80) is False
    alert_store.set("b1", 80, True, FIRED_AT)
    assert alert_store.has_triggered("b1", 80) is True
    assert alert_store.has_triggered("b1", 100) is False


# =============================================================================
# Delete by budget
# =============================================================================


def test_delete_all_for_budget_removes_every_threshold(alert_store):
    alert_store.set("b1", 80, True, FIRED_AT)
    alert_store.set("b1", 100, True, FIRED_AT)

    assert alert_store.delete_all_for_budget("b1") == 2

    assert alert_store.has_triggered("b1", 80) is False
    assert alert_store.has_triggered("b1", 100) is False


def test_delete_all_for_budget_leaves_other_budgets(alert_store):
    alert_store.set("b1", 80, True, FIRED_AT)
    alert_store.set("b10", 80, True, FIRED_AT)
    alert_store.set("b2", 100, True, FIRED_AT)

    alert_store.delete_all_for_budget("b1")

    assert alert_store.has_triggered("b1", 80) is False
    assert alert_store.has_triggered("b10", 80) is True
    assert alert_store.has_triggered("b2", 100) is True


def test_delete_all_for_budget_ignores_foreign_keys(alert_store, kv_backend):
    kv_backend.set("otherApp:b1:80", "keep")
    alert_store.set("b1", 80, True, FIRED_AT)

    alert_store.delete_all_for_budget("b1")

    assert kv_backend.get("otherApp:b1:80") == "keep"


def test_delete_all_for_unknown_budget_is_noop(alert_store):
    assert alert_store.delete_all_for_budget("nope") == 0


# =============================================================================
# Corrupt records
# =============================================================================


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        "null",
        "[]",
        '"triggered"',
        '{"triggered": "yes"}',
    ],
)
def test_corrupt_record_reads_as_untriggered(alert_store, kv_backend, diagnostics, raw):
    kv_backend.set("budgetAlert:b1:80", raw)

    record = alert_store.get("b1", 80)

    assert record.triggered is False
    assert record.fired_at is None
    assert diagnostics.operations == ["get"]


def test_missing_triggered_field_reads_as_untriggered(alert_store, kv_backend):
    kv_backend.set("budgetAlert:b1:80", '{"timestamp": "2026-01-15T12:00:00Z"}')

    assert alert_store.get("b1", 80).triggered is False


def test_partial_record_without_timestamp(alert_store, kv_backend):
    kv_backend.set("budgetAlert:b1:80", '{"triggered": true}')

    record = alert_store.get("b1", 80)
    assert record.triggered is True
    assert record.fired_at is None


@pytest.mark.parametrize(
    "raw",
    [
        '{"triggered": true, "timestamp": "not-a-date"}',
        '{"triggered": true, "timestamp": "Thu Jan 15 2026", "threshold": 80}',
        '{"triggered": true, "timestamp": "", "threshold": 80}',
    ],
)
def test_unreadable_timestamp_keeps_record_triggered(
    alert_store, kv_backend, diagnostics, raw
):
    kv_backend.set("budgetAlert:b1:80", raw)

    record = alert_store.get("b1", 80)

    assert record.triggered is True
    assert record.fired_at is None
    assert diagnostics.reports == []


def test_stored_threshold_is_not_read_back(alert_store, kv_backend, diagnostics):
    kv_backend.set(
        "budgetAlert:b1:100",
        '{"triggered": true, "timestamp": "2026-01-15T00:00:00Z", "threshold": "100%"}',
    )

    record = alert_store.get("b1", 100)

    assert record.triggered is True
    assert record.threshold == 100
    assert record.fired_at == datetime(2026, 1, 15, tzinfo=timezone.utc)
    assert diagnostics.reports == []


# =============================================================================
# Backend failures
# =============================================================================


def test_capacity_exceeded_write_is_swallowed():
    diagnostics = RecordingDiagnosticSink()
    store = AlertStateStore(InMemoryKeyValueStore(max_entries=0), diagnostics=diagnostics)

    assert store.set("b1", 80, True, FIRED_AT) is False
    assert store.has_triggered("b1", 80) is False

    operation, error, context = diagnostics.reports[0]
    assert operation == "set"
    assert isinstance(error, StorageCapacityExceeded)
    assert context["budget_id"] == "b1"
    assert context["threshold"] == 80


def test_failing_backend_never_raises():
    diagnostics = RecordingDiagnosticSink()
    store = AlertStateStore(ExplodingBackend(), diagnostics=diagnostics)

    assert store.get("b1", 80).triggered is False
    assert store.set("b1", 80, True, FIRED_AT) is False
    assert store.delete_all_for_budget("b1") == 0

    assert diagnostics.operations == ["get", "set", "delete_all_for_budget"]


def test_failures_counted_in_metrics():
    store = AlertStateStore(ExplodingBackend())
    before = storage_failures_total.labels(operation="set")._value.get()

    store.set("b1", 80, True, FIRED_AT)

    after = storage_failures_total.labels(operation="set")._value.get()
    assert after == before + 1


def test_default_sink_is_silent():
    store = AlertStateStore(ExplodingBackend())

    # No sink configured: still degrades without raising
    assert store.set("b1", 80, True, FIRED_AT) is False


def test_sqlite_backend_round_trip(sqlite_backend):
    store = AlertStateStore(sqlite_backend)
    store.set("b1", 80, True, FIRED_AT)
    store.set("b1", 100, True, FIRED_AT)
    store.set("b2", 80, True, FIRED_AT)

    assert store.has_triggered("b1", 80) is True
    assert store.delete_all_for_budget("b1") == 2
    assert store.has_triggered("b1", 100) is False
    assert store.has_triggered("b2", 80) is True
