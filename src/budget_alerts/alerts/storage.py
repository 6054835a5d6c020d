"""
Alert State Store - Durable (budget, threshold) trigger records

Records live in a key-value backend under
``<namespace>:<budget_id>:<threshold>`` with a JSON value
``{"triggered": bool, "timestamp": ISO-8601, "threshold": number}``.

The adapter never raises. Missing records, or records whose "triggered" flag
cannot be read, come back as "not triggered". Failed writes are logged,
counted and reported, leaving the threshold free to fire again on the next
evaluation.
"""

from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel,
    StrictBool,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from budget_alerts.alerts.models import AlertRecord
from budget_alerts.kernel.diagnostics import DiagnosticSink, NullDiagnosticSink
from budget_alerts.kernel.kv_store import KeyValueStore
from budget_alerts.kernel.logging import get_logger
from budget_alerts.kernel.metrics import storage_failures_total

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "budgetAlert"


class StoredAlertState(BaseModel):
    """
    Wire shape of one persisted record

    Only ``triggered`` decides whether a record is usable. An unreadable
    timestamp or threshold is dropped so a fired alert stays fired.
    """

    triggered: StrictBool = False
    timestamp: datetime | None = None
    threshold: int | float | None = None

    @field_validator("timestamp", "threshold", mode="wrap")
    @classmethod
    def _drop_unreadable(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None


class AlertStateStore:
    """
    Alert records for every budget, on top of a KeyValueStore

    Only three operations matter to the monitor: get, set and
    delete_all_for_budget.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        namespace: str = DEFAULT_NAMESPACE,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        """
        Args:
            backend: Durable key-value store
            namespace: Key prefix shared by all alert records
            diagnostics: Receives swallowed failures (defaults to a no-op sink)
        """
        self.backend = backend
        self.namespace = namespace
        self.diagnostics = diagnostics or NullDiagnosticSink()

    def key_for(self, budget_id: str, threshold: int) -> str:
        return f"{self.budget_prefix(budget_id)}{threshold}"

    def budget_prefix(self, budget_id: str) -> str:
        # Trailing separator keeps "b1" from matching "b10"
        return f"{self.namespace}:{budget_id}:"

    def get(self, budget_id: str, threshold: int) -> AlertRecord:
        """
        Load the record for a (budget, threshold) pair

        Returns an untriggered record when the key is missing, the stored
        value has no readable "triggered" flag, or the backend fails.
        """
        untriggered = AlertRecord(budget_id=budget_id, threshold=threshold)
        key = self.key_for(budget_id, threshold)

        try:
            raw = self.backend.get(key)
        except Exception as exc:
            self._report("get", exc, budget_id=budget_id, threshold=threshold)
            return untriggered

        if raw is None:
            return untriggered

        try:
            stored = StoredAlertState.model_validate_json(raw)
        except ValidationError as exc:
            self._report("get", exc, budget_id=budget_id, threshold=threshold)
            return untriggered

        return AlertRecord(
            budget_id=budget_id,
            threshold=threshold,
            triggered=stored.triggered,
            fired_at=stored.timestamp,
        )

    def has_triggered(self, budget_id: str, threshold: int) -> bool:
        return self.get(budget_id, threshold).triggered

    def set(
        self,
        budget_id: str,
        threshold: int,
        triggered: bool,
        timestamp: datetime,
    ) -> bool:
        """
        Persist trigger state for a (budget, threshold) pair

        Returns:
            True if the record was written, False if the write failed
        """
        value = StoredAlertState(
            triggered=triggered, timestamp=timestamp, threshold=threshold
        ).model_dump_json()

        try:
            self.backend.set(self.key_for(budget_id, threshold), value)
        except Exception as exc:
            self._report(
                "set", exc, budget_id=budget_id, threshold=threshold, triggered=triggered
            )
            return False
        return True

    def delete_all_for_budget(self, budget_id: str) -> int:
        """
        Remove every threshold record of one budget

        Other budgets are untouched.

        Returns:
            Number of records removed (0 on failure)
        """
        removed = 0
        try:
            for key in self.backend.keys(self.budget_prefix(budget_id)):
                self.backend.delete(key)
                removed += 1
        except Exception as exc:
            self._report("delete_all_for_budget", exc, budget_id=budget_id)
            return 0

        logger.info("Alert state cleared", budget_id=budget_id, records=removed)
        return removed

    def _report(self, operation: str, error: Exception, **context: Any) -> None:
        storage_failures_total.labels(operation=operation).inc()
        logger.warning(
            "Alert store operation failed",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
            **context,
        )
        self.diagnostics.report(operation, error, context)
