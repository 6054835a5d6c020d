"""
BudgetAlerts - Main façade

Wires a key-value backend, the alert store and the monitor together so a
host application only deals with budgets and spending totals.

Example:
    >>> from budget_alerts import Budget, BudgetAlerts
    >>> alerts = BudgetAlerts("alerts.db")
    >>> budget = Budget(budget_id="b1", amount=15_000_000)
    >>> view = alerts.record_spending(budget, 11_000_000, 12_500_000)
    >>> view.message
    'Cảnh báo ngân sách: Bạn đã dùng 83% ngân sách tháng này (12.5M / 15M)'
    >>> alerts.dismiss()
"""

from pathlib import Path

from budget_alerts.alerts.models import AlertView, Budget
from budget_alerts.alerts.monitor import BudgetAlertMonitor
from budget_alerts.alerts.status import BudgetStatus, get_budget_status, spending_percentage
from budget_alerts.alerts.storage import AlertStateStore
from budget_alerts.alerts.triggers import Amount
from budget_alerts.kernel.alert_policy import AlertPolicy
from budget_alerts.kernel.diagnostics import DiagnosticSink
from budget_alerts.kernel.kv_store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SQLiteKeyValueStore,
)
from budget_alerts.kernel.time import RealTimeProvider, TimeProvider


class BudgetAlerts:
    """
    Budget alerts façade

    Provides a unified API for:
    - Recording spending updates and receiving the alert to show
    - Dismissing the visible alert
    - Budget status bands for progress displays
    """

    def __init__(
        self,
        sqlite_path: str | Path | None = None,
        policy: AlertPolicy | None = None,
        time_provider: TimeProvider | None = None,
        diagnostics: DiagnosticSink | None = None,
        backend: KeyValueStore | None = None,
    ) -> None:
        """
        Args:
            sqlite_path: SQLite database for alert records (in-memory if None)
            policy: Alert policy (uses defaults if None)
            time_provider: Time provider (uses real time if None)
            diagnostics: Sink for swallowed storage failures
            backend: Explicit key-value backend, overrides sqlite_path
        """
        self.policy = policy or AlertPolicy()
        self.time_provider = time_provider or RealTimeProvider()

        if backend is None:
            backend = (
                SQLiteKeyValueStore(sqlite_path)
                if sqlite_path is not None
                else InMemoryKeyValueStore()
            )
        self.store = AlertStateStore(
            backend,
            namespace=self.policy.storage_namespace,
            diagnostics=diagnostics,
        )
        self.monitor = BudgetAlertMonitor(self.store, self.policy, self.time_provider)

    def record_spending(
        self, budget: Budget | None, previous_total: Amount, new_total: Amount
    ) -> AlertView:
        """Evaluate a spending update; see BudgetAlertMonitor.evaluate_spending_update"""
        return self.monitor.evaluate_spending_update(budget, previous_total, new_total)

    def dismiss(self) -> AlertView:
        return self.monitor.dismiss_alert()

    @property
    def current_alert(self) -> AlertView:
        return self.monitor.view

    def status(self, budget: Budget, spent: Amount) -> BudgetStatus:
        """Progress band for the amount spent against a budget"""
        return get_budget_status(
            spending_percentage(spent, budget.amount), self.policy.language
        )

    def reset_budget(self, budget_id: str) -> int:
        """Forget every fired threshold of a budget"""
        return self.store.delete_all_for_budget(budget_id)
