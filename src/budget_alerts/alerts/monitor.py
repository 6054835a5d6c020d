"""
Budget Alert Monitor - Threshold alert state machine

Runs on every spending update:
1. Resolve the accounting period; clear the budget's records if it rolled over
2. Evaluate each configured threshold, lowest first, against the stored flag
3. Persist and format every threshold that fired
4. Show the last fired alert (100% wins over 80% on a single big jump)

Trigger truth always lives in the AlertStateStore and is read fresh on each
evaluation. The monitor itself only remembers the last period and budget it
saw, plus what is currently on screen.

Not thread-safe: callers must serialise updates for a budget.
"""

from budget_alerts.alerts.messages import format_alert_message
from budget_alerts.alerts.models import (
    AlertSeverity,
    AlertView,
    Budget,
    FiredAlert,
)
from budget_alerts.alerts.storage import AlertStateStore
from budget_alerts.alerts.triggers import Amount, should_trigger_alert
from budget_alerts.kernel.alert_policy import AlertPolicy, default_alert_policy
from budget_alerts.kernel.logging import LogOperation, get_logger
from budget_alerts.kernel.metrics import (
    alert_dismissals_total,
    alert_resets_total,
    alerts_fired_total,
    track_evaluation_duration,
)
from budget_alerts.kernel.periods import current_period_key
from budget_alerts.kernel.time import TimeProvider, default_time_provider

logger = get_logger(__name__)


class BudgetAlertMonitor:
    """
    Exactly-once threshold alerts for a monthly budget

    Example:
        >>> monitor = BudgetAlertMonitor(AlertStateStore(InMemoryKeyValueStore()))
        >>> budget = Budget(budget_id="b1", amount=15_000_000, period_key="2026-01")
        >>> view = monitor.evaluate_spending_update(budget, 11_000_000, 12_500_000)
        >>> view.alert_visible, view.active_threshold
        (True, 80)
    """

    def __init__(
        self,
        store: AlertStateStore,
        policy: AlertPolicy | None = None,
        time_provider: TimeProvider | None = None,
    ) -> None:
        """
        Args:
            store: Durable alert records
            policy: Thresholds, language and currency (defaults to 80%/100%, vi)
            time_provider: Clock for timestamps and the current period
        """
        self.store = store
        self.policy = policy or default_alert_policy
        self.time_provider = time_provider or default_time_provider
        self._last_period_key: str | None = None
        self._last_budget_id: str | None = None
        self._view = AlertView()

    @property
    def view(self) -> AlertView:
        """Alert currently shown to the user"""
        return self._view

    def severity_for(self, threshold: int) -> AlertSeverity:
        if threshold == self.policy.error_threshold:
            return AlertSeverity.ERROR
        return AlertSeverity.WARNING

    @track_evaluation_duration
    def evaluate_spending_update(
        self,
        budget: Budget | None,
        previous_total: Amount,
        new_total: Amount,
    ) -> AlertView:
        """
        Evaluate one spending update against every configured threshold

        Args:
            budget: Current month's budget (None when the user has not set one)
            previous_total: Monthly total before the expense event
            new_total: Monthly total after the expense event

        Returns:
            The alert view after this update. If nothing fired, the previous
            alert stays as it was and `fired` is empty.
        """
        if budget is None:
            return self._view

        with LogOperation(
            logger,
            "evaluate_spending_update",
            budget_id=budget.budget_id,
            previous_total=previous_total,
            new_total=new_total,
        ):
            self._observe_budget(budget)

            fired: list[FiredAlert] = []
            for threshold in self.policy.thresholds:
                already_triggered = self.store.has_triggered(budget.budget_id, threshold)
                if not should_trigger_alert(
                    previous_total,
                    new_total,
                    budget.amount,
                    threshold,
                    already_triggered,
                ):
                    continue

                self.store.set(
                    budget.budget_id, threshold, True, self.time_provider.now()
                )
                alert = FiredAlert(
                    threshold=threshold,
                    message=format_alert_message(
                        new_total,
                        budget.amount,
                        threshold,
                        self.policy.language,
                        self.policy.currency_suffix,
                    ),
                    severity=self.severity_for(threshold),
                )
                fired.append(alert)
                alerts_fired_total.labels(
                    threshold=str(threshold), severity=alert.severity.value
                ).inc()
                logger.info(
                    "Budget threshold crossed",
                    budget_id=budget.budget_id,
                    threshold=threshold,
                    severity=alert.severity.value,
                )

            if fired:
                active = fired[-1]
                self._view = AlertView(
                    alert_visible=True,
                    message=active.message,
                    severity=active.severity,
                    active_threshold=active.threshold,
                    fired=fired,
                )
            else:
                self._view = self._view.model_copy(update={"fired": []})

        return self._view

    def dismiss_alert(self) -> AlertView:
        """
        Hide the visible alert

        Stored records are kept, so the same crossing cannot show again.
        """
        if self._view.alert_visible:
            alert_dismissals_total.inc()
            logger.info("Budget alert dismissed", threshold=self._view.active_threshold)
        self._view = self._view.model_copy(update={"alert_visible": False})
        return self._view

    def _observe_budget(self, budget: Budget) -> None:
        """Track period and budget identity; reset records on a new period"""
        period_key = budget.period_key or current_period_key(self.time_provider)

        if self._last_period_key is not None and period_key != self._last_period_key:
            self.store.delete_all_for_budget(budget.budget_id)
            alert_resets_total.labels(reason="period_changed").inc()
            logger.info(
                "Accounting period changed, alert state reset",
                budget_id=budget.budget_id,
                previous_period=self._last_period_key,
                period=period_key,
            )
        self._last_period_key = period_key

        if budget.budget_id != self._last_budget_id:
            # A new budget starts from its own records; the old ones stay
            if self._last_budget_id is not None:
                logger.info(
                    "Budget changed",
                    previous_budget_id=self._last_budget_id,
                    budget_id=budget.budget_id,
                )
            self._last_budget_id = budget.budget_id
