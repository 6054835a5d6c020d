"""
Budget Alerts - Exactly-once spending threshold notifications

Notifies a user once when monthly spending crosses 80% and 100% of the
budget, and stays quiet until the month or the budget changes.
"""

from budget_alerts.alerts import (
    AlertSeverity,
    AlertView,
    Budget,
    BudgetAlertMonitor,
    format_alert_message,
    should_trigger_alert,
)
from budget_alerts.facade import BudgetAlerts

__version__ = "0.1.0"
__all__ = [
    "BudgetAlerts",
    "BudgetAlertMonitor",
    "Budget",
    "AlertView",
    "AlertSeverity",
    "should_trigger_alert",
    "format_alert_message",
    "__version__",
]
