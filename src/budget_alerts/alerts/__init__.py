"""
Alerts - Threshold crossing detection, messages and the alert state machine
"""

from budget_alerts.alerts.messages import (
    Language,
    format_alert_message,
    format_millions,
    format_with_separator,
    resolve_language,
)
from budget_alerts.alerts.models import (
    AlertRecord,
    AlertSeverity,
    AlertView,
    Budget,
    FiredAlert,
)
from budget_alerts.alerts.monitor import BudgetAlertMonitor
from budget_alerts.alerts.status import BudgetStatus, get_budget_status, spending_percentage
from budget_alerts.alerts.storage import AlertStateStore
from budget_alerts.alerts.triggers import should_trigger_alert

__all__ = [
    # Models
    "Budget",
    "AlertRecord",
    "AlertSeverity",
    "AlertView",
    "FiredAlert",
    "BudgetStatus",
    # Pure functions
    "should_trigger_alert",
    "format_alert_message",
    "format_millions",
    "format_with_separator",
    "resolve_language",
    "Language",
    "get_budget_status",
    "spending_percentage",
    # Stateful
    "AlertStateStore",
    "BudgetAlertMonitor",
]
