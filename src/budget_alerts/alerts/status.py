"""
Budget status bands for progress displays

Classifies how much of the budget is used into the same bands the alerts
use: on track below 80%, approaching the limit up to 100%, over budget above.
"""

from decimal import Decimal

from pydantic import BaseModel

from budget_alerts.alerts.messages import Language, resolve_language
from budget_alerts.alerts.triggers import Amount, to_decimal

STATUS_LABELS: dict[Language, dict[str, str]] = {
    Language.VI: {
        "success": "Đang theo dõi",
        "warning": "Gần đạt giới hạn",
        "error": "Vượt quá ngân sách",
    },
    Language.EN: {
        "success": "On track",
        "warning": "Approaching limit",
        "error": "Over budget",
    },
}


class BudgetStatus(BaseModel):
    """Band for a spending percentage"""

    severity: str  # success | warning | error
    label: str


def spending_percentage(spent: Amount, budget_amount: Amount) -> float:
    """Exact percentage of the budget spent; 0.0 when the budget is unset"""
    spent_value = to_decimal(spent)
    budget = to_decimal(budget_amount)
    if spent_value is None or budget is None or not budget.is_finite() or budget <= 0:
        return 0.0
    return float(spent_value / budget * 100)


def get_budget_status(percentage: Amount, language: str | None = "vi") -> BudgetStatus:
    """
    Band for a percentage of budget used

    Example:
        >>> get_budget_status(85).severity
        'warning'
    """
    labels = STATUS_LABELS[resolve_language(language)]
    value = to_decimal(percentage)

    if value is None or value < 80:
        severity = "success"
    elif value <= Decimal(100):
        severity = "warning"
    else:
        severity = "error"

    return BudgetStatus(severity=severity, label=labels[severity])
