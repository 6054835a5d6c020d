"""
Alert Domain Models - Budgets, alert records and the visible alert

Key concepts:
- Budget: monthly amount owned by the caller, scoped by a period key
- AlertRecord: whether one (budget, threshold) pair already fired this period
- AlertView: the single alert the UI should currently show
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class AlertSeverity(str, Enum):
    """
    Severity of a surfaced alert

    WARNING for approaching thresholds (80%), ERROR once the budget is
    reached (100%).
    """

    WARNING = "warning"
    ERROR = "error"


class Budget(BaseModel):
    """
    Monthly budget as observed by the alert monitor

    Attributes:
        budget_id: Opaque identifier
        amount: Budget amount in currency units; non-positive or non-finite
            budgets never alert
        period_key: Accounting period ("2026-01"); None means "current month"
    """

    budget_id: str = Field(min_length=1)
    amount: Decimal = Field(allow_inf_nan=True)
    period_key: str | None = None

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "budget_id": "budget-2026-01",
                    "amount": "15000000",
                    "period_key": "2026-01",
                }
            ]
        },
    }


class AlertRecord(BaseModel):
    """
    Persisted trigger state for one (budget, threshold) pair

    Absence in the store is read back as triggered=False, fired_at=None.
    Once triggered it stays triggered until the budget's records are cleared.
    """

    budget_id: str
    threshold: int
    triggered: bool = False
    fired_at: datetime | None = None


class FiredAlert(BaseModel):
    """One threshold that crossed during a single evaluation"""

    threshold: int
    message: str
    severity: AlertSeverity


class AlertView(BaseModel):
    """
    Alert state exposed to the UI after an update or dismissal

    Only one alert is visible at a time. When several thresholds fire in the
    same update, `fired` lists all of them and the view shows the last one.
    """

    alert_visible: bool = False
    message: str = ""
    severity: AlertSeverity = AlertSeverity.WARNING
    active_threshold: int | None = None
    fired: list[FiredAlert] = Field(default_factory=list)
