"""
Alert Policy - Configuration for budget threshold alerts

Which thresholds fire, which of them counts as an error, where alert
records are stored and how messages are rendered.
"""

from pydantic import BaseModel, Field, field_validator


class AlertPolicy(BaseModel):
    """
    Budget alert configuration

    Defaults reproduce the monthly budget behaviour: a warning at 80% of the
    budget and an error once spending reaches 100%, with Vietnamese messages
    and amounts in dong.
    """

    thresholds: list[int] = Field(
        default=[80, 100],
        min_length=1,
        description="Percentages of the budget at which an alert fires once per period",
    )

    error_threshold: int = Field(
        default=100,
        gt=0,
        description="Threshold whose alert is surfaced with error severity",
    )

    storage_namespace: str = Field(
        default="budgetAlert",
        min_length=1,
        pattern=r"^[^:]+$",
        description="Key prefix for persisted alert records",
    )

    language: str = Field(
        default="vi",
        description="Message language; unsupported codes fall back to Vietnamese",
    )

    currency_suffix: str = Field(
        default="đ",
        description="Suffix appended to amounts rendered with thousands separators",
    )

    @field_validator("thresholds")
    @classmethod
    def _ascending_unique_thresholds(cls, thresholds: list[int]) -> list[int]:
        if any(t <= 0 for t in thresholds):
            raise ValueError("thresholds must be positive percentages")
        # 80 must be evaluated before 100 so the higher alert wins the view
        return sorted(set(thresholds))


# Default global policy instance
default_alert_policy = AlertPolicy()
