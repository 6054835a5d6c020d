"""
Alert Triggers - Threshold crossing detection

A threshold fires only on the update that carries spending from below it
to at-or-above it, and only if it has not fired already this period.
Malformed input never fires.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

Amount = Union[int, float, Decimal]

_HUNDRED = Decimal(100)


def to_decimal(value: object) -> Decimal | None:
    """
    Convert an amount to Decimal, or None when it is NaN or not a number

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary
    expansion.
    """
    if isinstance(value, bool):
        return None
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if number.is_nan():
        return None
    return number


def should_trigger_alert(
    previous_total: Amount,
    new_total: Amount,
    budget_amount: Amount,
    threshold: Amount,
    already_triggered: bool,
) -> bool:
    """
    Decide whether a spending update crosses a budget threshold

    Crossing means previous percentage < threshold <= new percentage.

    Args:
        previous_total: Monthly total before the expense event
        new_total: Monthly total after the expense event
        budget_amount: Monthly budget amount
        threshold: Percentage threshold (e.g. 80 for 80%)
        already_triggered: Whether this threshold already fired this period

    Returns:
        True if the alert should fire, False otherwise

    Example:
        >>> should_trigger_alert(11_000_000, 12_500_000, 15_000_000, 80, False)
        True   # 73.3% -> 83.3%
        >>> should_trigger_alert(13_000_000, 14_000_000, 15_000_000, 80, False)
        False  # already above 80%
    """
    budget = to_decimal(budget_amount)
    if budget is None or not budget.is_finite() or budget <= 0:
        return False

    if already_triggered:
        return False

    previous = to_decimal(previous_total)
    new = to_decimal(new_total)
    limit = to_decimal(threshold)
    if previous is None or new is None or limit is None:
        return False

    previous_pct = previous / budget * _HUNDRED
    new_pct = new / budget * _HUNDRED

    return previous_pct < limit and new_pct >= limit
