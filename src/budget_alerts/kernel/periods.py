"""
Accounting period keys

A budget is valid for one calendar month, identified by a "YYYY-MM" key.
When the key observed by the monitor changes, alert state resets.
"""

from datetime import datetime

from budget_alerts.kernel.time import TimeProvider


def period_key_for(moment: datetime) -> str:
    """
    Month key for a datetime

    Example:
        >>> period_key_for(datetime(2026, 1, 31, 23, 59))
        '2026-01'
    """
    return f"{moment.year:04d}-{moment.month:02d}"


def current_period_key(time_provider: TimeProvider) -> str:
    """Month key for the provider's current time"""
    return period_key_for(time_provider.now())
