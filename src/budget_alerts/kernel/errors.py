"""
Custom exceptions for budget alerts

These never escape the alert monitor: storage errors are caught at the
store adapter boundary and input problems degrade to "no alert". They exist
so backends can signal precisely what went wrong.
"""


class BudgetAlertError(Exception):
    """Base exception for all budget alert errors"""

    pass


class AlertStorageError(BudgetAlertError):
    """Base class for key-value backend failures"""

    pass


class StorageCapacityExceeded(AlertStorageError):
    """
    Raised when a backend refuses a write because it is full

    Mirrors a browser storage quota: the record is simply not persisted
    and the alert will be re-evaluated on the next update.
    """

    def __init__(self, key: str, max_entries: int) -> None:
        self.key = key
        self.max_entries = max_entries
        super().__init__(
            f"Cannot store {key}: backend is full ({max_entries} entries)"
        )
