"""
Monthly Budget Alert Example

This example demonstrates:
- An 80% warning firing exactly once while spending grows
- The 100% over-budget alert and its precedence on a large jump
- Dismissal not re-arming an alert
- A new month clearing alert state
"""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

from budget_alerts import Budget, BudgetAlerts
from budget_alerts.kernel.alert_policy import AlertPolicy
from budget_alerts.kernel.logging import configure_logging
from budget_alerts.kernel.time import TestTimeProvider


def show(label: str, view) -> None:
    state = "SHOWN " if view.alert_visible else "hidden"
    print(f"{label:<32} [{state}] {view.message}")


def main() -> None:
    configure_logging(json_output=False, log_level="WARNING")
    clock = TestTimeProvider(datetime(2026, 1, 10, 9, 0, tzinfo=timezone.utc))

    with tempfile.TemporaryDirectory() as tmpdir:
        alerts = BudgetAlerts(
            Path(tmpdir) / "alerts.db",
            policy=AlertPolicy(language="en"),
            time_provider=clock,
        )
        budget = Budget(budget_id="household", amount=15_000_000)

        print("\n=== January: gradual spending ===\n")
        totals = [0, 6_000_000, 11_000_000, 12_500_000, 13_000_000]
        for previous_total, new_total in zip(totals, totals[1:]):
            view = alerts.record_spending(budget, previous_total, new_total)
            show(f"{previous_total:>10,} -> {new_total:>10,}", view)
            if view.alert_visible:
                alerts.dismiss()

        view = alerts.record_spending(budget, 13_000_000, 15_500_000)
        show(f"{13_000_000:>10,} -> {15_500_000:>10,}", view)
        alerts.dismiss()

        print("\n=== February: one large purchase ===\n")
        clock.set_time(datetime(2026, 2, 3, 18, 30, tzinfo=timezone.utc))
        view = alerts.record_spending(budget, 0, 16_000_000)
        show(f"{0:>10,} -> {16_000_000:>10,}", view)
        print(f"\nFired this update: {[alert.threshold for alert in view.fired]}")


if __name__ == "__main__":
    main()
