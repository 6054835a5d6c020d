"""Tests for budget status bands"""

import pytest

from budget_alerts.alerts.status import get_budget_status, spending_percentage


@pytest.mark.parametrize(
    "percentage,severity",
    [
        (0, "success"),
        (50, "success"),
        (79.9, "success"),
        (80, "warning"),
        (85, "warning"),
        (100, "warning"),
        (100.1, "error"),
        (107, "error"),
    ],
)
def test_status_bands(percentage, severity):
    assert get_budget_status(percentage).severity == severity


def test_vietnamese_labels():
    assert get_budget_status(50).label == "Đang theo dõi"
    assert get_budget_status(85).label == "Gần đạt giới hạn"
    assert get_budget_status(107).label == "Vượt quá ngân sách"


def test_english_labels():
    assert get_budget_status(107, "en").label == "Over budget"


def test_nan_percentage_is_on_track():
    assert get_budget_status(float("nan")).severity == "success"


def test_spending_percentage():
    assert spending_percentage(12_000_000, 15_000_000) == pytest.approx(80.0)
    assert spending_percentage(1, 0) == 0.0
    assert spending_percentage(float("nan"), 10) == 0.0
