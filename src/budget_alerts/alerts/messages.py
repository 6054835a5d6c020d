"""
Alert Messages - Localized budget alert text

Formats alert messages for the 80% and 100% thresholds in Vietnamese and
English:
- 80%: usage warning with amounts in million notation (12M, 12.5M)
- 100%: over-budget notice with the excess and thousands separators
- anything else: generic "spending has reached N%" text

The percentage shown here is rounded for display only. Whether an alert
fires is decided by should_trigger_alert on exact values.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from budget_alerts.alerts.triggers import Amount, to_decimal

_MILLION = Decimal(1_000_000)
_ONE_DECIMAL = Decimal("0.1")
_THREE_DECIMALS = Decimal("0.001")


class Language(str, Enum):
    """Supported message languages"""

    VI = "vi"
    EN = "en"


DEFAULT_LANGUAGE = Language.VI

MESSAGES: dict[Language, dict[str, str]] = {
    Language.VI: {
        "not_configured": "Cảnh báo: Ngân sách chưa được thiết lập",
        "warning": (
            "Cảnh báo ngân sách: Bạn đã dùng {percentage}% ngân sách tháng này "
            "({spent} / {budget})"
        ),
        "over_budget": (
            "Vượt quá ngân sách: Bạn đã vượt quá ngân sách hàng tháng {excess}"
        ),
        "generic": "Cảnh báo ngân sách: Chi tiêu đã đạt {percentage}%",
    },
    Language.EN: {
        "not_configured": "Alert: Budget not set",
        "warning": (
            "Budget Alert: You've used {percentage}% of your monthly budget "
            "({spent} / {budget})"
        ),
        "over_budget": "Over Budget: You've exceeded your monthly budget by {excess}",
        "generic": "Budget Alert: Spending has reached {percentage}%",
    },
}


def resolve_language(language: str | None) -> Language:
    """
    Map a language code to a supported language

    Case and region tags are ignored ("EN-us" -> EN). Anything unsupported
    resolves to Vietnamese.
    """
    if not language:
        return DEFAULT_LANGUAGE
    primary = language.strip().replace("_", "-").split("-")[0].lower()
    try:
        return Language(primary)
    except ValueError:
        return DEFAULT_LANGUAGE


def format_millions(amount: Amount) -> str:
    """
    Abbreviate an amount in millions

    Whole millions print without a decimal, anything else with exactly one.

    Example:
        >>> format_millions(12_000_000)
        '12M'
        >>> format_millions(12_500_000)
        '12.5M'
    """
    value = to_decimal(amount)
    if value is None or not value.is_finite():
        return "0M"
    millions = value / _MILLION
    if millions == millions.to_integral_value():
        return f"{int(millions)}M"
    return f"{millions.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)}M"


def format_with_separator(amount: Amount, currency: str = "đ") -> str:
    """
    Comma thousands separators, at most three decimals (rounded half up)

    Example:
        >>> format_with_separator(1_234_567)
        '1,234,567đ'
        >>> format_with_separator(500_000.5)
        '500,000.5đ'
    """
    value = to_decimal(amount)
    if value is None or not value.is_finite():
        value = Decimal(0)
    if value != value.to_integral_value():
        value = value.quantize(_THREE_DECIMALS, rounding=ROUND_HALF_UP)
    whole, _, fraction = f"{value:,f}".partition(".")
    fraction = fraction.rstrip("0")
    if whole in ("-0", "0") and not fraction:
        whole = "0"
    return f"{whole}.{fraction}{currency}" if fraction else f"{whole}{currency}"


def display_percentage(spent: Amount, budget_amount: Amount) -> int:
    """Rounded percentage of the budget spent, half up; 0 when undefined"""
    spent_value = to_decimal(spent)
    budget = to_decimal(budget_amount)
    if spent_value is None or budget is None or not budget.is_finite() or budget == 0:
        return 0
    ratio = spent_value / budget * 100
    if not ratio.is_finite():
        return 0
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_alert_message(
    spent: Amount,
    budget_amount: Amount,
    threshold: int,
    language: str | None = "vi",
    currency: str = "đ",
) -> str:
    """
    Build the alert text for a fired threshold

    Args:
        spent: Total amount spent this month
        budget_amount: Monthly budget amount
        threshold: Percentage threshold that fired (80, 100, ...)
        language: Language code; unsupported codes fall back to Vietnamese
        currency: Suffix for amounts rendered with separators

    Returns:
        Message string; never raises

    Example:
        >>> format_alert_message(15_500_000, 15_000_000, 100, "vi")
        'Vượt quá ngân sách: Bạn đã vượt quá ngân sách hàng tháng 500,000đ'
    """
    templates = MESSAGES[resolve_language(language)]

    budget = to_decimal(budget_amount)
    if budget is None or not budget.is_finite() or budget <= 0:
        return templates["not_configured"]

    percentage = display_percentage(spent, budget)

    if threshold == 80:
        return templates["warning"].format(
            percentage=percentage,
            spent=format_millions(spent),
            budget=format_millions(budget),
        )

    if threshold == 100:
        spent_value = to_decimal(spent)
        excess = spent_value - budget if spent_value is not None else Decimal(0)
        if not excess.is_finite() or excess < 0:
            excess = Decimal(0)
        return templates["over_budget"].format(
            excess=format_with_separator(excess, currency),
        )

    return templates["generic"].format(percentage=percentage)

