"""Rounding and display helpers shared by the plan engine."""
from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` places, ties away from zero.

    ``round()`` uses banker's rounding, which would make 0.5 bonus dollars
    disappear on even amounts.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def format_number(value: float) -> str:
    """Group thousands and drop trailing zero decimals (``21111.0`` -> ``21,111``)."""
    text = f"{value:,.2f}"
    return text.rstrip("0").rstrip(".")


def format_value(value: float, unit: str) -> str:
    """Format a KPI value for display according to its unit."""
    if unit in ("currency", "currencyPerMonth"):
        sign = "-" if value < 0 else ""
        return f"{sign}${format_number(abs(value))}"
    if unit == "percentage":
        return f"{format_number(value)}%"
    if unit == "rating":
        return f"{value:.1f}"
    return format_number(value)
