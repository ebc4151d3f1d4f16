"""Numeric helpers and display formatting shared by indicators and recommendations"""

import math
from typing import Any


def is_valid_number(value: Any) -> bool:
    """True for finite ints/floats; bools and NaN/inf are rejected"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def to_number(value: Any) -> float:
    """Coerce missing or invalid numeric input to 0"""
    return float(value) if is_valid_number(value) else 0.0


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    if denominator <= 0:
        return default
    result = numerator / denominator
    return result if math.isfinite(result) else default


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_currency(amount: Any) -> str:
    """Whole-dollar USD, e.g. 1500 -> "$1,500", -200 -> "-$200" """
    if not is_valid_number(amount):
        return "N/A"
    rounded = round_half_up(abs(amount))
    if rounded == 0:
        return "$0"
    sign = "-" if amount < 0 else ""
    return f"{sign}${rounded:,}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def title_case(token: str) -> str:
    """'somewhat-confident' -> 'Somewhat Confident'"""
    return " ".join(part.capitalize() for part in token.split("-") if part)


def finite_or_zero(value: float) -> float:
    """Collapse overflowed or NaN arithmetic results to 0"""
    return float(value) if is_valid_number(value) else 0.0
