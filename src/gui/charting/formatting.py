"""Value formatting for chart labels."""

from __future__ import annotations

import math

__all__ = ["format_value", "format_currency"]


def format_value(value: float) -> str:
    """Thousands separator, two decimals (``1234.5`` -> ``1,234.50``); ``nan`` -> ``NaN``."""
    if math.isnan(value):
        return "NaN"
    return format(value, ",.2f")


def format_currency(value: float) -> str:
    return "$" + format_value(value)
