"""
Shared Jinja2 template filters.

Used by the explanation renderer to keep unit conversion and display
rounding out of the templates themselves. Numeric values passed to the
templates are full precision; rounding happens only here.
"""

from typing import Any

from jinja2 import Environment


def format_number(value: Any, decimals: int = 2) -> str:
    """Format a number with thousand separators."""
    if value is None:
        return "-"
    try:
        return f"{float(value):,.{decimals}f}"
    except (ValueError, TypeError):
        return str(value)


def format_sci(value: Any, decimals: int = 2) -> str:
    """Format a number in scientific notation with a bare exponent (3.87e-6)."""
    if value is None:
        return "-"
    try:
        text = f"{float(value):.{decimals}e}"
    except (ValueError, TypeError):
        return str(value)
    mantissa, sep, exponent = text.partition("e")
    if not sep:
        return text
    return f"{mantissa}e{int(exponent):+d}"


def to_mega(value: float) -> float:
    """Hz -> MHz, sps -> Msps, bps -> Mbps."""
    return value / 1e6


def to_micro(value: float) -> float:
    """Seconds -> microseconds."""
    return value * 1e6


def to_percent(value: float) -> float:
    return value * 100


def register_filters(env: Environment) -> None:
    """Register all shared filters on a Jinja2 Environment."""
    env.filters["format_number"] = format_number
    env.filters["format_sci"] = format_sci
    env.filters["to_mega"] = to_mega
    env.filters["to_micro"] = to_micro
    env.filters["to_percent"] = to_percent
