"""Formatting utilities for display."""


def format_money(value, symbol="₹", decimals=0):
    """Format a currency amount with thousands separators."""
    if value is None:
        return "N/A"
    value = float(value)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_pct(value, decimals=2, with_color=False):
    """Format percentage with sign. Optionally include rich color markup."""
    if value is None:
        return "N/A"
    value = float(value)
    sign = "+" if value >= 0 else ""
    formatted = f"{sign}{value:.{decimals}f}%"
    if with_color:
        color = "green" if value >= 0 else "red"
        return f"[{color}]{formatted}[/{color}]"
    return formatted


def format_units(value, decimals=2):
    """Format a unit count, e.g. 13.68 units."""
    if value is None:
        return "N/A"
    return f"{float(value):,.{decimals}f} units"
