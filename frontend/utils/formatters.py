"""
Centralized formatting utilities for the trading UI.
"""
from datetime import datetime
from typing import Optional, Union

from utils.models import normalize_role, parse_timestamp


def format_currency(value: Optional[float], decimals: int = 2) -> str:
    """Format as currency with $ prefix."""
    try:
        if value is None:
            return "-"
        sign = "-" if value < 0 else ""
        return f"{sign}${abs(value):,.{decimals}f}"
    except Exception:
        return "-"


def format_change(change: Optional[float], change_percent: Optional[float]) -> str:
    """Signed price change with its percentage, e.g. ``+5.00 (5.00%)``."""
    if change is None:
        return "-"
    sign = "+" if change >= 0 else "-"
    text = f"{sign}{abs(change):.2f}"
    if change_percent is None:
        return text
    return f"{text} ({change_percent:.2f}%)"


def format_optional_price(value: Optional[float]) -> str:
    """Prices the backend may omit (open, high, low) render as a dash."""
    if not value:
        return "-"
    return format_currency(value)


def format_date(value: Union[str, datetime, None], fmt: str = "%Y-%m-%d") -> str:
    """Format an ISO string or datetime for display."""
    dt = value if isinstance(value, datetime) else parse_timestamp(value)
    if dt is None:
        return "N/A"
    return dt.strftime(fmt)


def format_datetime(value: Union[str, datetime, None]) -> str:
    return format_date(value, fmt="%Y-%m-%d %H:%M:%S")


def format_role(role: str) -> str:
    """``ROLE_ADMIN`` -> ``Admin``."""
    return normalize_role(role).capitalize()


def get_pnl_color_class(value: float) -> str:
    """Return CSS class based on a signed value."""
    if value > 0:
        return "text-success"
    elif value < 0:
        return "text-danger"
    return ""
