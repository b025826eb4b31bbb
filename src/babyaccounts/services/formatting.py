"""Display helpers registered as Jinja filters."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from .reports import parse_amount


def format_currency(value: Any, symbol: str = "₹") -> str:
    """Render an amount with grouping separators and two decimals."""

    amount = value if isinstance(value, Decimal) else parse_amount(value)
    prefix = "-" if amount < 0 else ""
    return f"{prefix}{symbol}{abs(amount):,.2f}"


def format_date(value: Any) -> str:
    """Render an ISO date as ``DD Mon YYYY``; unparseable input is echoed back."""

    if isinstance(value, date):
        return value.strftime("%d %b %Y")
    text = str(value or "").strip()
    try:
        return date.fromisoformat(text[:10]).strftime("%d %b %Y")
    except ValueError:
        return text
