"""
Display helpers shared by the templates and the live preview.
"""
from datetime import date, datetime
from typing import Optional, Union

STATUS_BADGE_CLASSES = {
    "active": "badge-active",
    "paused": "badge-paused",
}


def format_currency(value: Union[int, float, str, None]) -> str:
    """Format a budget as dollars, e.g. 5000 -> '$5,000' and 1234.5 -> '$1,234.5'."""
    if value is None or value == "":
        return ""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return str(value)

    amount = round(amount, 2)
    if amount.is_integer():
        return f"${int(amount):,}"
    return f"${amount:,.2f}".rstrip("0")


def format_date(value: Union[date, datetime, str, None]) -> str:
    """Format a date as M/D/YYYY."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return value
    return f"{value.month}/{value.day}/{value.year}"


def status_badge_class(status: Optional[str]) -> str:
    """CSS class for a status pill. Completed and unknown statuses share the neutral style."""
    key = getattr(status, "value", status)
    return STATUS_BADGE_CLASSES.get(key, "badge-neutral")


def pluralize_campaigns(count: int) -> str:
    return f"{count} campaign{'' if count == 1 else 's'}"
