"""Expiry date arithmetic."""

from datetime import date, timedelta


def days_until_expiry(expiry_date: date, today: date) -> int:
    """Whole days from today to the expiry date (negative once expired)."""
    return (expiry_date - today).days


def is_expired(expiry_date: date | None, today: date) -> bool:
    """Check if an expiry date lies before today."""
    if expiry_date is None:
        return False
    return days_until_expiry(expiry_date, today) < 0


def opened_expiry(expiry_date: date | None, today: date) -> date | None:
    """Shortened expiry for an item that is opened today.

    Once opened, the remaining shelf life is halved (at least one day).
    Items expiring tomorrow or earlier keep their date.
    """
    if expiry_date is None:
        return None
    days_left = days_until_expiry(expiry_date, today)
    if days_left > 1:
        return today + timedelta(days=max(1, days_left // 2))
    return expiry_date
