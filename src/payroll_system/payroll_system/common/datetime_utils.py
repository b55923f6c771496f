from __future__ import annotations

from datetime import date


def previous_month(today: date) -> tuple[int, int]:
    """(month, year) of the calendar month before `today`."""
    if today.month == 1:
        return 12, today.year - 1
    return today.month - 1, today.year
