"""Calendar helpers for monthly schedules."""

from __future__ import annotations

from calendar import monthrange
from datetime import date


def add_months(value: date, months: int) -> date:
    """Return the date ``months`` after ``value``.

    The day is clamped to the last day of the target month, so adding one
    month to Jan 31 yields Feb 28 (or 29).
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


def due_date_in_month(year: int, month: int, due_day: int) -> date:
    """Return ``due_day`` of the given month, clamped to its length."""

    return date(year, month, min(due_day, monthrange(year, month)[1]))


def next_due_date(*, today: date, due_day: int) -> date:
    """Return the first due date on or after *today*."""

    candidate = due_date_in_month(today.year, today.month, due_day)
    if candidate >= today:
        return candidate
    following = add_months(today.replace(day=1), 1)
    return due_date_in_month(following.year, following.month, due_day)
