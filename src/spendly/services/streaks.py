"""Consecutive-day logging streaks."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..models.expense import Expense
from .records import as_day, clean_expenses

STREAK_LEVELS = (
    (100, "Master"),
    (50, "Legend"),
    (30, "Champion"),
    (14, "Dedicated"),
    (7, "On Fire"),
    (3, "Getting Warm"),
    (1, "Beginner"),
    (0, "Starter"),
)


@dataclass(slots=True)
class StreakStats:
    """Everything the streak screen shows, computed from one snapshot."""

    current_streak: int = 0
    longest_streak: int = 0
    last_logged: Optional[date] = None
    streak_start: Optional[date] = None
    is_active_today: bool = False
    days_without_logging: int = 0
    weekly_progress: list[bool] = field(default_factory=lambda: [False] * 7)
    days_logged_this_month: int = 0
    days_in_month: int = 0

    @property
    def month_percentage(self) -> float:
        if self.days_in_month <= 0:
            return 0.0
        return self.days_logged_this_month * 100 / self.days_in_month


def expense_days(expenses: Iterable[Expense]) -> set[date]:
    """Distinct local calendar days that have at least one usable expense."""

    return {entry.day for entry in clean_expenses(expenses)}


def streak_from_days(days: set[date], today: date) -> int:
    """Walk backwards from ``today`` until the first day missing from ``days``."""
    current = 0
    cursor = today
    while cursor in days:
        current += 1
        cursor -= timedelta(days=1)
    return current


def current_streak(expenses: Iterable[Expense], today: date | datetime) -> int:
    """Count consecutive logged days ending at ``today``.

    A day without an expense today means a streak of 0, even when the
    previous days form an unbroken run.
    """

    return streak_from_days(expense_days(expenses), as_day(today))


def _longest(days: set[date]) -> int:
    longest = 0
    run = 0
    last_day: date | None = None
    for d in sorted(days):
        if last_day is not None and d == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = d
    return longest


def longest_streak(expenses: Iterable[Expense]) -> int:
    """Longest run of consecutive logged days anywhere in the history."""

    return _longest(expense_days(expenses))


def streak_stats(expenses: Iterable[Expense], today: date | datetime) -> StreakStats:
    """Current and longest streak plus weekly and monthly logging activity."""

    day = as_day(today)
    days = expense_days(expenses)
    days_in_month = monthrange(day.year, day.month)[1]
    weekly = [(day - timedelta(days=offset)) in days for offset in range(6, -1, -1)]
    if not days:
        return StreakStats(weekly_progress=weekly, days_in_month=days_in_month)

    current = streak_from_days(days, day)
    past_days = [d for d in days if d <= day]
    last_logged = max(past_days) if past_days else None
    is_active_today = day in days
    if is_active_today or last_logged is None:
        days_without = 0
    else:
        days_without = (day - last_logged).days

    return StreakStats(
        current_streak=current,
        longest_streak=_longest(days),
        last_logged=last_logged,
        streak_start=day - timedelta(days=current - 1) if current else None,
        is_active_today=is_active_today,
        days_without_logging=days_without,
        weekly_progress=weekly,
        days_logged_this_month=sum(1 for d in days if d.year == day.year and d.month == day.month),
        days_in_month=days_in_month,
    )


def streak_level(streak: int) -> str:
    """Title shown for a streak length."""

    for threshold, title in STREAK_LEVELS:
        if streak >= threshold:
            return title
    return "Starter"


__all__ = [
    "StreakStats",
    "current_streak",
    "expense_days",
    "longest_streak",
    "streak_from_days",
    "streak_level",
    "streak_stats",
]
