"""Spending trends over trailing windows and per-category deep dives.

Every bucket in a window is reported, including those with no spend, so
charts get a continuous series.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from ..models.category import Category
from ..models.expense import Expense
from .periods import DateRange, add_months, end_of_day, start_of_day
from .records import ZERO, CleanExpense, as_reference, clean_expenses, total

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Percent change between window halves that counts as a trend.
TREND_CHANGE_PERCENTAGE = 10.0

RECENT_EXPENSES = 10
TOP_EXPENSES = 5


@dataclass(slots=True)
class TrendPoint:
    label: str
    start: date
    amount: Decimal


@dataclass(slots=True)
class SpendingTrend:
    period: str  # daily | weekly
    points: list[TrendPoint] = field(default_factory=list)
    total_amount: Decimal = ZERO
    average_amount: Decimal = ZERO
    trend: str = "stable"  # up | down | stable
    change_percentage: float = 0.0
    peak: Optional[TrendPoint] = None


@dataclass(slots=True)
class MonthlyAmount:
    year: int
    month: int
    label: str
    amount: Decimal


@dataclass(slots=True)
class CategoryAnalysis:
    """Everything shown when drilling into one category."""

    category_id: str
    window: DateRange
    total_amount: Decimal = ZERO
    percentage: float = 0.0
    expense_count: int = 0
    average_expense: Decimal = ZERO
    recent_expenses: list[CleanExpense] = field(default_factory=list)
    top_expenses: list[CleanExpense] = field(default_factory=list)
    monthly_trend: list[MonthlyAmount] = field(default_factory=list)
    weekday_frequency: list[tuple[str, int]] = field(default_factory=list)
    category: Optional[Category] = None


def _day_label(day: date, window_days: int) -> str:
    if window_days <= 7:
        return WEEKDAY_NAMES[day.weekday()]
    if window_days <= 30:
        return str(day.day)
    return f"{MONTH_NAMES[day.month - 1]} {day.day}"


def _half_change(points: list[TrendPoint]) -> tuple[str, float]:
    """Compare average spend in the second half of ``points`` to the first half."""

    split = len(points) // 2
    first, second = points[:split], points[split:]
    if not first or not second:
        return "stable", 0.0
    first_avg = sum((p.amount for p in first), ZERO) / len(first)
    second_avg = sum((p.amount for p in second), ZERO) / len(second)
    if first_avg <= 0:
        return "stable", 0.0
    change = float((second_avg - first_avg) * 100 / first_avg)
    if abs(change) <= TREND_CHANGE_PERCENTAGE:
        return "stable", abs(change)
    return ("up" if change > 0 else "down"), abs(change)


def _peak(points: list[TrendPoint]) -> Optional[TrendPoint]:
    best: Optional[TrendPoint] = None
    for point in points:
        if best is None or point.amount > best.amount:
            best = point
    return best if best is not None and best.amount > 0 else None


def _build_trend(period: str, points: list[TrendPoint]) -> SpendingTrend:
    amount = sum((p.amount for p in points), ZERO)
    trend, change = _half_change(points)
    return SpendingTrend(
        period=period,
        points=points,
        total_amount=amount,
        average_amount=amount / len(points) if points else ZERO,
        trend=trend,
        change_percentage=change,
        peak=_peak(points),
    )


def daily_trend(expenses: Iterable[Expense], reference: datetime | date, days: int = 7) -> SpendingTrend:
    """Per-day spend for the ``days`` days ending on the reference day."""

    today = as_reference(reference).date()
    first = today - timedelta(days=days - 1)
    by_day: dict[date, Decimal] = {}
    for entry in clean_expenses(expenses):
        if first <= entry.day <= today:
            by_day[entry.day] = by_day.get(entry.day, ZERO) + entry.amount

    points = []
    for offset in range(days):
        day = first + timedelta(days=offset)
        points.append(TrendPoint(label=_day_label(day, days), start=day, amount=by_day.get(day, ZERO)))
    return _build_trend("daily", points)


def weekly_trend(expenses: Iterable[Expense], reference: datetime | date, weeks: int = 4) -> SpendingTrend:
    """Per-week spend in 7-day blocks ending on the reference day, oldest first."""

    today = as_reference(reference).date()
    by_block = [ZERO] * weeks
    for entry in clean_expenses(expenses):
        days_ago = (today - entry.day).days
        if days_ago < 0:
            continue
        block = days_ago // 7
        if block < weeks:
            by_block[weeks - 1 - block] += entry.amount

    points = [
        TrendPoint(
            label=f"W{index + 1}",
            start=today - timedelta(days=7 * (weeks - index) - 1),
            amount=amount,
        )
        for index, amount in enumerate(by_block)
    ]
    return _build_trend("weekly", points)


def monthly_trend(
    expenses: Iterable[Expense],
    reference: datetime | date,
    months: int = 6,
    *,
    category_id: Optional[str] = None,
) -> list[MonthlyAmount]:
    """Calendar-month totals for the ``months`` months ending with the reference month."""

    anchor = start_of_day(as_reference(reference).date().replace(day=1))
    keys = [(m.year, m.month) for m in (add_months(anchor, -offset) for offset in range(months - 1, -1, -1))]
    sums = dict.fromkeys(keys, ZERO)
    for entry in clean_expenses(expenses):
        if category_id is not None and entry.category_id != category_id:
            continue
        key = (entry.occurred_at.year, entry.occurred_at.month)
        if key in sums:
            sums[key] += entry.amount
    return [
        MonthlyAmount(year=year, month=month, label=f"{MONTH_NAMES[month - 1]} {year % 100:02d}", amount=amount)
        for (year, month), amount in sums.items()
    ]


def weekday_frequency(entries: Iterable[CleanExpense]) -> list[tuple[str, int]]:
    """Number of expenses logged on each weekday, Monday first."""

    counts = [0] * 7
    for entry in entries:
        counts[entry.occurred_at.weekday()] += 1
    return list(zip(WEEKDAY_NAMES, counts))


def category_deep_dive(
    expenses: Iterable[Expense],
    category_id: str,
    reference: datetime | date,
    months: int = 3,
) -> CategoryAnalysis:
    """Analyze one category over the ``months`` months before the reference instant."""

    now = as_reference(reference)
    window = DateRange(add_months(now, -months), end_of_day(now))
    in_window = [entry for entry in clean_expenses(expenses) if window.contains(entry.occurred_at)]
    selected = [entry for entry in in_window if entry.category_id == category_id]

    analysis = CategoryAnalysis(category_id=category_id, window=window)
    if not selected:
        return analysis

    amount = total(selected)
    window_total = total(in_window)
    analysis.category = selected[0].category
    analysis.total_amount = amount
    analysis.percentage = float(amount * 100 / window_total) if window_total > 0 else 0.0
    analysis.expense_count = len(selected)
    analysis.average_expense = amount / len(selected)
    analysis.recent_expenses = sorted(selected, key=lambda e: e.occurred_at, reverse=True)[:RECENT_EXPENSES]
    analysis.top_expenses = sorted(selected, key=lambda e: e.amount, reverse=True)[:TOP_EXPENSES]
    analysis.monthly_trend = monthly_trend(
        (entry.expense for entry in selected), now, months, category_id=category_id
    )
    analysis.weekday_frequency = weekday_frequency(selected)
    return analysis


__all__ = [
    "CategoryAnalysis",
    "MonthlyAmount",
    "SpendingTrend",
    "TrendPoint",
    "category_deep_dive",
    "daily_trend",
    "monthly_trend",
    "weekday_frequency",
    "weekly_trend",
]
