"""Spending summaries and per-category breakdowns."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from ..logging_config import get_logger
from ..models.category import Category
from ..models.expense import Expense
from .periods import PERIOD_LABELS, DateRange, resolve_period
from .records import ZERO, CleanExpense, clean_expenses, total

logger = get_logger(__name__)


@dataclass(slots=True)
class CategorySpending:
    """Spend attributed to one category inside a summary."""

    category: Category
    total_amount: Decimal
    percentage: float
    expense_count: int


@dataclass(slots=True)
class ExpenseSummary:
    """Totals for one interval, broken down by category."""

    start: datetime
    end: datetime
    total_amount: Decimal = ZERO
    expense_count: int = 0
    category_breakdown: list[CategorySpending] = field(default_factory=list)
    period: Optional[str] = None

    @property
    def average_per_day(self) -> Decimal:
        days = (self.end.date() - self.start.date()).days + 1
        if days <= 0:
            return ZERO
        return self.total_amount / days


def filter_expenses(expenses: Iterable[Expense], interval: DateRange) -> list[CleanExpense]:
    """Return usable expenses dated inside ``interval`` (both ends inclusive)."""

    return [entry for entry in clean_expenses(expenses) if interval.contains(entry.occurred_at)]


def category_breakdown(entries: Iterable[CleanExpense]) -> list[CategorySpending]:
    """Group by category id, largest spend first, ties by id."""

    entries = list(entries)
    grand_total = total(entries)
    groups: dict[str, tuple[Category, Decimal, int]] = {}
    for entry in entries:
        category, amount, count = groups.get(entry.category_id, (entry.category, ZERO, 0))
        groups[entry.category_id] = (category, amount + entry.amount, count + 1)

    breakdown = [
        CategorySpending(
            category=category,
            total_amount=amount,
            percentage=float(amount * 100 / grand_total) if grand_total > 0 else 0.0,
            expense_count=count,
        )
        for category, amount, count in groups.values()
    ]
    breakdown.sort(key=lambda item: (-item.total_amount, item.category.id))
    return breakdown


def summarize(expenses: Iterable[Expense], interval: DateRange) -> ExpenseSummary:
    """Summarize spending inside ``interval``.

    An empty input yields a zero total and an empty breakdown.
    """

    selected = filter_expenses(expenses, interval)
    summary = ExpenseSummary(
        start=interval.start,
        end=interval.end,
        total_amount=total(selected),
        expense_count=len(selected),
        category_breakdown=category_breakdown(selected),
    )
    logger.debug(
        "Summarized expenses",
        extra={
            "start": interval.start,
            "end": interval.end,
            "total": summary.total_amount,
            "categories": len(summary.category_breakdown),
        },
    )
    return summary


def summarize_period(
    expenses: Iterable[Expense], period: str, reference: datetime | date
) -> ExpenseSummary:
    """Resolve a symbolic period around ``reference`` and summarize it."""

    summary = summarize(expenses, resolve_period(period, reference))
    summary.period = PERIOD_LABELS[period]
    return summary


def daily_totals(expenses: Iterable[Expense], interval: DateRange) -> list[tuple[date, Decimal]]:
    """Per-calendar-day spend inside ``interval``, oldest day first (chart data)."""

    by_day: dict[date, Decimal] = {}
    for entry in filter_expenses(expenses, interval):
        by_day[entry.day] = by_day.get(entry.day, ZERO) + entry.amount
    return sorted(by_day.items())


__all__ = [
    "CategorySpending",
    "ExpenseSummary",
    "category_breakdown",
    "daily_totals",
    "filter_expenses",
    "summarize",
    "summarize_period",
]
