"""Spending velocity: how fast money is going out compared to the budget pace."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable

from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.category import Category
from ..models.expense import Expense
from .budgeting import WEEKS_PER_MONTH, monthly_budget_total
from .errors import UnknownPeriodError
from .periods import DateRange, end_of_day, start_of_day
from .records import ZERO, CleanExpense, as_reference, clean_expenses, total

logger = get_logger(__name__)

# Trailing window length in days for each selectable velocity period.
VELOCITY_WINDOWS = {"week": 7, "month": 30}

TREND_THRESHOLD = Decimal("0.2")

# Velocity ratio above which each risk level applies, highest first.
RISK_LEVELS = ((2.0, "critical"), (1.5, "high"), (1.1, "moderate"))

# Share of window spend above which a category is flagged, highest first.
CATEGORY_RISK_LEVELS = ((40.0, "high"), (25.0, "moderate"))
TOP_CATEGORIES = 5


@dataclass(slots=True)
class SpendingVelocity:
    window: DateRange
    total_amount: Decimal
    current_velocity: Decimal
    optimal_velocity: Decimal
    velocity_ratio: float
    projected_overage: Decimal
    days_remaining: int
    first_half_velocity: Decimal
    second_half_velocity: Decimal
    trend: str  # accelerating | decelerating | stable
    risk_level: str  # low | moderate | high | critical


@dataclass(slots=True)
class PeriodVelocity:
    label: str
    window: DateRange
    amount: Decimal
    velocity: Decimal
    days: int = 7


@dataclass(slots=True)
class CategoryVelocity:
    category: Category
    amount: Decimal
    velocity: Decimal
    percentage: float
    risk_level: str  # low | moderate | high


def trailing_window(day: date, days: int) -> DateRange:
    """The ``days`` calendar days ending with ``day``, both ends inclusive."""

    return DateRange(start_of_day(day - timedelta(days=days - 1)), end_of_day(day))


def _window_days(period: str) -> int:
    try:
        return VELOCITY_WINDOWS[period]
    except KeyError:
        raise UnknownPeriodError("velocity period", period, tuple(VELOCITY_WINDOWS)) from None


def _in_window(entries: Iterable[CleanExpense], window: DateRange) -> list[CleanExpense]:
    return [entry for entry in entries if window.contains(entry.occurred_at)]


def risk_level(ratio: float) -> str:
    for threshold, level in RISK_LEVELS:
        if ratio > threshold:
            return level
    return "low"


def velocity_trend(first_half: Decimal, second_half: Decimal) -> str:
    """Compare the two halves of a window; a change beyond 20% is a trend."""

    if first_half <= 0:
        return "stable"
    change = (second_half - first_half) / first_half
    if change > TREND_THRESHOLD:
        return "accelerating"
    if change < -TREND_THRESHOLD:
        return "decelerating"
    return "stable"


def spending_velocity(
    expenses: Iterable[Expense],
    budgets: Iterable[Budget],
    reference: datetime | date,
    period: str = "month",
) -> SpendingVelocity:
    """Daily spend over the trailing window against the pace active budgets allow.

    The optimal velocity spreads the monthly budget total (a week's share of
    it for ``period="week"``) evenly over the window. The projection runs the
    current velocity over the whole calendar month of ``reference``.
    """

    days = _window_days(period)
    today = as_reference(reference).date()
    window = trailing_window(today, days)
    entries = _in_window(clean_expenses(expenses), window)

    amount = total(entries)
    current = amount / days
    monthly_budget = monthly_budget_total(budgets)
    window_budget = monthly_budget if period == "month" else monthly_budget / WEEKS_PER_MONTH
    optimal = window_budget / days
    ratio = float(current / optimal) if optimal > 0 else 0.0

    days_in_month = monthrange(today.year, today.month)[1]
    projected_overage = max(ZERO, current * days_in_month - monthly_budget)

    first_days = days // 2
    midpoint = end_of_day(today - timedelta(days=days - first_days))
    first_half = total(entry for entry in entries if entry.occurred_at <= midpoint) / first_days
    second_half = total(entry for entry in entries if entry.occurred_at > midpoint) / (days - first_days)

    result = SpendingVelocity(
        window=window,
        total_amount=amount,
        current_velocity=current,
        optimal_velocity=optimal,
        velocity_ratio=ratio,
        projected_overage=projected_overage,
        days_remaining=days_in_month - today.day,
        first_half_velocity=first_half,
        second_half_velocity=second_half,
        trend=velocity_trend(first_half, second_half),
        risk_level=risk_level(ratio),
    )
    logger.debug(
        "Computed spending velocity",
        extra={"period": period, "ratio": ratio, "risk": result.risk_level, "trend": result.trend},
    )
    return result


def weekly_velocity(
    expenses: Iterable[Expense], reference: datetime | date, weeks: int = 4
) -> list[PeriodVelocity]:
    """Consecutive 7-day blocks ending today, oldest first, labelled ``W1``..``Wn``."""

    today = as_reference(reference).date()
    entries = clean_expenses(expenses)
    blocks: list[PeriodVelocity] = []
    for offset in range(weeks - 1, -1, -1):
        window = trailing_window(today - timedelta(days=7 * offset), 7)
        amount = total(_in_window(entries, window))
        blocks.append(
            PeriodVelocity(label=f"W{weeks - offset}", window=window, amount=amount, velocity=amount / 7)
        )
    return blocks


def category_velocities(
    expenses: Iterable[Expense],
    reference: datetime | date,
    period: str = "month",
    limit: int = TOP_CATEGORIES,
) -> list[CategoryVelocity]:
    """Per-category daily spend over the trailing window, largest share first."""

    days = _window_days(period)
    window = trailing_window(as_reference(reference).date(), days)
    entries = _in_window(clean_expenses(expenses), window)
    window_total = total(entries)

    groups: dict[str, tuple[Category, Decimal]] = {}
    for entry in entries:
        category, amount = groups.get(entry.category_id, (entry.category, ZERO))
        groups[entry.category_id] = (category, amount + entry.amount)

    velocities = []
    for category, amount in groups.values():
        percentage = float(amount * 100 / window_total) if window_total > 0 else 0.0
        level = next((name for threshold, name in CATEGORY_RISK_LEVELS if percentage > threshold), "low")
        velocities.append(
            CategoryVelocity(
                category=category,
                amount=amount,
                velocity=amount / days,
                percentage=percentage,
                risk_level=level,
            )
        )
    velocities.sort(key=lambda item: (-item.amount, item.category.id))
    return velocities[:limit]


__all__ = [
    "CategoryVelocity",
    "PeriodVelocity",
    "SpendingVelocity",
    "category_velocities",
    "risk_level",
    "spending_velocity",
    "trailing_window",
    "velocity_trend",
    "weekly_velocity",
]
