"""Budgeting domain services: budget-vs-actual analysis and projections."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.category import Category
from ..models.expense import Expense
from .errors import UnknownPeriodError
from .periods import CYCLES, DateRange, budget_cycle
from .records import ZERO, CleanExpense, as_reference, clean_expenses, to_amount, total

logger = get_logger(__name__)

WARNING_PERCENTAGE = 80.0
SECONDS_PER_DAY = 24 * 60 * 60

# Average weeks per month (365.25 / 12 / 7, rounded). Used wherever a weekly
# budget is compared against a calendar month of spend.
WEEKS_PER_MONTH = Decimal("4.33")

STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_DANGER = "danger"


@dataclass(slots=True)
class BudgetAnalysis:
    """Budget-vs-actual figures for one billing cycle."""

    budget: Budget
    category: Optional[Category]
    cycle: DateRange
    budget_amount: Decimal
    actual_spent: Decimal
    remaining: Decimal
    percentage: float
    is_over_budget: bool
    daily_average: Decimal
    projected_total: Decimal
    days_in_period: int
    days_passed: int
    days_remaining: int
    status: str
    expenses: list[CleanExpense] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class BudgetInsight:
    """Short presentation message derived from an analysis."""

    kind: str  # danger | warning | success | tip
    message: str


def classify_status(
    *, is_over_budget: bool, percentage: float, projected_total: Decimal, budget_amount: Decimal
) -> str:
    """Return ``danger``, ``warning`` or ``good`` in that order of precedence."""

    if is_over_budget:
        return STATUS_DANGER
    if percentage > WARNING_PERCENTAGE or projected_total > budget_amount:
        return STATUS_WARNING
    return STATUS_GOOD


def _days_between(later: datetime, earlier: datetime) -> int:
    return math.ceil((later - earlier).total_seconds() / SECONDS_PER_DAY)


def analyze_budget(
    budget: Budget,
    expenses: Iterable[Expense],
    reference: datetime | date,
    selected_cycle: str = "current",
    *,
    category: Optional[Category] = None,
) -> BudgetAnalysis:
    """Analyze ``budget`` over the cycle containing ``reference``.

    ``selected_cycle="previous"`` shifts one full period back. The
    reference instant is always passed in; the system clock is never read.
    """

    now = as_reference(reference)
    cycle = budget_cycle(budget.period, budget.start_date, now, selected_cycle)

    relevant = [
        entry
        for entry in clean_expenses(expenses)
        if cycle.contains(entry.occurred_at)
        and (not budget.category_id or entry.category_id == budget.category_id)
    ]

    budget_amount = to_amount(budget.amount) or ZERO
    actual_spent = total(relevant)
    remaining = budget_amount - actual_spent
    percentage = float(actual_spent * 100 / budget_amount) if budget_amount > 0 else 0.0
    is_over_budget = actual_spent > budget_amount

    days_in_period = cycle.days
    days_passed = min(max(_days_between(now, cycle.start), 0), days_in_period)
    days_remaining = max(0, days_in_period - days_passed)
    daily_average = actual_spent / days_passed if days_passed > 0 else ZERO
    projected_total = daily_average * days_in_period

    status = classify_status(
        is_over_budget=is_over_budget,
        percentage=percentage,
        projected_total=projected_total,
        budget_amount=budget_amount,
    )

    if category is None and budget.category_id and relevant:
        category = relevant[0].category

    analysis = BudgetAnalysis(
        budget=budget,
        category=category,
        cycle=cycle,
        budget_amount=budget_amount,
        actual_spent=actual_spent,
        remaining=remaining,
        percentage=percentage,
        is_over_budget=is_over_budget,
        daily_average=daily_average,
        projected_total=projected_total,
        days_in_period=days_in_period,
        days_passed=days_passed,
        days_remaining=days_remaining,
        status=status,
        expenses=relevant,
    )
    logger.debug(
        "Analyzed budget",
        extra={"budget_id": budget.id, "status": status, "spent": actual_spent, "cycle_start": cycle.start},
    )
    return analysis


def analyze_budgets(
    budgets: Iterable[Budget],
    expenses: Iterable[Expense],
    reference: datetime | date,
    selected_cycle: str = "current",
    *,
    categories: Iterable[Category] = (),
) -> list[BudgetAnalysis]:
    """Analyze every active budget against one expense snapshot.

    Budgets with an unknown cadence or unusable start date are logged and
    skipped.
    """

    now = as_reference(reference)
    if selected_cycle not in CYCLES:
        raise UnknownPeriodError("cycle", selected_cycle, CYCLES)
    snapshot = list(expenses)
    by_id = {category.id: category for category in categories}
    analyses: list[BudgetAnalysis] = []
    for budget in budgets:
        if not budget.is_active:
            continue
        try:
            analyses.append(
                analyze_budget(
                    budget,
                    snapshot,
                    now,
                    selected_cycle,
                    category=by_id.get(budget.category_id) if budget.category_id else None,
                )
            )
        except (UnknownPeriodError, TypeError) as exc:
            logger.warning(
                "Skipping malformed budget",
                extra={"budget_id": budget.id, "reason": str(exc)},
            )
    return analyses


@dataclass(slots=True)
class BudgetOverview:
    """Totals across every analyzed budget."""

    budget_count: int = 0
    total_budget: Decimal = ZERO
    total_spent: Decimal = ZERO
    percentage: float = 0.0
    over_limit: int = 0
    at_risk: int = 0


def budget_overview(analyses: Iterable[BudgetAnalysis]) -> BudgetOverview:
    """Combine analyses into overall spend vs budget.

    ``over_limit`` counts budgets already exceeded; ``at_risk`` counts those in
    ``warning`` status.
    """

    analyses = list(analyses)
    total_budget = sum((a.budget_amount for a in analyses), ZERO)
    total_spent = sum((a.actual_spent for a in analyses), ZERO)
    return BudgetOverview(
        budget_count=len(analyses),
        total_budget=total_budget,
        total_spent=total_spent,
        percentage=float(total_spent * 100 / total_budget) if total_budget > 0 else 0.0,
        over_limit=sum(1 for a in analyses if a.is_over_budget),
        at_risk=sum(1 for a in analyses if a.status == STATUS_WARNING),
    )


def monthly_budget_total(budgets: Iterable[Budget]) -> Decimal:
    """Total of active budgets expressed per calendar month."""

    amount = ZERO
    for budget in budgets:
        if not budget.is_active:
            continue
        value = to_amount(budget.amount)
        if value is None:
            continue
        amount += value * WEEKS_PER_MONTH if budget.period == "weekly" else value
    return amount


def recommended_daily_spend(analysis: BudgetAnalysis) -> Decimal:
    """Spend per remaining day that lands exactly on the budget."""

    return analysis.remaining / max(analysis.days_remaining, 1)


def _whole(amount: Decimal) -> str:
    return str(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def budget_insights(analysis: BudgetAnalysis, *, currency: str = "₹") -> list[BudgetInsight]:
    """Presentation messages for an analysis, most urgent first."""

    insights: list[BudgetInsight] = []
    unit = "month" if analysis.budget.period == "monthly" else "week"

    if analysis.is_over_budget:
        insights.append(
            BudgetInsight(
                STATUS_DANGER,
                f"You're {currency}{_whole(abs(analysis.remaining))} over budget this {unit}",
            )
        )
    elif analysis.projected_total > analysis.budget_amount:
        overage = analysis.projected_total - analysis.budget_amount
        insights.append(
            BudgetInsight(
                STATUS_WARNING,
                f"At current pace, you'll exceed budget by {currency}{_whole(overage)}",
            )
        )
    elif analysis.percentage < 50 and analysis.days_remaining < 5:
        insights.append(
            BudgetInsight(
                "success",
                f"Great job! You're under budget with {currency}{_whole(analysis.remaining)} to spare",
            )
        )

    if analysis.daily_average > 0 and analysis.days_remaining > 0:
        recommended = recommended_daily_spend(analysis)
        if recommended < analysis.daily_average:
            insights.append(
                BudgetInsight(
                    "tip",
                    f"Try to spend {currency}{_whole(max(recommended, ZERO))}/day for the rest of the period",
                )
            )

    return insights


__all__ = [
    "WEEKS_PER_MONTH",
    "BudgetAnalysis",
    "BudgetInsight",
    "BudgetOverview",
    "analyze_budget",
    "analyze_budgets",
    "budget_insights",
    "budget_overview",
    "classify_status",
    "monthly_budget_total",
    "recommended_daily_spend",
]
