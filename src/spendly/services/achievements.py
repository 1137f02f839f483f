"""Achievement progress and one-way unlock evaluation.

Progress is recomputed from the record set on every call; only the unlock
flag and its timestamp carry over from the persisted state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional, Protocol

from ..logging_config import get_logger
from ..models.achievement import AchievementRecord
from ..models.budget import Budget
from ..models.expense import Expense
from .budgeting import WEEKS_PER_MONTH, monthly_budget_total
from .periods import add_months, resolve_period
from .records import ZERO, CleanExpense, as_reference, clean_expenses, to_amount, total
from .streaks import streak_from_days

logger = get_logger(__name__)

BUDGET_SUCCESS_LOOKBACK_MONTHS = 6
SAVINGS_HERO_RATIO = Decimal("80")
CATEGORY_TARGET = 5
NOTE_TARGET = 10
BIG_SPENDER_TARGET = Decimal("10000")

TIERS = ("bronze", "silver", "gold", "platinum")


@dataclass(slots=True, frozen=True)
class AchievementDefinition:
    """Static description of an achievement."""

    id: str
    title: str
    description: str
    icon: str
    category: str  # spending | budgeting | consistency | milestone | smart
    tier: str
    requirement: str
    reward: str = ""


@dataclass(slots=True)
class Achievement:
    """A definition together with its evaluated state."""

    definition: AchievementDefinition
    progress: int = 0
    is_unlocked: bool = False
    unlocked_at: Optional[datetime] = None

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def title(self) -> str:
        return self.definition.title

    @property
    def tier(self) -> str:
        return self.definition.tier

    def to_record(self) -> AchievementRecord:
        return AchievementRecord(
            id=self.id,
            progress=self.progress,
            is_unlocked=self.is_unlocked,
            unlocked_at=self.unlocked_at,
        )


@dataclass(slots=True)
class AchievementEvaluation:
    achievements: list[Achievement] = field(default_factory=list)
    newly_unlocked: list[Achievement] = field(default_factory=list)


class AchievementState(Protocol):
    """Shape of previously persisted state (records or evaluated achievements)."""

    id: str
    progress: int
    is_unlocked: bool
    unlocked_at: Optional[datetime]


ACHIEVEMENT_DEFINITIONS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition(
        "first_expense", "First Steps", "Log your first expense", "star",
        "milestone", "bronze", "Add 1 expense", "Welcome to Spendly!",
    ),
    AchievementDefinition(
        "expense_streak_7", "Weekly Warrior", "Track expenses for 7 consecutive days",
        "local-fire-department", "consistency", "bronze", "7 day streak", "Discipline builds habits!",
    ),
    AchievementDefinition(
        "expense_streak_30", "Monthly Master", "Track expenses for 30 consecutive days",
        "whatshot", "consistency", "silver", "30 day streak", "You're on fire!",
    ),
    AchievementDefinition(
        "expense_streak_100", "Century Club", "Track expenses for 100 consecutive days",
        "emoji-events", "consistency", "gold", "100 day streak", "True dedication!",
    ),
    AchievementDefinition(
        "first_budget", "Budget Beginner", "Create your first budget", "account-balance-wallet",
        "budgeting", "bronze", "Create 1 budget", "Planning for success!",
    ),
    AchievementDefinition(
        "budget_success_1", "Budget Boss", "Stay within budget for 1 month", "task-alt",
        "budgeting", "silver", "Stay under budget for 1 month", "Financial discipline!",
    ),
    AchievementDefinition(
        "budget_success_3", "Budget Master", "Stay within budget for 3 consecutive months",
        "military-tech", "budgeting", "gold", "Stay under budget for 3 months", "Master of money!",
    ),
    AchievementDefinition(
        "savings_hero", "Savings Hero", "Finish a month using only 80% of your budget", "savings",
        "budgeting", "gold", "Use only 80% of budget in a month", "Frugality champion!",
    ),
    AchievementDefinition(
        "category_conscious", "Category Conscious", "Use 5 different expense categories",
        "category", "smart", "bronze", "Use 5 different categories", "Organized spender!",
    ),
    AchievementDefinition(
        "detail_oriented", "Detail Oriented", "Add notes to 10 expenses", "edit-note",
        "smart", "bronze", "Add notes to 10 expenses", "Every detail matters!",
    ),
    AchievementDefinition(
        "ai_adopter", "AI Adopter", "Let AI categorize 25 expenses", "auto-awesome",
        "smart", "silver", "Use AI categorization 25 times", "Embracing the future!",
    ),
    AchievementDefinition(
        "expense_100", "Century Tracker", "Log 100 total expenses", "count",
        "milestone", "silver", "Log 100 expenses", "Consistent tracking pays off!",
    ),
    AchievementDefinition(
        "expense_500", "Expense Expert", "Log 500 total expenses", "workspace-premium",
        "milestone", "gold", "Log 500 expenses", "You know your money!",
    ),
    AchievementDefinition(
        "big_spender", "Big Spender", "Track ₹10,000 in total expenses", "trending-up",
        "milestone", "silver", "Track ₹10,000 total", "Money moves!",
    ),
    AchievementDefinition(
        "spending_analyzer", "Spending Analyzer", "View analytics features 10 times", "analytics",
        "smart", "bronze", "Use analytics 10 times", "Knowledge is power!",
    ),
)


@dataclass(slots=True)
class _Context:
    expenses: list[CleanExpense]
    raw_expense_count: int
    budgets: list[Budget]
    now: datetime
    streak: int


def _ratio(actual: float | Decimal, target: float | Decimal) -> float:
    if target <= 0:
        return 0.0
    return min(100.0, float(Decimal(str(actual)) * 100 / Decimal(str(target))))


def budget_success_months(
    expenses: Iterable[CleanExpense], budgets: Iterable[Budget], now: datetime
) -> int:
    """Trailing months, current month first, whose spend stayed within budget."""

    budgets = list(budgets)
    if not any(budget.is_active for budget in budgets):
        return 0
    limit = monthly_budget_total(budgets)
    entries = list(expenses)
    months = 0
    for offset in range(BUDGET_SUCCESS_LOOKBACK_MONTHS):
        month = resolve_period("month", add_months(now, -offset))
        spent = total(entry for entry in entries if month.contains(entry.occurred_at))
        if spent > limit:
            break
        months += 1
    return months


def _first_expense(ctx: _Context) -> float:
    return 100.0 if ctx.raw_expense_count > 0 else 0.0


def _first_budget(ctx: _Context) -> float:
    return 100.0 if ctx.budgets else 0.0


def _streak(required_days: int) -> Callable[[_Context], float]:
    def rule(ctx: _Context) -> float:
        return _ratio(ctx.streak, required_days)

    return rule


def _budget_success(required_months: int) -> Callable[[_Context], float]:
    def rule(ctx: _Context) -> float:
        return _ratio(budget_success_months(ctx.expenses, ctx.budgets, ctx.now), required_months)

    return rule


def _savings_hero(ctx: _Context) -> float:
    if not any(budget.is_active for budget in ctx.budgets):
        return 0.0
    limit = monthly_budget_total(ctx.budgets)
    month = resolve_period("month", ctx.now)
    spent = total(entry for entry in ctx.expenses if month.contains(entry.occurred_at))
    usage = spent * 100 / limit if limit > 0 else ZERO
    return 100.0 if usage <= SAVINGS_HERO_RATIO else 0.0


def _category_conscious(ctx: _Context) -> float:
    return _ratio(len({entry.category_id for entry in ctx.expenses}), CATEGORY_TARGET)


def _detail_oriented(ctx: _Context) -> float:
    noted = sum(1 for entry in ctx.expenses if entry.note)
    return _ratio(noted, NOTE_TARGET)


def _volume(threshold: int) -> Callable[[_Context], float]:
    def rule(ctx: _Context) -> float:
        return _ratio(ctx.raw_expense_count, threshold)

    return rule


def _big_spender(ctx: _Context) -> float:
    return _ratio(total(ctx.expenses), BIG_SPENDER_TARGET)


# Achievements missing here (ai_adopter, spending_analyzer) are driven by usage
# telemetry outside this engine and keep their persisted progress.
PROGRESS_RULES: dict[str, Callable[[_Context], float]] = {
    "first_expense": _first_expense,
    "expense_streak_7": _streak(7),
    "expense_streak_30": _streak(30),
    "expense_streak_100": _streak(100),
    "first_budget": _first_budget,
    "budget_success_1": _budget_success(1),
    "budget_success_3": _budget_success(3),
    "savings_hero": _savings_hero,
    "category_conscious": _category_conscious,
    "detail_oriented": _detail_oriented,
    "expense_100": _volume(100),
    "expense_500": _volume(500),
    "big_spender": _big_spender,
}


def _prior_progress(state: Optional[AchievementState]) -> float:
    if state is None:
        return 0.0
    value = to_amount(getattr(state, "progress", 0))
    if value is None:
        return 0.0
    return min(100.0, float(value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def evaluate_achievements(
    definitions: Iterable[AchievementDefinition],
    expenses: Iterable[Expense],
    budgets: Iterable[Budget],
    prior: Iterable[AchievementState],
    *,
    now: datetime | date,
) -> AchievementEvaluation:
    """Recompute progress for every definition and apply the unlock transition.

    An achievement unlocked in ``prior`` stays unlocked with its first
    timestamp whatever the current progress. ``newly_unlocked`` holds only
    the achievements that crossed 100 in this call.
    """

    moment = as_reference(now)
    raw = list(expenses)
    cleaned = clean_expenses(raw)
    ctx = _Context(
        expenses=cleaned,
        raw_expense_count=len(raw),
        budgets=list(budgets),
        now=moment,
        streak=streak_from_days({entry.day for entry in cleaned}, moment.date()),
    )
    saved = {state.id: state for state in prior}

    result = AchievementEvaluation()
    for definition in definitions:
        state = saved.get(definition.id)
        rule = PROGRESS_RULES.get(definition.id)
        progress = rule(ctx) if rule is not None else _prior_progress(state)

        was_unlocked = bool(getattr(state, "is_unlocked", False))
        unlocked_at = getattr(state, "unlocked_at", None)
        is_unlocked = was_unlocked
        if not was_unlocked and progress >= 100:
            is_unlocked = True
            unlocked_at = moment

        achievement = Achievement(
            definition=definition,
            progress=_round_half_up(progress),
            is_unlocked=is_unlocked,
            unlocked_at=unlocked_at,
        )
        result.achievements.append(achievement)
        if is_unlocked and not was_unlocked:
            result.newly_unlocked.append(achievement)

    if result.newly_unlocked:
        logger.info(
            "Achievements unlocked",
            extra={"achievement_ids": [a.id for a in result.newly_unlocked]},
        )
    return result


__all__ = [
    "ACHIEVEMENT_DEFINITIONS",
    "Achievement",
    "AchievementDefinition",
    "AchievementEvaluation",
    "WEEKS_PER_MONTH",
    "budget_success_months",
    "evaluate_achievements",
    "monthly_budget_total",
]
