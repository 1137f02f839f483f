"""Report assembly over injected record stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Sequence

from ..domain.repositories import (
    AchievementRepository,
    BudgetRepository,
    CategoryRepository,
    ExpenseRepository,
)
from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.expense import Expense
from .achievements import (
    ACHIEVEMENT_DEFINITIONS,
    AchievementDefinition,
    AchievementEvaluation,
    evaluate_achievements,
)
from .budgeting import BudgetAnalysis, BudgetOverview, analyze_budgets, budget_overview
from .levels import UserLevel, compute_level
from .streaks import StreakStats, streak_stats
from .summary import ExpenseSummary, summarize_period
from .velocity import SpendingVelocity, spending_velocity

logger = get_logger(__name__)


@dataclass(slots=True)
class Snapshot:
    """Expenses and budgets read together so one report stays consistent."""

    expenses: list[Expense] = field(default_factory=list)
    budgets: list[Budget] = field(default_factory=list)


@dataclass(slots=True)
class DashboardReport:
    summary: ExpenseSummary
    budgets: list[BudgetAnalysis]
    overview: BudgetOverview
    streak: StreakStats
    level: UserLevel
    velocity: SpendingVelocity


class ProgressService:
    """Feeds store snapshots through the analytics engine.

    Every collaborator is passed in, and every call takes the reference
    instant explicitly.
    """

    def __init__(
        self,
        *,
        expenses: ExpenseRepository,
        budgets: BudgetRepository,
        achievements: AchievementRepository,
        categories: Optional[CategoryRepository] = None,
        definitions: Sequence[AchievementDefinition] = ACHIEVEMENT_DEFINITIONS,
    ):
        self.expenses = expenses
        self.budgets = budgets
        self.achievements = achievements
        self.categories = categories
        self.definitions = tuple(definitions)

    def snapshot(self) -> Snapshot:
        return Snapshot(expenses=list(self.expenses.list_all()), budgets=list(self.budgets.list_all()))

    def refresh_achievements(
        self, now: datetime | date, snapshot: Optional[Snapshot] = None
    ) -> AchievementEvaluation:
        """Re-evaluate achievements and persist state when something unlocked."""

        snapshot = snapshot or self.snapshot()
        evaluation = evaluate_achievements(
            self.definitions,
            snapshot.expenses,
            snapshot.budgets,
            self.achievements.list_all(),
            now=now,
        )
        if evaluation.newly_unlocked:
            self.achievements.save_all(a.to_record() for a in evaluation.achievements)
        return evaluation

    def dashboard(
        self, now: datetime | date, *, period: str = "month", selected_cycle: str = "current"
    ) -> DashboardReport:
        """Summary, budget analyses, streak, level and velocity built from one snapshot."""

        snapshot = self.snapshot()
        categories = self.categories.list_all() if self.categories is not None else []
        evaluation = self.refresh_achievements(now, snapshot)
        analyses = analyze_budgets(
            snapshot.budgets, snapshot.expenses, now, selected_cycle, categories=categories
        )
        report = DashboardReport(
            summary=summarize_period(snapshot.expenses, period, now),
            budgets=analyses,
            overview=budget_overview(analyses),
            streak=streak_stats(snapshot.expenses, now),
            level=compute_level(snapshot.expenses, evaluation.achievements, now),
            velocity=spending_velocity(snapshot.expenses, snapshot.budgets, now),
        )
        logger.debug(
            "Dashboard assembled",
            extra={
                "expenses": len(snapshot.expenses),
                "budgets": len(report.budgets),
                "streak": report.streak.current_streak,
            },
        )
        return report
