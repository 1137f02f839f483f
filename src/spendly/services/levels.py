"""Experience points and user level derived from tracking activity."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from ..models.expense import Expense
from .achievements import AchievementState
from .records import as_day, clean_expenses
from .streaks import streak_from_days

XP_PER_EXPENSE = 5
XP_PER_STREAK_DAY = 2
XP_PER_ACHIEVEMENT = 50
XP_PER_CATEGORY = 10

LEVEL_THRESHOLDS = (0, 100, 250, 500, 1000, 2000, 3500, 5500, 8000, 12000, 17000)
LEVEL_TITLES = (
    "Newcomer", "Tracker", "Saver", "Planner", "Analyzer",
    "Expert", "Master", "Legend", "Champion", "Grandmaster",
)
LEVEL_BENEFITS = (
    "Welcome to Spendly!",
    "Basic analytics unlocked",
    "Advanced charts available",
    "Budget optimization tips",
    "AI insights enabled",
    "Premium analytics",
    "Expert recommendations",
    "Master-level features",
    "Legend status perks",
    "Grandmaster privileges",
)


@dataclass(slots=True)
class UserLevel:
    level: int
    title: str
    xp: int
    xp_to_next: int
    total_xp: int
    benefits: list[str] = field(default_factory=list)


def total_xp(
    expenses: Iterable[Expense], achievements: Iterable[AchievementState], today: date | datetime
) -> int:
    """XP from tracking activity.

    Every stored expense earns XP, as it does for the volume achievements;
    streak days and categories come from records that pass coercion.
    """

    raw = list(expenses)
    entries = clean_expenses(raw)
    streak = streak_from_days({entry.day for entry in entries}, as_day(today))
    unlocked = sum(1 for achievement in achievements if achievement.is_unlocked)
    categories = len({entry.category_id for entry in entries})
    return (
        len(raw) * XP_PER_EXPENSE
        + streak * XP_PER_STREAK_DAY
        + unlocked * XP_PER_ACHIEVEMENT
        + categories * XP_PER_CATEGORY
    )


def level_for_xp(xp: int) -> UserLevel:
    """Place an XP total on the level ladder."""

    level = 0
    for index, threshold in enumerate(LEVEL_THRESHOLDS):
        if xp >= threshold:
            level = index
        else:
            break

    floor = LEVEL_THRESHOLDS[level]
    ceiling = LEVEL_THRESHOLDS[level + 1] if level < len(LEVEL_THRESHOLDS) - 1 else xp
    return UserLevel(
        level=level,
        title=LEVEL_TITLES[min(level, len(LEVEL_TITLES) - 1)],
        xp=xp - floor,
        xp_to_next=max(0, ceiling - xp),
        total_xp=xp,
        benefits=[LEVEL_BENEFITS[min(level, len(LEVEL_BENEFITS) - 1)]],
    )


def compute_level(
    expenses: Iterable[Expense], achievements: Iterable[AchievementState], today: date | datetime
) -> UserLevel:
    return level_for_xp(total_xp(expenses, achievements, today))
