"""Spendly analytics and progress engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .services.achievements import ACHIEVEMENT_DEFINITIONS, evaluate_achievements
from .services.budgeting import analyze_budget
from .services.periods import resolve_period
from .services.streaks import current_streak
from .services.summary import summarize

__all__ = [
    "ACHIEVEMENT_DEFINITIONS",
    "BaseConfig",
    "DevConfig",
    "TestConfig",
    "analyze_budget",
    "current_streak",
    "evaluate_achievements",
    "resolve_period",
    "summarize",
]
