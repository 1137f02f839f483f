"""Repository protocol definitions for domain layer."""

from .achievement import AchievementRepository
from .budget import BudgetRepository
from .category import CategoryRepository
from .expense import ExpenseRepository

__all__ = [
    "AchievementRepository",
    "BudgetRepository",
    "CategoryRepository",
    "ExpenseRepository",
]
