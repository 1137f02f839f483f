"""Concrete repository implementations using SQLModel."""

from .achievement import SQLModelAchievementRepository
from .budget import SQLModelBudgetRepository
from .category import SQLModelCategoryRepository
from .expense import SQLModelExpenseRepository

__all__ = [
    "SQLModelAchievementRepository",
    "SQLModelBudgetRepository",
    "SQLModelCategoryRepository",
    "SQLModelExpenseRepository",
]
