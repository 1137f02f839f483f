"""SQLModel table exports."""

from .achievement import AchievementRecord
from .budget import BUDGET_PERIODS, Budget
from .category import Category
from .expense import Expense

__all__ = [
    "AchievementRecord",
    "BUDGET_PERIODS",
    "Budget",
    "Category",
    "Expense",
]
