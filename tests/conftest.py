"""Pytest configuration and shared fixtures for Spendly tests.

This module provides an in-memory store, record factories, and helper
utilities for testing the analytics engine and repositories without touching
a real database file.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import pytest

from spendly.config import TestConfig
from spendly.constants.categories import DEFAULT_CATEGORIES
from spendly.infra.database import bootstrap_database
from spendly.models import Budget, Category, Expense

# Fixed reference instant: Saturday 16 March 2024, noon.
NOW = datetime(2024, 3, 16, 12, 0)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def database(tmp_path, monkeypatch):
    """Create an isolated in-memory SQLite database for each test.

    Yields:
        tuple: SQLModel engine with all tables created and its session factory
    """
    monkeypatch.setenv("SPENDLY_DATA_DIR", str(tmp_path))
    engine, session_factory = bootstrap_database(TestConfig())
    yield engine, session_factory
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(database):
    """Session factory matching the Callable[[], Session] repositories expect."""
    return database[1]


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def categories() -> dict[str, Category]:
    """Default categories keyed by id."""
    return {entry["id"]: Category(**entry) for entry in DEFAULT_CATEGORIES}


@pytest.fixture
def expense_factory(categories):
    """Factory for in-memory expenses with the category already resolved.

    Returns:
        Callable: Function that builds Expense instances
    """

    def _create_expense(
        amount: float = 10.0,
        date: Optional[datetime] = None,
        category_id: str = "food",
        description: str = "Test expense",
        note: Optional[str] = None,
    ) -> Expense:
        """Create a test expense with sensible defaults.

        Args:
            amount: Positive amount spent
            date: When it was spent (defaults to the fixed reference instant)
            category_id: One of the default category ids
            description: Short description
            note: Optional free-text note
        """
        when = date or NOW
        return Expense(
            amount=amount,
            description=description,
            category_id=category_id,
            category=categories[category_id],
            date=when,
            note=note,
            created_at=when,
            updated_at=when,
        )

    return _create_expense


@pytest.fixture
def daily_expenses(expense_factory):
    """Build one expense per day for ``days`` consecutive days ending at ``end``."""

    def _build(days: int, end: datetime = NOW, amount: float = 10.0) -> list[Expense]:
        return [expense_factory(amount=amount, date=end - timedelta(days=offset)) for offset in range(days)]

    return _build


@pytest.fixture
def budget_factory():
    """Factory for in-memory budgets.

    Returns:
        Callable: Function that builds Budget instances
    """

    def _create_budget(
        amount: float = 3000.0,
        period: str = "monthly",
        start_date: Optional[datetime] = None,
        category_id: Optional[str] = None,
        is_active: bool = True,
    ) -> Budget:
        return Budget(
            amount=amount,
            period=period,
            start_date=start_date or datetime(2024, 3, 1),
            category_id=category_id,
            is_active=is_active,
        )

    return _create_budget

