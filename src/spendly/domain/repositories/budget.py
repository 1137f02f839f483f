"""Budget repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.budget import Budget


class BudgetRepository(Protocol):
    """Repository for budget records."""

    def list_all(self) -> list[Budget]:
        """List all budgets, active or not."""
        ...

    def list_active(self) -> list[Budget]:
        """List only active budgets."""
        ...
