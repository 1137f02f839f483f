"""Expense repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.expense import Expense


class ExpenseRepository(Protocol):
    """Read side of the expense store used by the analytics engine."""

    def list_all(self) -> list[Expense]:
        """List every expense with its category resolved."""
        ...
