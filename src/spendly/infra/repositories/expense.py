"""SQLModel implementation of Expense repository."""

from __future__ import annotations

from typing import Callable

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...models.expense import Expense


class SQLModelExpenseRepository:
    """SQLModel-based expense repository implementation.

    Categories are eager-loaded so expenses stay usable once detached.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self) -> list[Expense]:
        """List every expense, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Expense)
                .options(selectinload(Expense.category))  # type: ignore[arg-type]
                .order_by(Expense.date.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, expense: Expense) -> Expense:
        """Create a new expense."""
        with self.session_factory() as session:
            session.add(expense)
            session.commit()
            session.refresh(expense)
            session.expunge(expense)
            return expense
