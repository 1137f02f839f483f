"""SQLModel implementation of Budget repository."""

from __future__ import annotations

from typing import Callable

from sqlmodel import Session, select

from ...models.budget import Budget


class SQLModelBudgetRepository:
    """SQLModel-based budget repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self) -> list[Budget]:
        """List all budgets, oldest first."""
        with self.session_factory() as session:
            rows = list(session.exec(select(Budget).order_by(Budget.start_date)).all())  # type: ignore
            session.expunge_all()
            return rows

    def list_active(self) -> list[Budget]:
        """List only active budgets."""
        with self.session_factory() as session:
            statement = (
                select(Budget)
                .where(Budget.is_active == True)  # noqa: E712
                .order_by(Budget.start_date)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, budget: Budget) -> Budget:
        """Create a new budget."""
        with self.session_factory() as session:
            session.add(budget)
            session.commit()
            session.refresh(budget)
            session.expunge(budget)
            return budget
