"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Callable, Iterable

from sqlmodel import Session, select

from ...models.category import Category


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self) -> list[Category]:
        """List all categories ordered by name."""
        with self.session_factory() as session:
            rows = list(session.exec(select(Category).order_by(Category.name)).all())  # type: ignore
            session.expunge_all()
            return rows

    def ensure(self, categories: Iterable[Category]) -> None:
        """Insert any of ``categories`` not already stored (used for seeding defaults)."""
        with self.session_factory() as session:
            for category in categories:
                if session.get(Category, category.id) is None:
                    session.add(category)
            session.commit()
