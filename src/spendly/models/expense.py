"""SQLModel definition for logged expenses."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, ClassVar, Optional
from uuid import uuid4

from pydantic import NaiveDatetime
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .category import Category


def _new_id() -> str:
    return uuid4().hex


class Expense(SQLModel, table=True):
    """A single expense, hand-entered or categorized by the assistant."""

    __tablename__: ClassVar[str] = "expense"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)
    amount: float = Field(nullable=False, description="Positive amount spent")
    description: str = Field(default="", max_length=100)
    category_id: Optional[str] = Field(default=None, foreign_key="category.id", index=True)
    # Datetime columns hold naive local time.
    date: NaiveDatetime = Field(nullable=False, index=True)
    note: Optional[str] = Field(default=None, max_length=255)
    created_at: NaiveDatetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: NaiveDatetime = Field(default_factory=datetime.now, nullable=False)

    # Resolved when the expense is created; analysis never re-resolves by id.
    category: "Category | None" = Relationship(
        back_populates="expenses",
        sa_relationship=relationship("Category", back_populates="expenses"),
    )
