"""Expense category definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover
    from .expense import Expense


class Category(SQLModel, table=True):
    """Static lookup value referenced by many expenses."""

    __tablename__: ClassVar[str] = "category"

    id: str = Field(primary_key=True, max_length=32)
    name: str = Field(nullable=False, max_length=64)
    color: str = Field(default="#A29BFE", max_length=7)
    emoji: str = Field(default="", max_length=8)
    icon: str = Field(default="", max_length=32)

    expenses: list["Expense"] = Relationship(
        back_populates="category",
        sa_relationship=relationship("Expense", back_populates="category"),
    )
