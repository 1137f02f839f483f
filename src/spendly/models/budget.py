"""Budget table."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional
from uuid import uuid4

from pydantic import NaiveDatetime
from sqlmodel import Field, SQLModel

BUDGET_PERIODS = ("weekly", "monthly")


def _new_id() -> str:
    return uuid4().hex


class Budget(SQLModel, table=True):
    """A recurring spending limit, per category or across all spend.

    The current billing cycle is not stored; it is derived from
    ``start_date`` every time the budget is analyzed.
    """

    __tablename__: ClassVar[str] = "budget"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)
    category_id: Optional[str] = Field(default=None, index=True, max_length=32)
    amount: float = Field(nullable=False)
    period: str = Field(default="monthly", max_length=16)
    start_date: NaiveDatetime = Field(nullable=False)
    is_active: bool = Field(default=True, nullable=False)
    created_at: NaiveDatetime = Field(default_factory=datetime.now, nullable=False)
