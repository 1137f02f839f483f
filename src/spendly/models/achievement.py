"""Persisted achievement state."""

from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import NaiveDatetime
from sqlmodel import Field, SQLModel


class AchievementRecord(SQLModel, table=True):
    """Progress and the one-way unlock flag for a single achievement.

    Titles, tiers and rewards come from the static definitions; only the
    evaluated state is stored here.
    """

    __tablename__: ClassVar[str] = "achievement"

    id: str = Field(primary_key=True, max_length=32)
    progress: int = Field(default=0, nullable=False)
    is_unlocked: bool = Field(default=False, nullable=False)
    unlocked_at: Optional[NaiveDatetime] = Field(default=None)
