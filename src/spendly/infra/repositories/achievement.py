"""SQLModel implementation of Achievement state repository."""

from __future__ import annotations

from typing import Callable, Iterable

from sqlmodel import Session, select

from ...logging_config import get_logger
from ...models.achievement import AchievementRecord

logger = get_logger(__name__)


class SQLModelAchievementRepository:
    """SQLModel-based achievement state repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self) -> list[AchievementRecord]:
        """Return the last saved state for every achievement."""
        with self.session_factory() as session:
            rows = list(session.exec(select(AchievementRecord)).all())
            session.expunge_all()
            return rows

    def save_all(self, records: Iterable[AchievementRecord]) -> None:
        """Insert or replace the given records in one transaction."""
        with self.session_factory() as session:
            count = 0
            for record in records:
                session.merge(record)
                count += 1
            session.commit()
        logger.info("Saved achievement state", extra={"count": count})
