"""Achievement state repository protocol."""

from __future__ import annotations

from typing import Iterable, Protocol

from ...models.achievement import AchievementRecord


class AchievementRepository(Protocol):
    """Persistence for achievement progress and unlock flags."""

    def list_all(self) -> list[AchievementRecord]:
        """Return the last saved state for every achievement."""
        ...

    def save_all(self, records: Iterable[AchievementRecord]) -> None:
        """Insert or replace the given records."""
        ...
