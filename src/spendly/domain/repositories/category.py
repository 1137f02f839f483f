"""Category repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    def list_all(self) -> list[Category]:
        """List all categories ordered by name."""
        ...
