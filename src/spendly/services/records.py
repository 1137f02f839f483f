"""Record coercion shared by the analytics services.

Expenses arrive from the store already deserialized, but historical data can
still carry a non-finite amount or a date that does not parse. Those records
are logged and skipped so one bad row never blanks a whole report.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from ..logging_config import get_logger
from ..models.category import Category
from ..models.expense import Expense

logger = get_logger(__name__)

UNCATEGORIZED_ID = "uncategorized"

ZERO = Decimal("0")


def uncategorized() -> Category:
    """Placeholder category for expenses stored without one."""
    return Category(id=UNCATEGORIZED_ID, name="Uncategorized", color="#A0AEC0", emoji="❔", icon="help")


def to_amount(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a finite, non-negative Decimal, or None when unusable."""

    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def to_local_datetime(value: Any) -> Optional[datetime]:
    """Normalize datetimes, dates and ISO strings to naive local time.

    Aware datetimes are converted to the local zone before the tzinfo is
    dropped so every calendar-day truncation uses the same clock.
    """

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return None


def as_reference(moment: datetime | date) -> datetime:
    """Coerce a caller-supplied reference instant; raise TypeError when invalid."""

    resolved = to_local_datetime(moment)
    if resolved is None:
        raise TypeError(f"Reference instant must be a date or datetime, got {moment!r}")
    return resolved


def as_day(moment: datetime | date) -> date:
    """Return the calendar day of a reference instant."""

    return as_reference(moment).date()


@dataclass(slots=True, frozen=True)
class CleanExpense:
    """An expense whose amount and date passed coercion."""

    expense: Expense
    amount: Decimal
    occurred_at: datetime
    category: Category
    note: str = ""

    @property
    def category_id(self) -> str:
        return self.category.id

    @property
    def day(self) -> date:
        return self.occurred_at.date()


def to_note(value: Any) -> str:
    """Return a stored note as text; anything that is not a string counts as no note."""

    return value.strip() if isinstance(value, str) else ""


def _resolve_category(expense: Expense) -> Category:
    category = getattr(expense, "category", None)
    if category is not None and getattr(category, "id", None):
        return category
    category_id = getattr(expense, "category_id", None)
    if category_id:
        return Category(id=category_id, name=category_id)
    return uncategorized()


def clean_expenses(expenses: Iterable[Expense]) -> list[CleanExpense]:
    """Coerce expenses for analysis, dropping malformed records with a warning."""

    cleaned: list[CleanExpense] = []
    for expense in expenses:
        record_id = getattr(expense, "id", None)
        amount = to_amount(getattr(expense, "amount", None))
        if amount is None:
            logger.warning(
                "Skipping expense with unusable amount",
                extra={"expense_id": record_id, "amount": getattr(expense, "amount", None)},
            )
            continue
        occurred_at = to_local_datetime(getattr(expense, "date", None))
        if occurred_at is None:
            logger.warning(
                "Skipping expense with unparseable date",
                extra={"expense_id": record_id, "date": getattr(expense, "date", None)},
            )
            continue
        cleaned.append(
            CleanExpense(
                expense,
                amount,
                occurred_at,
                _resolve_category(expense),
                to_note(getattr(expense, "note", None)),
            )
        )
    return cleaned


def total(entries: Iterable[CleanExpense]) -> Decimal:
    """Sum coerced amounts without float rounding."""

    return sum((entry.amount for entry in entries), ZERO)
