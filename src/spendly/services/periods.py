"""Resolve symbolic periods and budget billing cycles into date ranges."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from ..models.budget import BUDGET_PERIODS
from .errors import UnknownPeriodError
from .records import as_reference

PERIODS = ("today", "week", "month", "year")
CYCLES = ("current", "previous")

# Summary label reported for each selectable period.
PERIOD_LABELS = {"today": "daily", "week": "weekly", "month": "monthly", "year": "yearly"}


@dataclass(slots=True, frozen=True)
class DateRange:
    """Inclusive ``[start, end]`` interval of local naive datetimes."""

    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @property
    def days(self) -> int:
        """Number of calendar days touched by the range."""
        return (self.end.date() - self.start.date()).days + 1


def start_of_day(moment: datetime | date) -> datetime:
    day = moment.date() if isinstance(moment, datetime) else moment
    return datetime.combine(day, time.min)


def end_of_day(moment: datetime | date) -> datetime:
    day = moment.date() if isinstance(moment, datetime) else moment
    return datetime.combine(day, time.max)


def add_months(moment: datetime, months: int) -> datetime:
    """Shift by calendar months, clamping the day to the target month's length."""

    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def resolve_period(period: str, reference: datetime | date) -> DateRange:
    """Convert ``today``/``week``/``month``/``year`` into a concrete range.

    Weeks start on Monday.
    """

    moment = as_reference(reference)
    if period == "today":
        return DateRange(start_of_day(moment), end_of_day(moment))
    if period == "week":
        monday = moment.date() - timedelta(days=moment.weekday())
        return DateRange(start_of_day(monday), end_of_day(monday + timedelta(days=6)))
    if period == "month":
        last = monthrange(moment.year, moment.month)[1]
        return DateRange(
            start_of_day(moment.date().replace(day=1)),
            end_of_day(moment.date().replace(day=last)),
        )
    if period == "year":
        return DateRange(
            start_of_day(date(moment.year, 1, 1)),
            end_of_day(date(moment.year, 12, 31)),
        )
    raise UnknownPeriodError("period", period, PERIODS)


def cycle_range(cadence: str, anchor: datetime | date, index: int) -> DateRange:
    """Return the ``index``-th billing cycle counted from ``anchor``.

    Weekly cycles are ``[start, start + 6 days]``; monthly cycles run to the
    day before the next monthly anniversary. Negative indexes walk backwards.
    """

    first = start_of_day(as_reference(anchor))
    if cadence == "weekly":
        start = first + timedelta(days=7 * index)
        return DateRange(start, end_of_day(start + timedelta(days=6)))
    if cadence == "monthly":
        start = add_months(first, index)
        following = add_months(first, index + 1)
        return DateRange(start, end_of_day(following - timedelta(days=1)))
    raise UnknownPeriodError("budget period", cadence, BUDGET_PERIODS)


def cycle_index(cadence: str, anchor: datetime | date, reference: datetime | date) -> int:
    """Index of the cycle containing ``reference``; 0 when it precedes ``anchor``."""

    first = start_of_day(as_reference(anchor))
    today = start_of_day(as_reference(reference))
    if today <= first:
        return 0
    if cadence == "weekly":
        return (today - first).days // 7
    if cadence == "monthly":
        index = (today.year - first.year) * 12 + (today.month - first.month)
        if add_months(first, index) > today:
            index -= 1
        return max(index, 0)
    raise UnknownPeriodError("budget period", cadence, BUDGET_PERIODS)


def budget_cycle(
    cadence: str,
    anchor: datetime | date,
    reference: datetime | date,
    selected_cycle: str = "current",
) -> DateRange:
    """Resolve the current (or previous) billing cycle for a budget.

    A budget created mid-month keeps its literal start day as the cycle
    boundary rather than snapping to calendar months or weeks.
    """

    if selected_cycle not in CYCLES:
        raise UnknownPeriodError("cycle", selected_cycle, CYCLES)
    index = cycle_index(cadence, anchor, reference)
    if selected_cycle == "previous":
        index -= 1
    return cycle_range(cadence, anchor, index)
