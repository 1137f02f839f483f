"""Tests for period and billing-cycle resolution."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from spendly.services.errors import UnknownPeriodError
from spendly.services.periods import (
    DateRange,
    add_months,
    budget_cycle,
    cycle_index,
    resolve_period,
)


class TestResolvePeriod:
    """Symbolic periods around a reference instant."""

    def test_today_covers_whole_local_day(self):
        rng = resolve_period("today", datetime(2024, 3, 16, 15, 30))

        assert rng.start == datetime(2024, 3, 16, 0, 0)
        assert rng.end == datetime.combine(date(2024, 3, 16), time.max)
        assert rng.days == 1

    def test_week_starts_on_monday(self):
        # 16 March 2024 is a Saturday.
        rng = resolve_period("week", datetime(2024, 3, 16, 9, 0))

        assert rng.start == datetime(2024, 3, 11)
        assert rng.start.weekday() == 0
        assert rng.end.date() == date(2024, 3, 17)
        assert rng.days == 7

    def test_week_on_a_monday_starts_that_day(self):
        rng = resolve_period("week", datetime(2024, 3, 11, 0, 0))
        assert rng.start == datetime(2024, 3, 11)

    def test_week_on_a_sunday_belongs_to_previous_monday(self):
        rng = resolve_period("week", datetime(2024, 3, 17, 23, 0))
        assert rng.start == datetime(2024, 3, 11)

    @pytest.mark.parametrize(
        "reference, last_day",
        [
            (datetime(2024, 2, 10), 29),
            (datetime(2023, 2, 10), 28),
            (datetime(2024, 4, 30), 30),
            (datetime(2024, 12, 31, 23, 59), 31),
        ],
    )
    def test_month_respects_month_length(self, reference, last_day):
        rng = resolve_period("month", reference)

        assert rng.start == datetime(reference.year, reference.month, 1)
        assert rng.end.date() == date(reference.year, reference.month, last_day)
        assert rng.days == last_day

    def test_year(self):
        rng = resolve_period("year", date(2024, 6, 1))
        assert rng.start == datetime(2024, 1, 1)
        assert rng.end.date() == date(2024, 12, 31)

    def test_range_is_inclusive(self):
        rng = resolve_period("today", datetime(2024, 3, 16))
        assert rng.contains(rng.start)
        assert rng.contains(rng.end)
        assert not rng.contains(rng.end + timedelta(microseconds=1))

    def test_accepts_plain_date(self):
        assert resolve_period("today", date(2024, 3, 16)).start == datetime(2024, 3, 16)

    def test_aware_reference_is_converted_to_local_time(self):
        aware = datetime(2024, 3, 16, 12, 0, tzinfo=timezone.utc)
        local = aware.astimezone().replace(tzinfo=None)
        assert resolve_period("today", aware).start.date() == local.date()

    def test_unknown_period_raises(self):
        with pytest.raises(UnknownPeriodError) as excinfo:
            resolve_period("fortnight", datetime(2024, 3, 16))
        assert isinstance(excinfo.value, ValueError)
        assert "fortnight" in str(excinfo.value)


class TestAddMonths:
    def test_clamps_to_shorter_month(self):
        assert add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)
        assert add_months(datetime(2023, 1, 31), 1) == datetime(2023, 2, 28)

    def test_crosses_year_boundaries(self):
        assert add_months(datetime(2024, 11, 15), 3) == datetime(2025, 2, 15)
        assert add_months(datetime(2024, 1, 15), -2) == datetime(2023, 11, 15)


class TestBudgetCycle:
    """Billing cycles anchored on a budget's literal start date."""

    def test_monthly_first_cycle(self):
        cycle = budget_cycle("monthly", datetime(2024, 3, 1), datetime(2024, 3, 16))

        assert cycle.start == datetime(2024, 3, 1)
        assert cycle.end.date() == date(2024, 3, 31)
        assert cycle.days == 31

    def test_weekly_cycle_is_seven_days(self):
        cycle = budget_cycle("weekly", datetime(2024, 3, 1), datetime(2024, 3, 3))

        assert cycle.start == datetime(2024, 3, 1)
        assert cycle.end.date() == date(2024, 3, 7)
        assert cycle.days == 7

    def test_mid_cycle_start_is_not_calendar_aligned(self):
        # Budget created on a Wednesday the 13th keeps that boundary.
        cycle = budget_cycle("monthly", datetime(2024, 3, 13, 18, 45), datetime(2024, 4, 20))

        assert cycle.start == datetime(2024, 4, 13)
        assert cycle.end.date() == date(2024, 5, 12)

    def test_advances_to_cycle_containing_reference(self):
        cycle = budget_cycle("weekly", datetime(2024, 1, 1), datetime(2024, 3, 16, 12))

        assert cycle.contains(datetime(2024, 3, 16, 12))
        assert (cycle.start - datetime(2024, 1, 1)).days % 7 == 0

    def test_reference_on_cycle_boundary_starts_new_cycle(self):
        cycle = budget_cycle("weekly", datetime(2024, 3, 1), datetime(2024, 3, 8))
        assert cycle.start == datetime(2024, 3, 8)

    def test_monthly_anchor_on_31st(self):
        anchor = datetime(2024, 1, 31)
        cycle = budget_cycle("monthly", anchor, datetime(2024, 3, 1))

        assert cycle.start == datetime(2024, 2, 29)
        assert cycle.end.date() == date(2024, 3, 30)
        assert budget_cycle("monthly", anchor, datetime(2024, 3, 31)).start == datetime(2024, 3, 31)

    def test_previous_cycle_shifts_one_period_back(self):
        current = budget_cycle("monthly", datetime(2024, 1, 1), datetime(2024, 3, 16))
        previous = budget_cycle("monthly", datetime(2024, 1, 1), datetime(2024, 3, 16), "previous")

        assert current.start == datetime(2024, 3, 1)
        assert previous.start == datetime(2024, 2, 1)
        assert previous.end.date() == date(2024, 2, 29)

    def test_future_start_uses_first_cycle(self):
        assert cycle_index("weekly", datetime(2024, 4, 1), datetime(2024, 3, 16)) == 0
        cycle = budget_cycle("weekly", datetime(2024, 4, 1), datetime(2024, 3, 16))
        assert cycle.start == datetime(2024, 4, 1)

    def test_unknown_cadence_raises(self):
        with pytest.raises(UnknownPeriodError):
            budget_cycle("daily", datetime(2024, 3, 1), datetime(2024, 3, 16))

    def test_unknown_cycle_selector_raises(self):
        with pytest.raises(UnknownPeriodError):
            budget_cycle("monthly", datetime(2024, 3, 1), datetime(2024, 3, 16), "next")


def test_date_range_days_counts_calendar_days():
    rng = DateRange(datetime(2024, 3, 1, 0, 0), datetime(2024, 3, 31, 23, 59))
    assert rng.days == 31
