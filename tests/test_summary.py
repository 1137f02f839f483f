"""Summary calculator tests."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from spendly.models import Expense
from spendly.services.periods import resolve_period
from spendly.services.summary import daily_totals, summarize, summarize_period


def test_single_category_month_summary(expense_factory):
    """Two food expenses on 1 March summarize to one 100% entry."""
    expenses = [
        expense_factory(amount=100, date=datetime(2024, 3, 1, 9, 0)),
        expense_factory(amount=50, date=datetime(2024, 3, 1, 20, 0)),
    ]

    summary = summarize(expenses, resolve_period("month", datetime(2024, 3, 16)))

    assert summary.total_amount == Decimal("150")
    assert summary.expense_count == 2
    assert len(summary.category_breakdown) == 1
    entry = summary.category_breakdown[0]
    assert entry.category.id == "food"
    assert entry.total_amount == Decimal("150")
    assert entry.percentage == 100.0
    assert entry.expense_count == 2


def test_empty_input_is_zero_summary():
    summary = summarize([], resolve_period("week", datetime(2024, 3, 16)))

    assert summary.total_amount == 0
    assert summary.category_breakdown == []
    assert summary.expense_count == 0


def test_interval_is_inclusive_at_both_ends(expense_factory):
    interval = resolve_period("month", datetime(2024, 3, 16))
    expenses = [
        expense_factory(amount=1, date=interval.start),
        expense_factory(amount=2, date=interval.end),
        expense_factory(amount=4, date=datetime(2024, 2, 29, 23, 59, 59)),
        expense_factory(amount=8, date=datetime(2024, 4, 1, 0, 0)),
    ]

    assert summarize(expenses, interval).total_amount == Decimal("3")


def test_breakdown_sorted_descending_with_id_tiebreak(expense_factory, now):
    expenses = [
        expense_factory(amount=20, category_id="transport"),
        expense_factory(amount=50, category_id="shopping"),
        expense_factory(amount=20, category_id="books"),
        expense_factory(amount=10, category_id="food"),
    ]

    summary = summarize(expenses, resolve_period("today", now))

    assert [item.category.id for item in summary.category_breakdown] == [
        "shopping",
        "books",
        "transport",
        "food",
    ]


def test_percentages_close_to_one_hundred(expense_factory, now):
    expenses = [
        expense_factory(amount=10, category_id="food"),
        expense_factory(amount=10, category_id="transport"),
        expense_factory(amount=10, category_id="books"),
    ]

    summary = summarize(expenses, resolve_period("today", now))

    assert sum(item.percentage for item in summary.category_breakdown) == pytest.approx(100.0)
    assert summary.category_breakdown[0].percentage == pytest.approx(33.3333, rel=1e-4)


def test_fractional_cents_are_not_lost(expense_factory, now):
    expenses = [expense_factory(amount=0.1, date=now) for _ in range(3)]

    summary = summarize(expenses, resolve_period("today", now))

    assert summary.total_amount == Decimal("0.3")


def test_zero_amount_expenses_report_zero_percentage(expense_factory, now):
    summary = summarize([expense_factory(amount=0)], resolve_period("today", now))

    assert summary.total_amount == 0
    assert summary.category_breakdown[0].percentage == 0.0


def test_malformed_records_are_skipped(expense_factory, now, caplog):
    good = expense_factory(amount=25)
    nan_amount = expense_factory(amount=float("nan"))
    bad_date = Expense(amount=5, description="Broken", category_id="food", date=None)
    garbled_date = Expense(amount=5, description="Broken", category_id="food", date="not-a-date")

    with caplog.at_level(logging.WARNING, logger="spendly"):
        summary = summarize([good, nan_amount, bad_date, garbled_date], resolve_period("today", now))

    assert summary.total_amount == Decimal("25")
    assert summary.expense_count == 1
    assert sum("Skipping expense" in record.getMessage() for record in caplog.records) == 3


def test_iso_string_dates_are_accepted(categories, now):
    expense = Expense(amount=12.5, category_id="food", category=categories["food"], date="2024-03-16T08:15:00")

    summary = summarize([expense], resolve_period("today", now))

    assert summary.total_amount == Decimal("12.5")


def test_expense_without_category_is_grouped_as_uncategorized(now):
    expense = Expense(amount=9, description="Mystery", date=now)

    summary = summarize([expense], resolve_period("today", now))

    assert summary.category_breakdown[0].category.id == "uncategorized"


def test_summarize_period_labels_and_average(expense_factory, now):
    expenses = [expense_factory(amount=70, date=datetime(2024, 3, 12))]

    summary = summarize_period(expenses, "week", now)

    assert summary.period == "weekly"
    assert summary.start == datetime(2024, 3, 11)
    assert summary.average_per_day == Decimal("10")


def test_daily_totals_group_by_day(expense_factory, now):
    expenses = [
        expense_factory(amount=5, date=datetime(2024, 3, 14, 8)),
        expense_factory(amount=7, date=datetime(2024, 3, 14, 19)),
        expense_factory(amount=3, date=datetime(2024, 3, 12, 12)),
    ]

    totals = daily_totals(expenses, resolve_period("week", now))

    assert totals == [(date(2024, 3, 12), Decimal("3")), (date(2024, 3, 14), Decimal("12"))]


def test_summarize_is_idempotent(expense_factory, now):
    expenses = [expense_factory(amount=10, category_id="food"), expense_factory(amount=5, category_id="books")]
    interval = resolve_period("month", now)

    first = summarize(expenses, interval)
    second = summarize(expenses, interval)

    assert first.total_amount == second.total_amount
    assert [(c.category.id, c.total_amount, c.percentage) for c in first.category_breakdown] == [
        (c.category.id, c.total_amount, c.percentage) for c in second.category_breakdown
    ]
