"""Record coercion tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from spendly.models import Category, Expense
from spendly.services.records import (
    CleanExpense,
    as_reference,
    clean_expenses,
    to_amount,
    to_local_datetime,
    to_note,
    total,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (12.5, Decimal("12.5")),
        (0, Decimal("0")),
        ("19.99", Decimal("19.99")),
        (Decimal("3.10"), Decimal("3.10")),
        (None, None),
        (True, None),
        (-1, None),
        (float("nan"), None),
        (float("inf"), None),
        ("ten", None),
    ],
)
def test_to_amount(value, expected):
    assert to_amount(value) == expected


def test_to_local_datetime_variants():
    assert to_local_datetime(date(2024, 3, 16)) == datetime(2024, 3, 16)
    assert to_local_datetime("2024-03-16T08:15:00") == datetime(2024, 3, 16, 8, 15)
    assert to_local_datetime("2024-03-16") == datetime(2024, 3, 16)
    assert to_local_datetime("yesterday") is None
    assert to_local_datetime(1710576000) is None


def test_utc_strings_become_local_time():
    parsed = to_local_datetime("2024-03-16T08:15:00Z")
    expected = datetime(2024, 3, 16, 8, 15, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)

    assert parsed == expected
    assert parsed.tzinfo is None


def test_aware_datetime_is_converted():
    aware = datetime(2024, 3, 16, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert to_local_datetime(aware) == aware.astimezone().replace(tzinfo=None)


def test_as_reference_rejects_garbage():
    with pytest.raises(TypeError):
        as_reference(None)
    with pytest.raises(TypeError):
        as_reference("soon")


def test_clean_expenses_resolves_categories(categories):
    with_relationship = Expense(amount=5, category_id="food", category=categories["food"], date=datetime(2024, 3, 1))
    id_only = Expense(amount=5, category_id="books", date=datetime(2024, 3, 1))
    orphan = Expense(amount=5, date=datetime(2024, 3, 1))

    cleaned = clean_expenses([with_relationship, id_only, orphan])

    assert cleaned[0].category is categories["food"]
    assert cleaned[1].category_id == "books"
    assert isinstance(cleaned[1].category, Category)
    assert cleaned[2].category_id == "uncategorized"
    assert cleaned[0].day == date(2024, 3, 1)


def test_total_keeps_decimal_precision(expense_factory):
    cleaned = clean_expenses([expense_factory(amount=0.1), expense_factory(amount=0.2)])

    assert total(cleaned) == Decimal("0.3")
    assert total([]) == Decimal("0")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("  Team lunch ", "Team lunch"),
        ("", ""),
        (None, ""),
        (123, ""),
        (["receipt"], ""),
    ],
)
def test_to_note(value, expected):
    assert to_note(value) == expected


def test_clean_expenses_carries_text_notes_only(expense_factory):
    cleaned = clean_expenses([expense_factory(note="Cab home"), expense_factory(note=123), expense_factory()])

    assert [entry.note for entry in cleaned] == ["Cab home", "", ""]
    assert isinstance(cleaned[0], CleanExpense)
