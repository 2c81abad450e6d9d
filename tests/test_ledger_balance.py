"""Tests for chronological ordering, running balances and totals."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from party_ledger.domain import LedgerEntry, TransactionType
from party_ledger.ledger import (
    ledger_compute_running_balances,
    ledger_compute_totals,
    ledger_filter_date_range,
    ledger_sort_chronological,
)


def _entry(entry_id: str, entry_date: date, debit: str = "0", credit: str = "0") -> LedgerEntry:
    return LedgerEntry(
        id=entry_id,
        date=entry_date,
        description=entry_id,
        reference_number=None,
        transaction_type=TransactionType.INVOICE if Decimal(debit) else TransactionType.PAYMENT,
        debit_amount=Decimal(debit),
        credit_amount=Decimal(credit),
        source_document=entry_id.split(":", maxsplit=1)[0],
        document_id=entry_id.split(":")[1],
    )


def test_ledger_sort_chronological_breaks_same_day_ties_by_id() -> None:
    """Order same-day entries by id so primary lines precede their sub-lines."""

    entries = [
        _entry("sales_order:so-1:discount", date(2024, 1, 1), credit="300"),
        _entry("payment:p-1", date(2024, 1, 15), credit="4000"),
        _entry("sales_order:so-1", date(2024, 1, 1), debit="5000"),
        _entry("invoice:inv-1", date(2024, 1, 1), debit="10"),
    ]

    ordered = ledger_sort_chronological(entries)

    assert [entry.id for entry in ordered] == [
        "invoice:inv-1",
        "sales_order:so-1",
        "sales_order:so-1:discount",
        "payment:p-1",
    ]


def test_ledger_compute_running_balances_ascending_walk() -> None:
    """Assign cumulative debit-minus-credit balances oldest first.

    Raises:
        AssertionError: Raised when a running balance deviates.
    """

    entries = [
        _entry("payment:p-1", date(2024, 1, 15), credit="4000"),
        _entry("sales_order:so-1", date(2024, 1, 1), debit="5000"),
        _entry("sales_order:so-1:discount", date(2024, 1, 1), credit="300"),
    ]

    balanced = ledger_compute_running_balances(entries, display_order="asc")

    assert [entry.balance for entry in balanced] == [Decimal("5000"), Decimal("4700"), Decimal("700")]
    assert all(entry.balance is None for entry in entries)


def test_ledger_compute_running_balances_desc_display_keeps_chronological_balances() -> None:
    """Reverse display order without recomputing balances."""

    entries = [
        _entry("sales_order:so-1", date(2024, 1, 1), debit="5000"),
        _entry("sales_order:so-1:discount", date(2024, 1, 1), credit="300"),
        _entry("payment:p-1", date(2024, 1, 15), credit="4000"),
    ]

    ascending = ledger_compute_running_balances(entries, display_order="asc")
    descending = ledger_compute_running_balances(entries, display_order="desc")

    assert descending == list(reversed(ascending))
    assert descending[0].id == "payment:p-1"
    assert descending[0].balance == Decimal("700")


def test_ledger_running_balance_satisfies_previous_plus_debit_minus_credit() -> None:
    entries = [
        _entry(f"invoice:i-{index:02d}", date(2024, 3, (index % 28) + 1), debit=str(index * 3))
        for index in range(1, 20)
    ] + [_entry(f"payment:p-{index:02d}", date(2024, 3, index + 1), credit=str(index * 5)) for index in range(1, 10)]

    balanced = ledger_compute_running_balances(entries, display_order="asc")

    previous_balance = Decimal("0")
    for entry in balanced:
        assert entry.balance == previous_balance + entry.debit_amount - entry.credit_amount
        previous_balance = entry.balance

    totals = ledger_compute_totals(balanced)
    assert totals.closing_balance == balanced[-1].balance
    assert totals.closing_balance == totals.total_debit - totals.total_credit


def test_ledger_compute_running_balances_handles_empty_input() -> None:
    assert ledger_compute_running_balances([]) == []
    totals = ledger_compute_totals([])
    assert totals.total_debit == Decimal("0.00")
    assert totals.closing_balance == Decimal("0.00")


def test_ledger_compute_running_balances_rejects_unknown_display_order() -> None:
    with pytest.raises(ValueError):
        ledger_compute_running_balances([], display_order="newest")


def test_ledger_filter_date_range_keeps_inclusive_boundaries() -> None:
    """Keep entries dated exactly on either bound and drop the rest."""

    entries = [
        _entry("invoice:before", date(2023, 12, 31), debit="1"),
        _entry("invoice:first", date(2024, 1, 1), debit="1"),
        _entry("invoice:last", date(2024, 1, 31), debit="1"),
        _entry("invoice:after", date(2024, 2, 1), debit="1"),
    ]

    kept = ledger_filter_date_range(entries, date(2024, 1, 1), date(2024, 1, 31))

    assert [entry.id for entry in kept] == ["invoice:first", "invoice:last"]
    assert ledger_filter_date_range(entries, None, None) == entries
    assert [entry.id for entry in ledger_filter_date_range(entries, date(2024, 2, 1), None)] == ["invoice:after"]
