"""Deterministic ordering and running-balance computation for ledger entries."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable

from party_ledger.domain import LedgerEntry, StatementTotals

_ZERO = Decimal("0.00")


def ledger_sort_chronological(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Sort entries by `(date ascending, id ascending)`.

    Args:
        entries: Entries in any order.

    Returns:
        list[LedgerEntry]: Totally ordered entries.
    """

    return sorted(entries, key=lambda entry: (entry.date, entry.id))


def ledger_filter_date_range(
    entries: Iterable[LedgerEntry],
    date_from: date | None,
    date_to: date | None,
) -> list[LedgerEntry]:
    """Keep entries dated inside the inclusive `[date_from, date_to]` range.

    Args:
        entries: Entries in any order.
        date_from: Optional inclusive lower bound.
        date_to: Optional inclusive upper bound.

    Returns:
        list[LedgerEntry]: Entries inside the range, input order preserved.
    """

    return [
        entry
        for entry in entries
        if (date_from is None or entry.date >= date_from) and (date_to is None or entry.date <= date_to)
    ]


def ledger_compute_running_balances(
    entries: Iterable[LedgerEntry],
    display_order: str = "desc",
) -> list[LedgerEntry]:
    """Assign running balances in chronological order and return display order.

    Each balance is the cumulative `debit - credit` position as of and
    including its entry. Display ordering never changes balances.

    Args:
        entries: Entries without balances, in any order.
        display_order: `desc` for newest-first, `asc` for oldest-first.

    Returns:
        list[LedgerEntry]: New entry objects with `balance` set, in display order.

    Raises:
        ValueError: Raised when display order is unsupported.
    """

    if display_order not in {"asc", "desc"}:
        raise ValueError(f"unsupported display_order={display_order}")

    running_balance = _ZERO
    balanced_entries: list[LedgerEntry] = []
    for entry in ledger_sort_chronological(entries):
        running_balance = running_balance + entry.debit_amount - entry.credit_amount
        balanced_entries.append(replace(entry, balance=running_balance))

    if display_order == "desc":
        balanced_entries.reverse()
    return balanced_entries


def ledger_compute_totals(entries: Iterable[LedgerEntry]) -> StatementTotals:
    """Compute debit and credit totals and the closing balance.

    Args:
        entries: Statement entries in any order.

    Returns:
        StatementTotals: Totals where `closing_balance = total_debit - total_credit`.
    """

    total_debit = _ZERO
    total_credit = _ZERO
    for entry in entries:
        total_debit += entry.debit_amount
        total_credit += entry.credit_amount
    return StatementTotals(
        total_debit=total_debit,
        total_credit=total_credit,
        closing_balance=total_debit - total_credit,
    )


__all__ = [
    "ledger_compute_running_balances",
    "ledger_compute_totals",
    "ledger_filter_date_range",
    "ledger_sort_chronological",
]
