"""Statement assembly from ordered, balanced entries."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from party_ledger.domain import LedgerEntry, Party, Statement, StatementTotals, StatementWarning


def ledger_assemble_statement(
    party: Party,
    entries: Iterable[LedgerEntry],
    date_from: date | None,
    date_to: date | None,
    as_of_utc: datetime,
    totals: StatementTotals,
    warnings: Iterable[StatementWarning] = (),
) -> Statement:
    """Package balanced entries and metadata into one statement.

    Args:
        party: Resolved party.
        entries: Balanced entries already in display order.
        date_from: Optional inclusive lower bound.
        date_to: Optional inclusive upper bound.
        as_of_utc: Fetch-start instant.
        totals: Precomputed totals.
        warnings: Source and record warnings.

    Returns:
        Statement: Immutable statement.
    """

    return Statement(
        party=party,
        entries=tuple(entries),
        date_from=date_from,
        date_to=date_to,
        as_of_utc=as_of_utc,
        totals=totals,
        warnings=tuple(warnings),
    )


__all__ = ["ledger_assemble_statement"]
