"""Expense source adapter shared by supplier and employee statements."""
# pylint: disable=too-few-public-methods

from __future__ import annotations

from datetime import date

from party_ledger.db import PartySourceRepositoryPort
from party_ledger.domain import (
    FetchDeadline,
    PartyKind,
    RawSourceLine,
    RawSourceRecord,
    TransactionType,
    domain_normalize_optional_text,
    domain_parse_document_date,
)


class ExpenseAdapter:
    """Emit expenses tagged to one supplier or employee."""

    def __init__(self, repository: PartySourceRepositoryPort, party_kind: PartyKind):
        """Initialize expense adapter for one party kind.

        Args:
            repository: DB-layer party source repository.
            party_kind: Tagged party kind; customers carry no expenses.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        if party_kind not in (PartyKind.SUPPLIER, PartyKind.EMPLOYEE):
            raise ValueError(f"expenses are not tagged to party_kind={party_kind}")
        self._repository = repository
        self._party_kind = party_kind

    def adapter_source_name(self) -> str:
        """Return the origin store name used in warnings."""

        return f"{self._party_kind.value}_expenses"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return self._party_kind

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch expenses tagged to the party.

        Args:
            party_id: Supplier or employee identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One expense record per expense row.

        Raises:
            SourceUnavailableError: Raised when the expense store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_expense_list_for_party(
            self._party_kind.value, party_id, date_from, date_to, deadline=deadline
        )
        for row in rows:
            label = (
                domain_normalize_optional_text(row.description)
                or domain_normalize_optional_text(row.category)
                or row.expense_id
            )
            records.append(
                RawSourceRecord(
                    source_type="expense",
                    source_record_id=row.expense_id,
                    document_date=domain_parse_document_date(row.expense_date),
                    reference=domain_normalize_optional_text(row.category),
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="expense",
                            transaction_type=TransactionType.EXPENSE.value,
                            amount=row.amount,
                            description=f"Expense - {label}",
                        ),
                    ),
                )
            )
        return records


__all__ = ["ExpenseAdapter"]
