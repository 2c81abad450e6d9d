"""Employee source adapters: payroll entries and payroll payout records."""
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


class PayrollAdapter:
    """Emit salary earned per payroll entry with a deduction sub-line."""

    def __init__(self, repository: PartySourceRepositoryPort):
        """Initialize adapter over the origin store repository.

        Args:
            repository: Read-only party source repository.

        Raises:
            ValueError: Raised when repository is None.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        self._repository = repository

    def adapter_source_name(self) -> str:
        """Return the origin store name used in warnings."""

        return "payroll_entries"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.EMPLOYEE

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch employee payroll entries as compound raw records.

        Args:
            party_id: Employee identifier.
            date_from: Optional inclusive lower bound on pay period end.
            date_to: Optional inclusive upper bound on pay period end.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One record per payroll entry; salary line first.

        Raises:
            SourceUnavailableError: Raised when the payroll entry store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_payroll_entry_list_for_employee(party_id, date_from, date_to, deadline=deadline)
        for row in rows:
            period_end = domain_parse_document_date(row.pay_period_end)
            period_label = period_end.isoformat() if period_end is not None else "unknown period"
            records.append(
                RawSourceRecord(
                    source_type="payroll_entry",
                    source_record_id=row.payroll_entry_id,
                    document_date=period_end,
                    reference=None,
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="salary",
                            transaction_type=TransactionType.SALARY.value,
                            amount=row.gross_salary,
                            description=f"Salary for period ending {period_label}",
                        ),
                        RawSourceLine(
                            line_key="deduction",
                            transaction_type=TransactionType.DEDUCTION.value,
                            amount=row.total_deductions,
                            description=f"Deductions for period ending {period_label}",
                        ),
                    ),
                )
            )
        return records


class PayrollRecordAdapter:
    """Emit net amounts actually paid out to the employee."""

    def __init__(self, repository: PartySourceRepositoryPort):
        """Initialize adapter over the origin store repository.

        Args:
            repository: Read-only party source repository.

        Raises:
            ValueError: Raised when repository is None.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        self._repository = repository

    def adapter_source_name(self) -> str:
        """Return the origin store name used in warnings."""

        return "payroll_records"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.EMPLOYEE

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch employee payroll payout records.

        Args:
            party_id: Employee identifier.
            date_from: Optional inclusive lower bound on processing date.
            date_to: Optional inclusive upper bound on processing date.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One payroll record per payout row.

        Raises:
            SourceUnavailableError: Raised when the payroll record store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_payroll_record_list_for_employee(party_id, date_from, date_to, deadline=deadline)
        for row in rows:
            payment_type = domain_normalize_optional_text(row.payment_type) or "salary"
            records.append(
                RawSourceRecord(
                    source_type="payroll_record",
                    source_record_id=row.payroll_record_id,
                    document_date=domain_parse_document_date(row.processed_at),
                    reference=payment_type,
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="payout",
                            transaction_type=TransactionType.PAYROLL.value,
                            amount=row.net_salary,
                            description=f"Payroll payout - {payment_type}",
                        ),
                    ),
                )
            )
        return records


__all__ = ["PayrollAdapter", "PayrollRecordAdapter"]
