"""Table-driven normalization of raw source records into ledger entries."""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from party_ledger.domain import (
    EntrySide,
    LedgerEntry,
    NormalizationError,
    PartyKind,
    RawSourceRecord,
    TransactionType,
    UndatedRecordError,
    domain_parse_amount,
)

_ZERO = Decimal("0.00")

# Debit raises what the party owes us; credit raises what we owe the party.
LEDGER_SIGN_TABLE: Mapping[tuple[PartyKind, TransactionType], EntrySide] = MappingProxyType(
    {
        (PartyKind.CUSTOMER, TransactionType.INVOICE): EntrySide.DEBIT,
        (PartyKind.CUSTOMER, TransactionType.DISCOUNT): EntrySide.CREDIT,
        (PartyKind.CUSTOMER, TransactionType.FREIGHT): EntrySide.DEBIT,
        (PartyKind.CUSTOMER, TransactionType.PAYMENT): EntrySide.CREDIT,
        (PartyKind.SUPPLIER, TransactionType.BILL): EntrySide.CREDIT,
        (PartyKind.SUPPLIER, TransactionType.TAX): EntrySide.CREDIT,
        (PartyKind.SUPPLIER, TransactionType.PAYMENT): EntrySide.DEBIT,
        (PartyKind.SUPPLIER, TransactionType.EXPENSE): EntrySide.CREDIT,
        (PartyKind.EMPLOYEE, TransactionType.SALARY): EntrySide.CREDIT,
        (PartyKind.EMPLOYEE, TransactionType.DEDUCTION): EntrySide.DEBIT,
        (PartyKind.EMPLOYEE, TransactionType.EXPENSE): EntrySide.DEBIT,
        (PartyKind.EMPLOYEE, TransactionType.PAYROLL): EntrySide.CREDIT,
    }
)


class LedgerEntryNormalizer:
    """Map raw source records into canonical ledger entries using a sign table.

    A record is normalized as a whole: when any of its lines is invalid the
    record is rejected and none of its entries are emitted.
    """

    def __init__(self, sign_table: Mapping[tuple[PartyKind, TransactionType], EntrySide] | None = None):
        """Initialize normalizer.

        Args:
            sign_table: Optional sign table override; defaults to `LEDGER_SIGN_TABLE`.

        Raises:
            ValueError: Raised when the sign table is empty.
        """

        resolved_table = LEDGER_SIGN_TABLE if sign_table is None else sign_table
        if not resolved_table:
            raise ValueError("sign_table must not be empty")
        self._sign_table = resolved_table

    def normalizer_normalize(self, party_kind: PartyKind, record: RawSourceRecord) -> list[LedgerEntry]:
        """Normalize one raw record into one or more ledger entries.

        The primary line always yields an entry. Sub-lines yield an entry only
        when their amount is non-zero. All entries share the record id as
        `document_id` and carry distinct entry ids.

        Args:
            party_kind: Kind of the party the statement is built for.
            record: Raw source record.

        Returns:
            list[LedgerEntry]: Entries without balances, primary line first.

        Raises:
            UndatedRecordError: Raised when the record has no document date.
            NormalizationError: Raised when a line has an unrecognized transaction
                type, no sign for the party kind, or an invalid amount.
        """

        record_id = record.source_record_id
        if not record.lines:
            raise NormalizationError(f"{record.source_type} {record_id} has no amount lines", "empty_record", record_id)
        if record.document_date is None:
            raise UndatedRecordError(f"{record.source_type} {record_id} has no document date", record_id)

        resolved_lines: list[tuple[int, TransactionType, EntrySide, Decimal, str, str]] = []
        for line_index, line in enumerate(record.lines):
            transaction_type = self._normalizer_resolve_transaction_type(line.transaction_type, record_id)
            side = self._sign_table.get((party_kind, transaction_type))
            if side is None:
                raise NormalizationError(
                    f"transaction type {transaction_type.value} has no sign for {party_kind.value} ledgers",
                    "unrecognized_transaction_type",
                    record_id,
                )
            amount = self._normalizer_parse_amount(line.amount, record_id)
            resolved_lines.append((line_index, transaction_type, side, amount, line.line_key, line.description))

        entries: list[LedgerEntry] = []
        for line_index, transaction_type, side, amount, line_key, description in resolved_lines:
            if line_index > 0 and amount == _ZERO:
                continue
            entry_id = f"{record.source_type}:{record_id}"
            if line_index > 0:
                entry_id = f"{entry_id}:{line_key}"
            entries.append(
                LedgerEntry(
                    id=entry_id,
                    date=record.document_date,
                    description=description,
                    reference_number=record.reference,
                    transaction_type=transaction_type,
                    debit_amount=amount if side is EntrySide.DEBIT else _ZERO,
                    credit_amount=amount if side is EntrySide.CREDIT else _ZERO,
                    source_document=record.source_type,
                    document_id=record_id,
                    status=record.status,
                )
            )
        return entries

    def _normalizer_resolve_transaction_type(self, value: str, record_id: str) -> TransactionType:
        """Resolve one transaction type tag strictly.

        Args:
            value: Transaction type tag.
            record_id: Record identifier for error context.

        Returns:
            TransactionType: Resolved transaction type.

        Raises:
            NormalizationError: Raised when the tag is unknown.
        """

        try:
            return TransactionType(value)
        except ValueError as error:
            raise NormalizationError(
                f"unrecognized transaction type {value!r}",
                "unrecognized_transaction_type",
                record_id,
            ) from error

    def _normalizer_parse_amount(self, value: str | None, record_id: str) -> Decimal:
        """Parse one unsigned line amount.

        Args:
            value: Amount text or None.
            record_id: Record identifier for error context.

        Returns:
            Decimal: Non-negative quantized amount.

        Raises:
            NormalizationError: Raised when the amount is malformed or negative.
        """

        try:
            amount = domain_parse_amount(value)
        except ValueError as error:
            raise NormalizationError(f"invalid amount {value!r}", "invalid_amount", record_id) from error
        if amount < _ZERO:
            raise NormalizationError(f"negative amount {value!r}", "negative_amount", record_id)
        return amount


__all__ = ["LEDGER_SIGN_TABLE", "LedgerEntryNormalizer"]
