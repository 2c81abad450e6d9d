"""Tests for sign-table driven normalization of raw source records."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from party_ledger.domain import (
    NormalizationError,
    PartyKind,
    RawSourceLine,
    RawSourceRecord,
    TransactionType,
    UndatedRecordError,
)
from party_ledger.ledger import LEDGER_SIGN_TABLE, LedgerEntryNormalizer


def _build_record(
    lines: tuple[RawSourceLine, ...],
    source_type: str = "sales_order",
    record_id: str = "so-1",
    document_date: date | None = date(2024, 1, 1),
) -> RawSourceRecord:
    return RawSourceRecord(
        source_type=source_type,
        source_record_id=record_id,
        document_date=document_date,
        reference="SO-1",
        status="confirmed",
        lines=lines,
    )


def _line(line_key: str, transaction_type: str, amount: str | None) -> RawSourceLine:
    return RawSourceLine(line_key=line_key, transaction_type=transaction_type, amount=amount, description=line_key)


@pytest.mark.parametrize(
    ("party_kind", "transaction_type", "expected_debit", "expected_credit"),
    [
        (PartyKind.CUSTOMER, "invoice", "100.00", "0.00"),
        (PartyKind.CUSTOMER, "freight", "100.00", "0.00"),
        (PartyKind.CUSTOMER, "discount", "0.00", "100.00"),
        (PartyKind.CUSTOMER, "payment", "0.00", "100.00"),
        (PartyKind.SUPPLIER, "bill", "0.00", "100.00"),
        (PartyKind.SUPPLIER, "tax", "0.00", "100.00"),
        (PartyKind.SUPPLIER, "expense", "0.00", "100.00"),
        (PartyKind.SUPPLIER, "payment", "100.00", "0.00"),
        (PartyKind.EMPLOYEE, "salary", "0.00", "100.00"),
        (PartyKind.EMPLOYEE, "deduction", "100.00", "0.00"),
        (PartyKind.EMPLOYEE, "expense", "100.00", "0.00"),
        (PartyKind.EMPLOYEE, "payroll", "0.00", "100.00"),
    ],
)
def test_normalizer_posts_amount_to_side_from_sign_table(
    party_kind: PartyKind,
    transaction_type: str,
    expected_debit: str,
    expected_credit: str,
) -> None:
    """Post each (party kind, transaction type) pair to exactly one side."""

    record = _build_record((_line("main", transaction_type, "100"),))

    (entry,) = LedgerEntryNormalizer().normalizer_normalize(party_kind, record)

    assert entry.debit_amount == Decimal(expected_debit)
    assert entry.credit_amount == Decimal(expected_credit)
    assert entry.transaction_type == TransactionType(transaction_type)
    assert entry.balance is None


def test_normalizer_splits_compound_record_into_primary_and_non_zero_sub_entries() -> None:
    """Emit primary line plus non-zero sub-lines sharing one document id.

    Raises:
        AssertionError: Raised when compound split deviates.
    """

    record = _build_record(
        (
            _line("order", "invoice", "5000"),
            _line("discount", "discount", "300"),
            _line("freight", "freight", "0"),
        )
    )

    entries = LedgerEntryNormalizer().normalizer_normalize(PartyKind.CUSTOMER, record)

    assert [entry.id for entry in entries] == ["sales_order:so-1", "sales_order:so-1:discount"]
    assert {entry.document_id for entry in entries} == {"so-1"}
    assert entries[0].debit_amount == Decimal("5000.00")
    assert entries[1].credit_amount == Decimal("300.00")
    assert all(entry.source_document == "sales_order" for entry in entries)
    assert all(entry.reference_number == "SO-1" and entry.status == "confirmed" for entry in entries)


def test_normalizer_keeps_zero_primary_line() -> None:
    record = _build_record((_line("invoice", "invoice", None),), source_type="invoice", record_id="inv-9")

    (entry,) = LedgerEntryNormalizer().normalizer_normalize(PartyKind.CUSTOMER, record)

    assert entry.id == "invoice:inv-9"
    assert entry.debit_amount == Decimal("0.00")
    assert entry.credit_amount == Decimal("0.00")


def test_normalizer_rejects_unrecognized_transaction_type() -> None:
    record = _build_record((_line("order", "refund", "10"),))

    with pytest.raises(NormalizationError) as error_info:
        LedgerEntryNormalizer().normalizer_normalize(PartyKind.CUSTOMER, record)

    assert error_info.value.code == "unrecognized_transaction_type"
    assert error_info.value.record_id == "so-1"


def test_normalizer_rejects_type_without_sign_for_party_kind() -> None:
    """Reject salary lines on customer ledgers instead of guessing a side."""

    record = _build_record((_line("salary", "salary", "10"),))

    with pytest.raises(NormalizationError) as error_info:
        LedgerEntryNormalizer().normalizer_normalize(PartyKind.CUSTOMER, record)

    assert error_info.value.code == "unrecognized_transaction_type"


def test_normalizer_rejects_undated_record() -> None:
    record = _build_record((_line("order", "invoice", "10"),), document_date=None)

    with pytest.raises(UndatedRecordError) as error_info:
        LedgerEntryNormalizer().normalizer_normalize(PartyKind.CUSTOMER, record)

    assert error_info.value.code == "undated_record"


@pytest.mark.parametrize(("amount", "code"), [("ten", "invalid_amount"), ("-5", "negative_amount")])
def test_normalizer_rejects_whole_record_when_any_line_amount_is_invalid(amount: str, code: str) -> None:
    """Emit nothing for a record whose sub-line amount is invalid."""

    record = _build_record((_line("order", "invoice", "100"), _line("discount", "discount", amount)))

    with pytest.raises(NormalizationError) as error_info:
        LedgerEntryNormalizer().normalizer_normalize(PartyKind.CUSTOMER, record)

    assert error_info.value.code == code


def test_normalizer_rejects_record_without_lines() -> None:
    with pytest.raises(NormalizationError) as error_info:
        LedgerEntryNormalizer().normalizer_normalize(PartyKind.CUSTOMER, _build_record(()))

    assert error_info.value.code == "empty_record"


def test_sign_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        LEDGER_SIGN_TABLE[(PartyKind.CUSTOMER, TransactionType.SALARY)] = None  # type: ignore[index]


def test_normalizer_credits_employee_payroll_payout_net_amount() -> None:
    """Post a payroll payout record's net salary on the credit side of an employee statement."""

    record = _build_record(
        (_line("payout", "payroll", "2750.00"),),
        source_type="payroll_record",
        record_id="pr-1",
        document_date=date(2024, 6, 1),
    )

    (entry,) = LedgerEntryNormalizer().normalizer_normalize(PartyKind.EMPLOYEE, record)

    assert entry.id == "payroll_record:pr-1"
    assert entry.transaction_type == TransactionType.PAYROLL
    assert entry.debit_amount == Decimal("0.00")
    assert entry.credit_amount == Decimal("2750.00")
