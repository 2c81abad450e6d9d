"""Typed domain models shared across runtime layers.

Ledger value objects are immutable. Raw source records are produced by source
adapters, normalized into ledger entries, and packaged into statements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


class PartyKind(str, Enum):
    """Kind of party whose statement is reconstructed."""

    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    EMPLOYEE = "employee"


class TransactionType(str, Enum):
    """Ledger transaction types emitted by source adapters."""

    INVOICE = "invoice"
    DISCOUNT = "discount"
    FREIGHT = "freight"
    PAYMENT = "payment"
    BILL = "bill"
    TAX = "tax"
    EXPENSE = "expense"
    SALARY = "salary"
    DEDUCTION = "deduction"
    PAYROLL = "payroll"


class EntrySide(str, Enum):
    """Side of the party account an amount is posted to."""

    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class Party:
    """Resolved party identity.

    Attributes:
        party_id: Opaque party identifier.
        kind: Party kind.
        name: Display name from the owning directory table.
    """

    party_id: str
    kind: PartyKind
    name: str | None = None


@dataclass(frozen=True)
class RawSourceLine:
    """One amount line of a raw source record.

    Attributes:
        line_key: Stable line key, unique inside one source record.
        transaction_type: Transaction type tag as emitted by the adapter.
        amount: Unsigned amount text as read from the origin store; None counts as zero.
        description: Display description for the derived ledger entry.
    """

    line_key: str
    transaction_type: str
    amount: str | None
    description: str


@dataclass(frozen=True)
class RawSourceRecord:
    """Source-tagged record emitted by one source adapter.

    The first line is the primary line of the document. Remaining lines are
    implied sub-entries such as discount, freight, tax or deduction.

    Attributes:
        source_type: Source tag such as `sales_order` or `payment`.
        source_record_id: Identifier of the row in its origin store.
        document_date: Document date, or None when the origin row is undated.
        reference: Optional display reference such as an order number.
        status: Optional origin-side document status.
        lines: Amount lines, primary line first.
    """

    source_type: str
    source_record_id: str
    document_date: date | None
    reference: str | None
    status: str | None
    lines: tuple[RawSourceLine, ...]


@dataclass(frozen=True)
class LedgerEntry:
    """Canonical ledger entry.

    Attributes:
        id: Deterministic entry identifier derived from source type and record id.
        date: Document date used for chronological ordering.
        description: Display description.
        reference_number: Optional display reference.
        transaction_type: Ledger transaction type.
        debit_amount: Non-negative debit amount.
        credit_amount: Non-negative credit amount.
        source_document: Source tag of the originating record.
        document_id: Originating record identifier shared by all lines of a document.
        status: Optional origin-side document status.
        balance: Running balance, assigned only by the balance calculator.
    """

    id: str
    date: date
    description: str
    reference_number: str | None
    transaction_type: TransactionType
    debit_amount: Decimal
    credit_amount: Decimal
    source_document: str
    document_id: str
    status: str | None = None
    balance: Decimal | None = None


@dataclass(frozen=True)
class StatementWarning:
    """Non-fatal problem recorded while building a statement.

    Attributes:
        source: Source adapter name the problem belongs to.
        error: Caller-safe error message.
        code: Stable machine-readable warning code.
        record_id: Optional originating record identifier.
    """

    source: str
    error: str
    code: str
    record_id: str | None = None


@dataclass(frozen=True)
class StatementTotals:
    """Statement level debit, credit and closing balance totals."""

    total_debit: Decimal
    total_credit: Decimal
    closing_balance: Decimal


@dataclass(frozen=True)
class Statement:
    """Ordered, balanced party statement.

    Attributes:
        party: Resolved party.
        entries: Balanced entries in display order.
        date_from: Optional inclusive lower date bound.
        date_to: Optional inclusive upper date bound.
        as_of_utc: Fetch-start instant the statement reflects.
        totals: Debit, credit and closing balance totals.
        warnings: Source and normalization warnings.
    """

    party: Party
    entries: tuple[LedgerEntry, ...]
    date_from: date | None
    date_to: date | None
    as_of_utc: datetime
    totals: StatementTotals
    warnings: tuple[StatementWarning, ...] = field(default_factory=tuple)

    @property
    def entry_count(self) -> int:
        """Return the number of entries in the statement."""

        return len(self.entries)

    @property
    def is_partial(self) -> bool:
        """Return True when any source or record problem was recorded."""

        return bool(self.warnings)
