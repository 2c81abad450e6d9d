"""Supplier source adapters: purchase orders, vendor payments and vendor bills."""
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


class PurchaseOrderAdapter:
    """Emit one raw record per purchase order with a tax sub-line."""

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

        return "purchase_orders"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.SUPPLIER

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch supplier purchase orders as compound raw records.

        Args:
            party_id: Supplier identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One record per purchase order; bill line first.

        Raises:
            SourceUnavailableError: Raised when the purchase order store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_purchase_order_list_for_supplier(party_id, date_from, date_to, deadline=deadline)
        for row in rows:
            po_number = domain_normalize_optional_text(row.po_number) or row.purchase_order_id
            records.append(
                RawSourceRecord(
                    source_type="purchase_order",
                    source_record_id=row.purchase_order_id,
                    document_date=domain_parse_document_date(row.order_date),
                    reference=po_number,
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="order",
                            transaction_type=TransactionType.BILL.value,
                            amount=row.total,
                            description=f"Purchase Order #{po_number}",
                        ),
                        RawSourceLine(
                            line_key="tax",
                            transaction_type=TransactionType.TAX.value,
                            amount=row.tax_amount,
                            description=f"Tax on Purchase Order #{po_number}",
                        ),
                    ),
                )
            )
        return records


class VendorPaymentAdapter:
    """Emit payments made to the supplier."""

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

        return "vendor_payments"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.SUPPLIER

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch payments made to the supplier.

        Args:
            party_id: Supplier identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One payment record per vendor payment row.

        Raises:
            SourceUnavailableError: Raised when the vendor payment store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_vendor_payment_list_for_supplier(party_id, date_from, date_to, deadline=deadline)
        for row in rows:
            method = domain_normalize_optional_text(row.payment_method) or "unspecified"
            records.append(
                RawSourceRecord(
                    source_type="vendor_payment",
                    source_record_id=row.vendor_payment_id,
                    document_date=domain_parse_document_date(row.payment_date),
                    reference=domain_normalize_optional_text(row.reference_number),
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="payment",
                            transaction_type=TransactionType.PAYMENT.value,
                            amount=row.amount_paid,
                            description=f"Payment made - {method}",
                        ),
                    ),
                )
            )
        return records


class VendorBillAdapter:
    """Emit vendor bills owed to the supplier."""

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

        return "vendor_bills"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.SUPPLIER

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch supplier vendor bills.

        Args:
            party_id: Supplier identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One bill record per vendor bill row.

        Raises:
            SourceUnavailableError: Raised when the vendor bill store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_vendor_bill_list_for_supplier(party_id, date_from, date_to, deadline=deadline)
        for row in rows:
            bill_number = domain_normalize_optional_text(row.bill_number) or row.vendor_bill_id
            records.append(
                RawSourceRecord(
                    source_type="vendor_bill",
                    source_record_id=row.vendor_bill_id,
                    document_date=domain_parse_document_date(row.bill_date),
                    reference=bill_number,
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="bill",
                            transaction_type=TransactionType.BILL.value,
                            amount=row.total_amount,
                            description=f"Vendor Bill #{bill_number}",
                        ),
                    ),
                )
            )
        return records


__all__ = ["PurchaseOrderAdapter", "VendorBillAdapter", "VendorPaymentAdapter"]
