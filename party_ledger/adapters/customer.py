"""Customer source adapters: sales orders, payments received and standalone invoices."""
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


class SalesOrderAdapter:
    """Emit one raw record per sales order with discount and freight sub-lines."""

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

        return "sales_orders"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.CUSTOMER

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch customer sales orders as compound raw records.

        Args:
            party_id: Customer identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One record per order; invoice line first.

        Raises:
            SourceUnavailableError: Raised when the sales order store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_sales_order_list_for_customer(party_id, date_from, date_to, deadline=deadline)
        for row in rows:
            order_number = domain_normalize_optional_text(row.order_number) or row.sales_order_id
            records.append(
                RawSourceRecord(
                    source_type="sales_order",
                    source_record_id=row.sales_order_id,
                    document_date=domain_parse_document_date(row.order_date),
                    reference=order_number,
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="order",
                            transaction_type=TransactionType.INVOICE.value,
                            amount=row.final_price,
                            description=f"Sales Order #{order_number}",
                        ),
                        RawSourceLine(
                            line_key="discount",
                            transaction_type=TransactionType.DISCOUNT.value,
                            amount=row.discount_amount,
                            description=f"Discount on Sales Order #{order_number}",
                        ),
                        RawSourceLine(
                            line_key="freight",
                            transaction_type=TransactionType.FREIGHT.value,
                            amount=row.freight_charges,
                            description=f"Freight on Sales Order #{order_number}",
                        ),
                    ),
                )
            )
        return records


class PaymentAdapter:
    """Emit payments received, resolved through the customer's invoices.

    Payments are keyed by invoice, so the customer's invoice ids are resolved
    first and the payments of those invoices are fetched second.
    """

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

        return "payments"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.CUSTOMER

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch payments received from the customer.

        Args:
            party_id: Customer identifier.
            date_from: Optional inclusive lower bound on payment date.
            date_to: Optional inclusive upper bound on payment date.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One payment record per payment row.

        Raises:
            SourceUnavailableError: Raised when the invoice or payment store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        invoice_ids = self._repository.db_invoice_id_list_for_customer(party_id, deadline=deadline)
        if not invoice_ids:
            return []

        records: list[RawSourceRecord] = []
        rows = self._repository.db_payment_list_for_invoices(invoice_ids, date_from, date_to, deadline=deadline)
        for row in rows:
            method = domain_normalize_optional_text(row.method) or "unspecified"
            records.append(
                RawSourceRecord(
                    source_type="payment",
                    source_record_id=row.payment_id,
                    document_date=domain_parse_document_date(row.payment_date),
                    reference=domain_normalize_optional_text(row.reference),
                    status=None,
                    lines=(
                        RawSourceLine(
                            line_key="payment",
                            transaction_type=TransactionType.PAYMENT.value,
                            amount=row.amount,
                            description=f"Payment received - {method}",
                        ),
                    ),
                )
            )
        return records


class InvoiceAdapter:
    """Emit customer invoices that were not raised for a sales order."""

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

        return "invoices"

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves."""

        return PartyKind.CUSTOMER

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch standalone customer invoices.

        Args:
            party_id: Customer identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: One invoice record per standalone invoice.

        Raises:
            SourceUnavailableError: Raised when the invoice store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        records: list[RawSourceRecord] = []
        rows = self._repository.db_invoice_list_standalone_for_customer(party_id, date_from, date_to, deadline=deadline)
        for row in rows:
            invoice_number = domain_normalize_optional_text(row.invoice_number) or row.invoice_id
            records.append(
                RawSourceRecord(
                    source_type="invoice",
                    source_record_id=row.invoice_id,
                    document_date=domain_parse_document_date(row.invoice_date),
                    reference=invoice_number,
                    status=domain_normalize_optional_text(row.status),
                    lines=(
                        RawSourceLine(
                            line_key="invoice",
                            transaction_type=TransactionType.INVOICE.value,
                            amount=row.total,
                            description=f"Invoice #{invoice_number}",
                        ),
                    ),
                )
            )
        return records


__all__ = ["InvoiceAdapter", "PaymentAdapter", "SalesOrderAdapter"]
