"""Read-only database service for party ledger origin stores."""
# pylint: disable=duplicate-code

from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import Engine, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from party_ledger.domain import FetchCancelledError, FetchDeadline, SourceUnavailableError

from .interfaces import (
    ExpenseRecord,
    InvoiceRecord,
    PartyDirectoryRecord,
    PartySourceRepositoryPort,
    PaymentRecord,
    PayrollEntryRecord,
    PayrollRecordRecord,
    PurchaseOrderRecord,
    SalesOrderRecord,
    VendorBillRecord,
    VendorPaymentRecord,
)

_DATE_BOUNDS = (
    "(CAST(:date_from AS date) IS NULL OR CAST({column} AS date) >= CAST(:date_from AS date)) "
    "AND (CAST(:date_to AS date) IS NULL OR CAST({column} AS date) <= CAST(:date_to AS date)) "
)


class SQLAlchemyPartySourceRepository(PartySourceRepositoryPort):
    """SQLAlchemy implementation for party origin store reads.

    Each method opens its own connection so source adapters can run
    concurrently. Results are ordered by document date then row id.
    """

    _PAYMENT_INVOICE_BATCH_SIZE = 1000

    _STATEMENT_TIMEOUT_QUERY = text("SELECT set_config('statement_timeout', :statement_timeout, true)")

    _PARTY_QUERY_BY_KIND = {
        "customer": "SELECT id, name FROM customers WHERE id = :party_id",
        "supplier": "SELECT id, name FROM suppliers WHERE id = :party_id",
        "employee": "SELECT id, name FROM employees WHERE id = :party_id",
    }

    _SALES_ORDER_QUERY = (
        "SELECT id, order_number, COALESCE(order_date, created_at) AS document_date, "
        "final_price, discount_amount, freight_charges, status "
        "FROM sales_orders "
        "WHERE customer_id = :party_id AND "
        + _DATE_BOUNDS.format(column="COALESCE(order_date, created_at)")
        + "ORDER BY document_date asc, id asc"
    )

    _STANDALONE_INVOICE_QUERY = (
        "SELECT id, invoice_number, invoice_date AS document_date, total, status "
        "FROM invoices "
        "WHERE customer_id = :party_id AND sales_order_id IS NULL AND "
        + _DATE_BOUNDS.format(column="invoice_date")
        + "ORDER BY document_date asc, id asc"
    )

    _INVOICE_ID_QUERY = (
        "SELECT i.id FROM invoices i "
        "LEFT JOIN sales_orders so ON so.id = i.sales_order_id "
        "WHERE i.customer_id = :party_id OR so.customer_id = :party_id "
        "ORDER BY i.id asc"
    )

    _PAYMENT_QUERY = (
        "SELECT id, invoice_id, payment_date AS document_date, amount, method, reference "
        "FROM payments "
        "WHERE invoice_id IN :invoice_ids AND "
        + _DATE_BOUNDS.format(column="payment_date")
        + "ORDER BY document_date asc, id asc"
    )

    _PURCHASE_ORDER_QUERY = (
        "SELECT id, po_number, COALESCE(order_date, created_at) AS document_date, total, tax_amount, status "
        "FROM purchase_orders "
        "WHERE supplier_id = :party_id AND "
        + _DATE_BOUNDS.format(column="COALESCE(order_date, created_at)")
        + "ORDER BY document_date asc, id asc"
    )

    _VENDOR_PAYMENT_QUERY = (
        "SELECT id, payment_date AS document_date, amount_paid, payment_method, reference_number, status "
        "FROM vendor_payment_history "
        "WHERE supplier_id = :party_id AND "
        + _DATE_BOUNDS.format(column="payment_date")
        + "ORDER BY document_date asc, id asc"
    )

    _EXPENSE_QUERY = (
        "SELECT id, date AS document_date, amount, description, category, status "
        "FROM expenses "
        "WHERE entity_type = :entity_type AND entity_id = :party_id AND "
        + _DATE_BOUNDS.format(column="date")
        + "ORDER BY document_date asc, id asc"
    )

    _VENDOR_BILL_QUERY = (
        "SELECT id, bill_number, bill_date AS document_date, total_amount, status "
        "FROM vendor_bills "
        "WHERE supplier_id = :party_id AND "
        + _DATE_BOUNDS.format(column="bill_date")
        + "ORDER BY document_date asc, id asc"
    )

    _PAYROLL_ENTRY_QUERY = (
        "SELECT id, pay_period_end AS document_date, gross_salary, total_deductions, status "
        "FROM payroll_entries "
        "WHERE employee_id = :party_id AND "
        + _DATE_BOUNDS.format(column="pay_period_end")
        + "ORDER BY document_date asc, id asc"
    )

    _PAYROLL_RECORD_QUERY = (
        "SELECT id, processed_at AS document_date, net_salary, payment_type, status "
        "FROM payroll_records "
        "WHERE employee_id = :party_id AND "
        + _DATE_BOUNDS.format(column="processed_at")
        + "ORDER BY document_date asc, id asc"
    )

    def __init__(self, engine: Engine):
        """Initialize party source database service.

        Args:
            engine: SQLAlchemy engine bound to the origin stores.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_party_get(
        self,
        party_kind: str,
        party_id: str,
        deadline: FetchDeadline | None = None,
    ) -> PartyDirectoryRecord | None:
        """Resolve one party in its owning directory table.

        Args:
            party_kind: Party kind value (`customer`, `supplier`, `employee`).
            party_id: Party identifier.
            deadline: Optional shared read deadline.

        Returns:
            PartyDirectoryRecord | None: Directory row, or None when the party does not exist.

        Raises:
            ValueError: Raised when the party kind is unsupported.
            SourceUnavailableError: Raised when the directory read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        query = self._PARTY_QUERY_BY_KIND.get(party_kind)
        if query is None:
            raise ValueError(f"unsupported party_kind={party_kind}")

        rows = self._db_source_fetch(
            source=f"{party_kind}_directory",
            query=query,
            parameters={"party_id": self._db_validate_non_empty_text(party_id, "party_id")},
            deadline=deadline,
        )
        if not rows:
            return None
        return PartyDirectoryRecord(party_id=str(rows[0]["id"]), name=rows[0]["name"])

    def db_sales_order_list_for_customer(
        self,
        customer_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[SalesOrderRecord]:
        """List customer sales orders inside the inclusive date range.

        Args:
            customer_id: Customer identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[SalesOrderRecord]: Deterministically ordered sales orders.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="sales_orders",
            query=self._SALES_ORDER_QUERY,
            parameters=self._db_party_parameters(customer_id, date_from, date_to),
            deadline=deadline,
        )
        return [
            SalesOrderRecord(
                sales_order_id=str(row["id"]),
                order_number=row["order_number"],
                order_date=row["document_date"],
                final_price=self._db_optional_text(row["final_price"]),
                discount_amount=self._db_optional_text(row["discount_amount"]),
                freight_charges=self._db_optional_text(row["freight_charges"]),
                status=row["status"],
            )
            for row in rows
        ]

    def db_invoice_list_standalone_for_customer(
        self,
        customer_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[InvoiceRecord]:
        """List customer invoices without a sales order inside the inclusive date range.

        Args:
            customer_id: Customer identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[InvoiceRecord]: Deterministically ordered standalone invoices.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="invoices",
            query=self._STANDALONE_INVOICE_QUERY,
            parameters=self._db_party_parameters(customer_id, date_from, date_to),
            deadline=deadline,
        )
        return [
            InvoiceRecord(
                invoice_id=str(row["id"]),
                invoice_number=row["invoice_number"],
                invoice_date=row["document_date"],
                total=self._db_optional_text(row["total"]),
                status=row["status"],
            )
            for row in rows
        ]

    def db_invoice_id_list_for_customer(self, customer_id: str, deadline: FetchDeadline | None = None) -> list[str]:
        """List invoice ids linked to the customer directly or through its sales orders.

        Args:
            customer_id: Customer identifier.
            deadline: Optional shared read deadline.

        Returns:
            list[str]: Sorted unique invoice identifiers.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="invoices",
            query=self._INVOICE_ID_QUERY,
            parameters={"party_id": self._db_validate_non_empty_text(customer_id, "customer_id")},
            deadline=deadline,
        )
        return sorted({str(row["id"]) for row in rows})

    def db_payment_list_for_invoices(
        self,
        invoice_ids: list[str],
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PaymentRecord]:
        """List payments recorded against the given invoices inside the inclusive date range.

        Args:
            invoice_ids: Invoice identifiers resolved for one customer.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[PaymentRecord]: Payments ordered per invoice batch; empty when no invoices are given.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        unique_invoice_ids = sorted(set(invoice_ids))
        rows: list[Any] = []
        # Bounded IN lists keep each statement under driver parameter limits.
        for batch_start in range(0, len(unique_invoice_ids), self._PAYMENT_INVOICE_BATCH_SIZE):
            rows.extend(
                self._db_source_fetch(
                    source="payments",
                    query=self._PAYMENT_QUERY,
                    parameters={
                        "invoice_ids": unique_invoice_ids[batch_start : batch_start + self._PAYMENT_INVOICE_BATCH_SIZE],
                        "date_from": self._db_optional_date_text(date_from),
                        "date_to": self._db_optional_date_text(date_to),
                    },
                    expanding_parameters=("invoice_ids",),
                    deadline=deadline,
                )
            )
        return [
            PaymentRecord(
                payment_id=str(row["id"]),
                invoice_id=str(row["invoice_id"]),
                payment_date=row["document_date"],
                amount=self._db_optional_text(row["amount"]),
                method=row["method"],
                reference=row["reference"],
            )
            for row in rows
        ]

    def db_purchase_order_list_for_supplier(
        self,
        supplier_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PurchaseOrderRecord]:
        """List supplier purchase orders inside the inclusive date range.

        Args:
            supplier_id: Supplier identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[PurchaseOrderRecord]: Deterministically ordered purchase orders.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="purchase_orders",
            query=self._PURCHASE_ORDER_QUERY,
            parameters=self._db_party_parameters(supplier_id, date_from, date_to),
            deadline=deadline,
        )
        return [
            PurchaseOrderRecord(
                purchase_order_id=str(row["id"]),
                po_number=row["po_number"],
                order_date=row["document_date"],
                total=self._db_optional_text(row["total"]),
                tax_amount=self._db_optional_text(row["tax_amount"]),
                status=row["status"],
            )
            for row in rows
        ]

    def db_vendor_payment_list_for_supplier(
        self,
        supplier_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[VendorPaymentRecord]:
        """List payments made to the supplier inside the inclusive date range.

        Args:
            supplier_id: Supplier identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[VendorPaymentRecord]: Deterministically ordered vendor payments.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="vendor_payment_history",
            query=self._VENDOR_PAYMENT_QUERY,
            parameters=self._db_party_parameters(supplier_id, date_from, date_to),
            deadline=deadline,
        )
        return [
            VendorPaymentRecord(
                vendor_payment_id=str(row["id"]),
                payment_date=row["document_date"],
                amount_paid=self._db_optional_text(row["amount_paid"]),
                payment_method=row["payment_method"],
                reference_number=row["reference_number"],
                status=row["status"],
            )
            for row in rows
        ]

    def db_expense_list_for_party(
        self,
        entity_type: str,
        entity_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[ExpenseRecord]:
        """List expenses tagged to one supplier or employee inside the inclusive date range.

        Args:
            entity_type: Tag kind (`supplier` or `employee`).
            entity_id: Tagged party identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[ExpenseRecord]: Deterministically ordered expenses.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        parameters = self._db_party_parameters(entity_id, date_from, date_to)
        parameters["entity_type"] = self._db_validate_non_empty_text(entity_type, "entity_type")
        rows = self._db_source_fetch(
            source="expenses",
            query=self._EXPENSE_QUERY,
            parameters=parameters,
            deadline=deadline,
        )
        return [
            ExpenseRecord(
                expense_id=str(row["id"]),
                expense_date=row["document_date"],
                amount=self._db_optional_text(row["amount"]),
                description=row["description"],
                category=row["category"],
                status=row["status"],
            )
            for row in rows
        ]

    def db_vendor_bill_list_for_supplier(
        self,
        supplier_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[VendorBillRecord]:
        """List supplier vendor bills inside the inclusive date range.

        Args:
            supplier_id: Supplier identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[VendorBillRecord]: Deterministically ordered vendor bills.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="vendor_bills",
            query=self._VENDOR_BILL_QUERY,
            parameters=self._db_party_parameters(supplier_id, date_from, date_to),
            deadline=deadline,
        )
        return [
            VendorBillRecord(
                vendor_bill_id=str(row["id"]),
                bill_number=row["bill_number"],
                bill_date=row["document_date"],
                total_amount=self._db_optional_text(row["total_amount"]),
                status=row["status"],
            )
            for row in rows
        ]

    def db_payroll_entry_list_for_employee(
        self,
        employee_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PayrollEntryRecord]:
        """List employee payroll entries inside the inclusive date range.

        Args:
            employee_id: Employee identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[PayrollEntryRecord]: Deterministically ordered payroll entries.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="payroll_entries",
            query=self._PAYROLL_ENTRY_QUERY,
            parameters=self._db_party_parameters(employee_id, date_from, date_to),
            deadline=deadline,
        )
        return [
            PayrollEntryRecord(
                payroll_entry_id=str(row["id"]),
                pay_period_end=row["document_date"],
                gross_salary=self._db_optional_text(row["gross_salary"]),
                total_deductions=self._db_optional_text(row["total_deductions"]),
                status=row["status"],
            )
            for row in rows
        ]

    def db_payroll_record_list_for_employee(
        self,
        employee_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PayrollRecordRecord]:
        """List employee payroll payout records inside the inclusive date range.

        Args:
            employee_id: Employee identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[PayrollRecordRecord]: Deterministically ordered payroll records.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        rows = self._db_source_fetch(
            source="payroll_records",
            query=self._PAYROLL_RECORD_QUERY,
            parameters=self._db_party_parameters(employee_id, date_from, date_to),
            deadline=deadline,
        )
        return [
            PayrollRecordRecord(
                payroll_record_id=str(row["id"]),
                processed_at=row["document_date"],
                net_salary=self._db_optional_text(row["net_salary"]),
                payment_type=row["payment_type"],
                status=row["status"],
            )
            for row in rows
        ]

    def _db_source_fetch(
        self,
        source: str,
        query: str,
        parameters: dict[str, Any],
        expanding_parameters: tuple[str, ...] = (),
        deadline: FetchDeadline | None = None,
    ) -> list[Any]:
        """Execute one fixed read query and return row mappings.

        With a deadline the read is refused once the deadline is cancelled
        or spent, and on PostgreSQL the query runs inside a transaction whose
        `statement_timeout` is the remaining time, so the server aborts a
        read the caller has stopped waiting for.

        Args:
            source: Store name used in failure reporting.
            query: Fixed SQL template.
            parameters: Bound query parameters.
            expanding_parameters: Parameter names bound as expanding IN lists.
            deadline: Optional shared read deadline.

        Returns:
            list[Any]: Row mappings.

        Raises:
            SourceUnavailableError: Raised when the store read fails.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """

        statement = text(query)
        if expanding_parameters:
            statement = statement.bindparams(*(bindparam(name, expanding=True) for name in expanding_parameters))

        if deadline is not None:
            deadline.deadline_check(source)

        try:
            with self._engine.connect() as connection:
                timeout_ms = self._db_statement_timeout_ms(connection, deadline, source)
                if timeout_ms is None:
                    return list(connection.execute(statement, parameters).mappings().all())
                with connection.begin():
                    connection.execute(self._STATEMENT_TIMEOUT_QUERY, {"statement_timeout": str(timeout_ms)})
                    return list(connection.execute(statement, parameters).mappings().all())
        except SQLAlchemyError as error:
            if deadline is not None and deadline.deadline_is_cancelled():
                raise FetchCancelledError(f"{source} read cancelled") from error
            raise SourceUnavailableError(f"{source} read failed", source=source) from error

    def _db_statement_timeout_ms(
        self,
        connection: Any,
        deadline: FetchDeadline | None,
        source: str,
    ) -> int | None:
        """Return the per-query server timeout in milliseconds, or None when not applicable.

        Raises:
            FetchCancelledError: Raised when the deadline was spent while connecting.
        """

        if deadline is None or connection.dialect.name != "postgresql":
            return None
        remaining_seconds = deadline.deadline_remaining_seconds()
        if remaining_seconds is None:
            return None
        timeout_ms = int(remaining_seconds * 1000)
        if timeout_ms <= 0:
            raise FetchCancelledError(f"{source} read cancelled")
        return timeout_ms

    def _db_party_parameters(self, party_id: str, date_from: date | None, date_to: date | None) -> dict[str, Any]:
        """Build common party and date-bound query parameters.

        Args:
            party_id: Party identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.

        Returns:
            dict[str, Any]: Bound parameters.

        Raises:
            ValueError: Raised when the party id is blank.
        """

        return {
            "party_id": self._db_validate_non_empty_text(party_id, "party_id"),
            "date_from": self._db_optional_date_text(date_from),
            "date_to": self._db_optional_date_text(date_to),
        }

    def _db_validate_non_empty_text(self, value: str, field_name: str) -> str:
        """Validate and normalize one required text value.

        Args:
            value: Candidate text.
            field_name: Field label for errors.

        Returns:
            str: Stripped text.

        Raises:
            ValueError: Raised when value is blank.
        """

        normalized_value = value.strip() if isinstance(value, str) else ""
        if not normalized_value:
            raise ValueError(f"{field_name} must not be blank")
        return normalized_value

    def _db_optional_date_text(self, value: date | None) -> str | None:
        """Render one optional date bound as ISO text."""

        return None if value is None else value.isoformat()

    def _db_optional_text(self, value: object | None) -> str | None:
        """Render one optional numeric column value as text."""

        return None if value is None else str(value)


__all__ = ["SQLAlchemyPartySourceRepository"]
