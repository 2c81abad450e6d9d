"""Typed interfaces for database-layer services.

All SQL and ORM access must remain in the db package and its submodules. The
origin stores are owned by other subsystems; this package only reads them.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from party_ledger.domain import FetchDeadline, HealthStatus


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


@dataclass(frozen=True)
class PartyDirectoryRecord:
    """Typed party directory row.

    Attributes:
        party_id: Party identifier.
        name: Party display name.
    """

    party_id: str
    name: str | None


@dataclass(frozen=True)
class SalesOrderRecord:
    """Typed `sales_orders` row.

    Attributes:
        sales_order_id: Sales order identifier.
        order_number: Display order number.
        order_date: Document date resolved from order date or creation timestamp.
        final_price: Order amount charged to the customer.
        discount_amount: Optional discount granted on the order.
        freight_charges: Optional freight charged on the order.
        status: Order status.
    """

    sales_order_id: str
    order_number: str | None
    order_date: date | datetime | str | None
    final_price: str | None
    discount_amount: str | None
    freight_charges: str | None
    status: str | None


@dataclass(frozen=True)
class InvoiceRecord:
    """Typed `invoices` row.

    Attributes:
        invoice_id: Invoice identifier.
        invoice_number: Display invoice number.
        invoice_date: Invoice document date.
        total: Invoice total.
        status: Invoice status.
    """

    invoice_id: str
    invoice_number: str | None
    invoice_date: date | datetime | str | None
    total: str | None
    status: str | None


@dataclass(frozen=True)
class PaymentRecord:
    """Typed `payments` row.

    Attributes:
        payment_id: Payment identifier.
        invoice_id: Invoice the payment settles.
        payment_date: Payment document date.
        amount: Amount received.
        method: Payment method label.
        reference: Optional payment reference.
    """

    payment_id: str
    invoice_id: str
    payment_date: date | datetime | str | None
    amount: str | None
    method: str | None
    reference: str | None


@dataclass(frozen=True)
class PurchaseOrderRecord:
    """Typed `purchase_orders` row.

    Attributes:
        purchase_order_id: Purchase order identifier.
        po_number: Display purchase order number.
        order_date: Document date resolved from order date or creation timestamp.
        total: Purchase order total owed to the supplier.
        tax_amount: Optional tax on the purchase.
        status: Purchase order status.
    """

    purchase_order_id: str
    po_number: str | None
    order_date: date | datetime | str | None
    total: str | None
    tax_amount: str | None
    status: str | None


@dataclass(frozen=True)
class VendorPaymentRecord:
    """Typed `vendor_payment_history` row.

    Attributes:
        vendor_payment_id: Vendor payment identifier.
        payment_date: Payment document date.
        amount_paid: Amount paid to the supplier.
        payment_method: Payment method label.
        reference_number: Optional payment reference.
        status: Payment status.
    """

    vendor_payment_id: str
    payment_date: date | datetime | str | None
    amount_paid: str | None
    payment_method: str | None
    reference_number: str | None
    status: str | None


@dataclass(frozen=True)
class ExpenseRecord:
    """Typed `expenses` row tagged to one supplier or employee.

    Attributes:
        expense_id: Expense identifier.
        expense_date: Expense document date.
        amount: Expense amount.
        description: Free-text expense description.
        category: Expense category.
        status: Expense status.
    """

    expense_id: str
    expense_date: date | datetime | str | None
    amount: str | None
    description: str | None
    category: str | None
    status: str | None


@dataclass(frozen=True)
class VendorBillRecord:
    """Typed `vendor_bills` row.

    Attributes:
        vendor_bill_id: Vendor bill identifier.
        bill_number: Display bill number.
        bill_date: Bill document date.
        total_amount: Bill total owed to the supplier.
        status: Bill status.
    """

    vendor_bill_id: str
    bill_number: str | None
    bill_date: date | datetime | str | None
    total_amount: str | None
    status: str | None


@dataclass(frozen=True)
class PayrollEntryRecord:
    """Typed `payroll_entries` row.

    Attributes:
        payroll_entry_id: Payroll entry identifier.
        pay_period_end: Pay period end date used as document date.
        gross_salary: Gross salary earned in the period.
        total_deductions: Optional deductions withheld in the period.
        status: Payroll entry status.
    """

    payroll_entry_id: str
    pay_period_end: date | datetime | str | None
    gross_salary: str | None
    total_deductions: str | None
    status: str | None


@dataclass(frozen=True)
class PayrollRecordRecord:
    """Typed `payroll_records` row.

    Attributes:
        payroll_record_id: Payroll record identifier.
        processed_at: Processing timestamp used as document date.
        net_salary: Net amount paid out to the employee.
        payment_type: Payment type such as salary, bonus or overtime.
        status: Payroll record status.
    """

    payroll_record_id: str
    processed_at: date | datetime | str | None
    net_salary: str | None
    payment_type: str | None
    status: str | None


class PartySourceRepositoryPort(Protocol):
    """Port definition for read-only access to the party origin stores.

    Date bounds are inclusive and applied in SQL. Every method raises
    `SourceUnavailableError` when its origin store cannot be read, and
    `FetchCancelledError` when the optional deadline is cancelled or spent
    before or during the read.
    """

    def db_party_get(
        self, party_kind: str, party_id: str, deadline: FetchDeadline | None = None
    ) -> PartyDirectoryRecord | None:
        """Resolve one party in its owning directory table."""

    def db_sales_order_list_for_customer(
        self,
        customer_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[SalesOrderRecord]:
        """List customer sales orders inside the date range."""

    def db_invoice_list_standalone_for_customer(
        self,
        customer_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[InvoiceRecord]:
        """List customer invoices not raised for a sales order inside the date range."""

    def db_invoice_id_list_for_customer(self, customer_id: str, deadline: FetchDeadline | None = None) -> list[str]:
        """List invoice ids linked to the customer directly or through its sales orders."""

    def db_payment_list_for_invoices(
        self,
        invoice_ids: list[str],
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PaymentRecord]:
        """List payments for the given invoices inside the date range."""

    def db_purchase_order_list_for_supplier(
        self,
        supplier_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PurchaseOrderRecord]:
        """List supplier purchase orders inside the date range."""

    def db_vendor_payment_list_for_supplier(
        self,
        supplier_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[VendorPaymentRecord]:
        """List payments made to the supplier inside the date range."""

    def db_expense_list_for_party(
        self,
        entity_type: str,
        entity_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[ExpenseRecord]:
        """List expenses tagged to one supplier or employee inside the date range."""

    def db_vendor_bill_list_for_supplier(
        self,
        supplier_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[VendorBillRecord]:
        """List supplier vendor bills inside the date range."""

    def db_payroll_entry_list_for_employee(
        self,
        employee_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PayrollEntryRecord]:
        """List employee payroll entries inside the date range."""

    def db_payroll_record_list_for_employee(
        self,
        employee_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[PayrollRecordRecord]:
        """List employee payroll payout records inside the date range."""
