"""Adapter layer package for party origin store boundaries."""

from .customer import InvoiceAdapter, PaymentAdapter, SalesOrderAdapter
from .employee import PayrollAdapter, PayrollRecordAdapter
from .expense import ExpenseAdapter
from .interfaces import SourceAdapterPort
from .registry import SourceAdapterRegistry, adapter_build_default_registry
from .supplier import PurchaseOrderAdapter, VendorBillAdapter, VendorPaymentAdapter

__all__ = [
	"ExpenseAdapter",
	"InvoiceAdapter",
	"PaymentAdapter",
	"PayrollAdapter",
	"PayrollRecordAdapter",
	"PurchaseOrderAdapter",
	"SalesOrderAdapter",
	"SourceAdapterPort",
	"SourceAdapterRegistry",
	"VendorBillAdapter",
	"VendorPaymentAdapter",
	"adapter_build_default_registry",
]
