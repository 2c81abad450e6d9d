"""Database layer package for all SQL read boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import (
	DatabaseHealthPort,
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
from .party_sources import SQLAlchemyPartySourceRepository
from .session import db_create_engine

__all__ = [
	"DatabaseHealthPort",
	"ExpenseRecord",
	"InvoiceRecord",
	"PartyDirectoryRecord",
	"PartySourceRepositoryPort",
	"PaymentRecord",
	"PayrollEntryRecord",
	"PayrollRecordRecord",
	"PurchaseOrderRecord",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyPartySourceRepository",
	"SalesOrderRecord",
	"VendorBillRecord",
	"VendorPaymentRecord",
	"db_create_engine",
]
