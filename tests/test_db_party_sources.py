"""Regression tests for fixed SQL templates in party source reads."""

from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from typing import Callable

import pytest
from sqlalchemy.exc import OperationalError

from party_ledger.db import SQLAlchemyPartySourceRepository
from party_ledger.domain import FetchCancelledError, FetchDeadline, SourceUnavailableError


class _MappingResultStub:
    """Stub mapping result wrapper for SQLAlchemy-like query responses."""

    def __init__(self, rows: list[dict]):
        self._rows = rows

    def mappings(self) -> _MappingResultStub:
        return self

    def all(self) -> list[dict]:
        return self._rows


class _TransactionStub:
    def __enter__(self) -> _TransactionStub:
        return self

    def __exit__(self, exc_type, exc, traceback) -> bool:
        _ = (exc_type, exc, traceback)
        return False


class _ConnectionStub:
    """Connection stub capturing executed SQL and parameters."""

    def __init__(
        self,
        rows: list[dict],
        error: Exception | None = None,
        dialect_name: str = "postgresql",
        on_error: Callable[[], None] | None = None,
    ):
        self._rows = rows
        self._error = error
        self._on_error = on_error
        self.dialect = SimpleNamespace(name=dialect_name)
        self.executed_queries: list[str] = []
        self.executed_parameters: list[dict] = []
        self.transactions = 0

    def __enter__(self) -> _ConnectionStub:
        return self

    def __exit__(self, exc_type, exc, traceback) -> bool:
        _ = (exc_type, exc, traceback)
        return False

    def begin(self) -> _TransactionStub:
        self.transactions += 1
        return _TransactionStub()

    def execute(self, statement, parameters: dict):
        """Capture execute input and return deterministic row result.

        Args:
            statement: SQLAlchemy text clause.
            parameters: Bound query parameters.

        Returns:
            _MappingResultStub: Query result stub.

        Raises:
            Exception: Raised for data queries when the stub is configured to fail.
        """

        query = getattr(statement, "text", str(statement))
        self.executed_queries.append(query)
        self.executed_parameters.append(parameters)
        if self._error is not None and "set_config" not in query:
            if self._on_error is not None:
                self._on_error()
            raise self._error
        return _MappingResultStub(self._rows)


class _EngineStub:
    """Engine stub returning one shared connection stub."""

    def __init__(self, connection: _ConnectionStub):
        self._connection = connection

    def connect(self) -> _ConnectionStub:
        return self._connection


def _build_repository(
    rows: list[dict],
    error: Exception | None = None,
    dialect_name: str = "postgresql",
    on_error: Callable[[], None] | None = None,
):
    connection = _ConnectionStub(rows=rows, error=error, dialect_name=dialect_name, on_error=on_error)
    return SQLAlchemyPartySourceRepository(engine=_EngineStub(connection)), connection


def test_db_party_get_queries_owning_directory_table() -> None:
    """Resolve each party kind against its own directory table."""

    repository, connection = _build_repository([{"id": 7, "name": "Acme Traders"}])

    record = repository.db_party_get("supplier", " 7 ")

    assert record is not None
    assert record.party_id == "7"
    assert record.name == "Acme Traders"
    assert "FROM suppliers" in connection.executed_queries[0]
    assert connection.executed_parameters[0] == {"party_id": "7"}


def test_db_party_get_returns_none_for_unknown_party_and_rejects_unknown_kind() -> None:
    repository, _ = _build_repository([])

    assert repository.db_party_get("customer", "c-404") is None
    with pytest.raises(ValueError):
        repository.db_party_get("vendor", "c-1")


def test_db_sales_order_list_binds_party_and_iso_date_bounds() -> None:
    """Bind date bounds as ISO text and order by document date then id.

    Raises:
        AssertionError: Raised when query template or parameters deviate.
    """

    repository, connection = _build_repository(
        [
            {
                "id": 11,
                "order_number": "SO-11",
                "document_date": date(2024, 1, 1),
                "final_price": 5000,
                "discount_amount": None,
                "freight_charges": 12.5,
                "status": "confirmed",
            }
        ]
    )

    (record,) = repository.db_sales_order_list_for_customer("c-1", date(2024, 1, 1), None)

    query = connection.executed_queries[0]
    assert "FROM sales_orders" in query
    assert "COALESCE(order_date, created_at)" in query
    assert "CAST(:date_from AS date) IS NULL" in query
    assert query.rstrip().endswith("ORDER BY document_date asc, id asc")
    assert connection.executed_parameters[0] == {"party_id": "c-1", "date_from": "2024-01-01", "date_to": None}
    assert record.sales_order_id == "11"
    assert record.final_price == "5000"
    assert record.discount_amount is None
    assert record.freight_charges == "12.5"


def test_db_standalone_invoice_list_excludes_sales_order_invoices() -> None:
    repository, connection = _build_repository([])

    assert repository.db_invoice_list_standalone_for_customer("c-1", None, None) == []
    assert "sales_order_id IS NULL" in connection.executed_queries[0]


def test_db_invoice_id_list_covers_direct_and_sales_order_links() -> None:
    repository, connection = _build_repository([{"id": 3}, {"id": 1}, {"id": 3}])

    invoice_ids = repository.db_invoice_id_list_for_customer("c-1")

    assert invoice_ids == ["1", "3"]
    query = connection.executed_queries[0]
    assert "LEFT JOIN sales_orders" in query
    assert "i.customer_id = :party_id OR so.customer_id = :party_id" in query


def test_db_payment_list_skips_query_without_invoice_ids() -> None:
    repository, connection = _build_repository([])

    assert repository.db_payment_list_for_invoices([], None, None) == []
    assert connection.executed_queries == []


def test_db_payment_list_binds_invoice_ids_as_expanding_list() -> None:
    repository, connection = _build_repository(
        [
            {
                "id": 5,
                "invoice_id": 3,
                "document_date": date(2024, 1, 15),
                "amount": "4000.00",
                "method": "bank",
                "reference": None,
            }
        ]
    )

    (record,) = repository.db_payment_list_for_invoices(["1", "3"], None, date(2024, 1, 31))

    assert "invoice_id IN :invoice_ids" in connection.executed_queries[0]
    assert connection.executed_parameters[0]["invoice_ids"] == ["1", "3"]
    assert connection.executed_parameters[0]["date_to"] == "2024-01-31"
    assert record.payment_id == "5"
    assert record.invoice_id == "3"


def test_db_expense_list_filters_by_entity_type() -> None:
    repository, connection = _build_repository([])

    repository.db_expense_list_for_party("employee", "e-1", None, None)

    assert "entity_type = :entity_type AND entity_id = :party_id" in connection.executed_queries[0]
    assert connection.executed_parameters[0]["entity_type"] == "employee"


@pytest.mark.parametrize(
    ("method_name", "table_name"),
    [
        ("db_purchase_order_list_for_supplier", "purchase_orders"),
        ("db_vendor_payment_list_for_supplier", "vendor_payment_history"),
        ("db_vendor_bill_list_for_supplier", "vendor_bills"),
        ("db_payroll_entry_list_for_employee", "payroll_entries"),
        ("db_payroll_record_list_for_employee", "payroll_records"),
    ],
)
def test_db_party_list_methods_use_fixed_table_templates(method_name: str, table_name: str) -> None:
    repository, connection = _build_repository([])

    assert getattr(repository, method_name)("p-1", None, None) == []
    assert f"FROM {table_name}" in connection.executed_queries[0]
    assert connection.executed_parameters[0] == {"party_id": "p-1", "date_from": None, "date_to": None}


def test_db_source_read_failure_raises_source_unavailable() -> None:
    """Wrap driver failures without leaking driver detail into the message."""

    repository, _ = _build_repository([], error=OperationalError("SELECT 1", {}, Exception("password=secret")))

    with pytest.raises(SourceUnavailableError) as error_info:
        repository.db_vendor_bill_list_for_supplier("s-1", None, None)

    assert error_info.value.source == "vendor_bills"
    assert str(error_info.value) == "vendor_bills read failed"


def test_db_party_list_rejects_blank_party_id() -> None:
    repository, connection = _build_repository([])

    with pytest.raises(ValueError):
        repository.db_sales_order_list_for_customer("  ", None, None)
    assert connection.executed_queries == []


def test_db_payment_list_batches_large_invoice_id_lists() -> None:
    """Split the invoice IN list into bounded, sorted, de-duplicated batches."""

    repository, connection = _build_repository([])
    invoice_ids = [f"{index:05d}" for index in range(2500)]

    assert repository.db_payment_list_for_invoices(list(reversed(invoice_ids)) + ["00001"], None, None) == []

    batches = [parameters["invoice_ids"] for parameters in connection.executed_parameters]
    assert [len(batch) for batch in batches] == [1000, 1000, 500]
    assert [invoice_id for batch in batches for invoice_id in batch] == invoice_ids


def test_db_source_read_bounds_server_statement_timeout_by_remaining_deadline() -> None:
    """Run the query in a transaction whose statement_timeout is the time left."""

    now = [100.0]
    deadline = FetchDeadline(2.5, clock=lambda: now[0])
    repository, connection = _build_repository([])

    assert repository.db_vendor_bill_list_for_supplier("s-1", None, None, deadline) == []

    assert connection.transactions == 1
    assert "set_config('statement_timeout', :statement_timeout, true)" in connection.executed_queries[0]
    assert connection.executed_parameters[0] == {"statement_timeout": "2500"}
    assert "FROM vendor_bills" in connection.executed_queries[1]


def test_db_source_read_skips_statement_timeout_for_other_dialects() -> None:
    repository, connection = _build_repository([], dialect_name="sqlite")

    repository.db_vendor_bill_list_for_supplier("s-1", None, None, FetchDeadline(2.5))

    assert connection.transactions == 0
    assert len(connection.executed_queries) == 1


def test_db_source_read_refuses_to_start_after_deadline_cancelled() -> None:
    repository, connection = _build_repository([{"id": 1}])
    deadline = FetchDeadline(5.0)
    deadline.deadline_cancel()

    with pytest.raises(FetchCancelledError, match="payroll_records"):
        repository.db_payroll_record_list_for_employee("e-1", None, None, deadline)
    assert connection.executed_queries == []


def test_db_source_read_interrupted_by_deadline_raises_cancelled() -> None:
    """Report a server-aborted read past the deadline as cancelled, not unavailable."""

    now = [0.0]
    deadline = FetchDeadline(1.0, clock=lambda: now[0])

    def _server_timeout_fires() -> None:
        now[0] = 1.5

    repository, connection = _build_repository(
        [],
        error=OperationalError("SELECT 1", {}, Exception("canceling statement due to statement timeout")),
        on_error=_server_timeout_fires,
    )

    with pytest.raises(FetchCancelledError):
        repository.db_sales_order_list_for_customer("c-1", None, None, deadline)
    assert connection.executed_parameters[0] == {"statement_timeout": "1000"}
    assert "FROM sales_orders" in connection.executed_queries[1]
