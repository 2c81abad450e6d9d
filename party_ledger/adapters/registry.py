"""Source adapter registry keyed by party kind."""

from __future__ import annotations

from party_ledger.db import PartySourceRepositoryPort
from party_ledger.domain import PartyKind

from .customer import InvoiceAdapter, PaymentAdapter, SalesOrderAdapter
from .employee import PayrollAdapter, PayrollRecordAdapter
from .expense import ExpenseAdapter
from .interfaces import SourceAdapterPort
from .supplier import PurchaseOrderAdapter, VendorBillAdapter, VendorPaymentAdapter


class SourceAdapterRegistry:
    """Fixed adapter sets selected by party kind."""

    def __init__(self, adapters_by_kind: dict[PartyKind, tuple[SourceAdapterPort, ...]]):
        """Initialize registry with one adapter set per party kind.

        Args:
            adapters_by_kind: Adapter tuples keyed by party kind.

        Raises:
            ValueError: Raised when a set is empty, an adapter serves a different
                kind, or two adapters of one set share a source name.
        """

        if adapters_by_kind is None:
            raise ValueError("adapters_by_kind must not be None")

        for party_kind, adapters in adapters_by_kind.items():
            if not adapters:
                raise ValueError(f"adapter set for {party_kind.value} must not be empty")
            source_names = [adapter.adapter_source_name() for adapter in adapters]
            if len(set(source_names)) != len(source_names):
                raise ValueError(f"duplicate source names for {party_kind.value}: {source_names}")
            for adapter in adapters:
                if adapter.adapter_party_kind() != party_kind:
                    raise ValueError(
                        f"adapter {adapter.adapter_source_name()} serves "
                        f"{adapter.adapter_party_kind().value}, not {party_kind.value}"
                    )

        self._adapters_by_kind = dict(adapters_by_kind)

    def registry_supported_kinds(self) -> tuple[PartyKind, ...]:
        """Return party kinds with a registered adapter set."""

        return tuple(kind for kind in PartyKind if kind in self._adapters_by_kind)

    def registry_adapters_for(self, party_kind: PartyKind) -> tuple[SourceAdapterPort, ...]:
        """Return the adapter set for one party kind.

        Args:
            party_kind: Party kind.

        Returns:
            tuple[SourceAdapterPort, ...]: Registered adapters in fixed order.

        Raises:
            LookupError: Raised when no adapter set is registered for the kind.
        """

        adapters = self._adapters_by_kind.get(party_kind)
        if adapters is None:
            raise LookupError(f"no source adapters registered for party_kind={party_kind}")
        return adapters


def adapter_build_default_registry(repository: PartySourceRepositoryPort) -> SourceAdapterRegistry:
    """Build the production adapter registry over one source repository.

    Args:
        repository: DB-layer party source repository.

    Returns:
        SourceAdapterRegistry: Registry with customer, supplier and employee adapter sets.

    Raises:
        ValueError: Raised when repository is invalid.
    """

    if repository is None:
        raise ValueError("repository must not be None")

    return SourceAdapterRegistry(
        {
            PartyKind.CUSTOMER: (
                SalesOrderAdapter(repository),
                PaymentAdapter(repository),
                InvoiceAdapter(repository),
            ),
            PartyKind.SUPPLIER: (
                PurchaseOrderAdapter(repository),
                VendorPaymentAdapter(repository),
                ExpenseAdapter(repository, PartyKind.SUPPLIER),
                VendorBillAdapter(repository),
            ),
            PartyKind.EMPLOYEE: (
                PayrollAdapter(repository),
                ExpenseAdapter(repository, PartyKind.EMPLOYEE),
                PayrollRecordAdapter(repository),
            ),
        }
    )


__all__ = ["SourceAdapterRegistry", "adapter_build_default_registry"]
