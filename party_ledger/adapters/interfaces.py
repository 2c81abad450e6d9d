"""Typed interfaces for source adapter responsibilities."""

from datetime import date
from typing import Protocol

from party_ledger.domain import FetchDeadline, PartyKind, RawSourceRecord


class SourceAdapterPort(Protocol):
    """Port definition for fetching raw party records from one origin store."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for warnings and diagnostics.

        Returns:
            str: Stable source name such as `sales_orders`.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def adapter_party_kind(self) -> PartyKind:
        """Return the party kind this adapter serves.

        Returns:
            PartyKind: Served party kind.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def adapter_fetch(
        self,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> list[RawSourceRecord]:
        """Fetch raw records of one party inside the inclusive date range.

        Records outside the range must not be read from the origin store.
        Reads stop once the shared deadline is cancelled or spent.

        Args:
            party_id: Party identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional shared read deadline.

        Returns:
            list[RawSourceRecord]: Source-tagged raw records.

        Raises:
            SourceUnavailableError: Raised when the origin store cannot be read.
            FetchCancelledError: Raised when the deadline is cancelled or spent.
        """
