"""Party statement construction: validation, fan-out, balancing and assembly."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Callable

from party_ledger.db import PartySourceRepositoryPort
from party_ledger.domain import (
    FetchCancelledError,
    FetchDeadline,
    LedgerInputError,
    LedgerPartyNotFoundError,
    Party,
    PartyKind,
    Statement,
    StatementTimeoutError,
)

from .aggregator import StatementAggregator
from .balance import ledger_compute_running_balances, ledger_compute_totals, ledger_filter_date_range
from .statement import ledger_assemble_statement

logger = logging.getLogger(__name__)


class PartyStatementService:
    """Build party statements from the registered source adapters.

    The statement reflects the origin stores as of fetch start (`as_of_utc`).
    Adapters read independent stores without a shared snapshot, so a write
    landing during the fan-out may be visible to one source and not another.
    """

    def __init__(
        self,
        repository: PartySourceRepositoryPort,
        aggregator: StatementAggregator,
        display_order: str = "desc",
        timeout_seconds: float = 15.0,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize statement service dependencies.

        Args:
            repository: DB-layer repository used for party directory lookups.
            aggregator: Adapter fan-out aggregator.
            display_order: `desc` for newest-first output, `asc` for oldest-first.
            timeout_seconds: Default deadline for one statement build.
            clock: Optional UTC clock override.

        Raises:
            ValueError: Raised when dependencies or options are invalid.
        """

        if repository is None:
            raise ValueError("repository must not be None")
        if aggregator is None:
            raise ValueError("aggregator must not be None")
        if display_order not in {"asc", "desc"}:
            raise ValueError(f"unsupported display_order={display_order}")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._repository = repository
        self._aggregator = aggregator
        self._display_order = display_order
        self._timeout_seconds = timeout_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def ledger_supported_kinds(self) -> tuple[PartyKind, ...]:
        """Return party kinds with a registered adapter set."""

        return self._aggregator.aggregator_supported_kinds()

    async def ledger_build_statement(
        self,
        party_id: str,
        party_kind: PartyKind | str | None,
        date_from: date | None = None,
        date_to: date | None = None,
        timeout_seconds: float | None = None,
    ) -> Statement:
        """Build one chronological statement for a party.

        Inputs are validated before any fetch. Adapter failures and rejected
        records degrade the statement to a partial one with warnings. Deadline
        expiry returns no statement at all and stops the pending origin store
        reads of this build.

        Args:
            party_id: Party identifier.
            party_kind: Party kind or its string value.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            timeout_seconds: Optional deadline override.

        Returns:
            Statement: Ordered, balanced statement.

        Raises:
            LedgerInputError: Raised when inputs are missing or invalid.
            LedgerPartyNotFoundError: Raised when the party does not exist.
            SourceUnavailableError: Raised when the party directory cannot be read.
            StatementTimeoutError: Raised when the deadline is exceeded.
        """

        resolved_kind = self._ledger_resolve_party_kind(party_kind)
        normalized_party_id = party_id.strip() if isinstance(party_id, str) else ""
        if not normalized_party_id:
            raise LedgerInputError("Ledger party id is required")
        if date_from is not None and date_to is not None and date_from > date_to:
            raise LedgerInputError("date_from must not be after date_to")

        deadline_seconds = self._timeout_seconds if timeout_seconds is None else timeout_seconds
        if deadline_seconds <= 0:
            raise LedgerInputError("timeout_seconds must be positive")

        deadline = FetchDeadline(deadline_seconds)
        try:
            return await asyncio.wait_for(
                self._ledger_build(normalized_party_id, resolved_kind, date_from, date_to, deadline),
                timeout=deadline_seconds,
            )
        except (asyncio.TimeoutError, FetchCancelledError) as error:
            logger.warning(
                "Statement build for %s %s exceeded %.3fs deadline",
                resolved_kind.value,
                normalized_party_id,
                deadline_seconds,
            )
            raise StatementTimeoutError(
                f"statement build exceeded {deadline_seconds}s deadline"
            ) from error
        finally:
            # Adapter threads outlive task cancellation; stop their pending reads.
            deadline.deadline_cancel()

    async def _ledger_build(
        self,
        party_id: str,
        party_kind: PartyKind,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline,
    ) -> Statement:
        """Resolve the party, collect entries, balance them and assemble the statement."""

        as_of_utc = self._clock()
        directory_record = await asyncio.to_thread(self._repository.db_party_get, party_kind.value, party_id, deadline)
        if directory_record is None:
            raise LedgerPartyNotFoundError(f"{party_kind.value} {party_id} not found")

        aggregation = await self._aggregator.aggregator_collect(party_kind, party_id, date_from, date_to, deadline)
        in_range_entries = ledger_filter_date_range(aggregation.entries, date_from, date_to)
        balanced_entries = ledger_compute_running_balances(in_range_entries, display_order=self._display_order)
        statement = ledger_assemble_statement(
            party=Party(party_id=party_id, kind=party_kind, name=directory_record.name),
            entries=balanced_entries,
            date_from=date_from,
            date_to=date_to,
            as_of_utc=as_of_utc,
            totals=ledger_compute_totals(balanced_entries),
            warnings=aggregation.warnings,
        )
        logger.info(
            "Built %s statement for %s: %d entries, %d warnings",
            party_kind.value,
            party_id,
            statement.entry_count,
            len(statement.warnings),
        )
        return statement

    def _ledger_resolve_party_kind(self, party_kind: PartyKind | str | None) -> PartyKind:
        """Resolve and validate the requested party kind.

        Args:
            party_kind: Party kind or its string value.

        Returns:
            PartyKind: Resolved kind.

        Raises:
            LedgerInputError: Raised when the kind is missing or unsupported.
        """

        if isinstance(party_kind, PartyKind):
            resolved_kind = party_kind
        else:
            if party_kind is None or not str(party_kind).strip():
                raise LedgerInputError("Ledger type is required")
            try:
                resolved_kind = PartyKind(str(party_kind).strip().lower())
            except ValueError as error:
                raise LedgerInputError("Unsupported ledger type") from error

        if resolved_kind not in self.ledger_supported_kinds():
            raise LedgerInputError("Unsupported ledger type")
        return resolved_kind


__all__ = ["PartyStatementService"]
