"""Concurrent fan-out over source adapters and merge of normalized entries."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date

from party_ledger.adapters import SourceAdapterPort, SourceAdapterRegistry
from party_ledger.domain import (
    FetchCancelledError,
    FetchDeadline,
    LedgerEntry,
    NormalizationError,
    PartyKind,
    RawSourceRecord,
    SourceUnavailableError,
    StatementWarning,
)

from .normalizer import LedgerEntryNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationResult:
    """Merged output of one adapter fan-out.

    Attributes:
        entries: Normalized entries in adapter-registry order, unsorted, without balances.
        warnings: Source failures and rejected records.
    """

    entries: tuple[LedgerEntry, ...]
    warnings: tuple[StatementWarning, ...]


@dataclass(frozen=True)
class _AdapterOutcome:
    source: str
    records: tuple[RawSourceRecord, ...]
    warning: StatementWarning | None


class StatementAggregator:
    """Collect normalized entries from every adapter registered for a party kind.

    Adapters run concurrently in worker threads. An adapter failure is turned
    into a warning and never aborts the others. Cancellation of the calling
    task propagates to every in-flight adapter await. Worker threads cannot
    be interrupted, so adapters also observe the shared deadline and stop
    reading once it is cancelled.
    """

    def __init__(self, registry: SourceAdapterRegistry, normalizer: LedgerEntryNormalizer | None = None):
        """Initialize aggregator dependencies.

        Args:
            registry: Source adapter registry.
            normalizer: Optional normalizer override.

        Raises:
            ValueError: Raised when registry is invalid.
        """

        if registry is None:
            raise ValueError("registry must not be None")
        self._registry = registry
        self._normalizer = normalizer or LedgerEntryNormalizer()

    def aggregator_supported_kinds(self) -> tuple[PartyKind, ...]:
        """Return party kinds with a registered adapter set."""

        return self._registry.registry_supported_kinds()

    async def aggregator_collect(
        self,
        party_kind: PartyKind,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> AggregationResult:
        """Fan out to all adapters of the party kind and merge their entries.

        Args:
            party_kind: Party kind selecting the adapter set.
            party_id: Party identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional deadline shared with every adapter read.

        Returns:
            AggregationResult: Merged entries and collected warnings.

        Raises:
            LookupError: Raised when no adapter set is registered for the kind.
            asyncio.CancelledError: Raised when the calling task is cancelled.
            FetchCancelledError: Raised when an adapter read was abandoned on the deadline.
        """

        adapters = self._registry.registry_adapters_for(party_kind)
        outcomes = await asyncio.gather(
            *(self._aggregator_fetch_one(adapter, party_id, date_from, date_to, deadline) for adapter in adapters)
        )

        entries: list[LedgerEntry] = []
        warnings: list[StatementWarning] = []
        seen_entry_ids: set[str] = set()
        for outcome in outcomes:
            if outcome.warning is not None:
                warnings.append(outcome.warning)
            for record in outcome.records:
                try:
                    record_entries = self._normalizer.normalizer_normalize(party_kind, record)
                except NormalizationError as error:
                    logger.warning(
                        "Rejected %s record %s for %s %s: %s",
                        outcome.source,
                        record.source_record_id,
                        party_kind.value,
                        party_id,
                        error,
                    )
                    warnings.append(
                        StatementWarning(
                            source=outcome.source,
                            error=str(error),
                            code=error.code,
                            record_id=record.source_record_id,
                        )
                    )
                    continue

                for entry in record_entries:
                    if entry.id in seen_entry_ids:
                        warnings.append(
                            StatementWarning(
                                source=outcome.source,
                                error=f"duplicate entry id {entry.id}",
                                code="duplicate_entry",
                                record_id=record.source_record_id,
                            )
                        )
                        continue
                    seen_entry_ids.add(entry.id)
                    entries.append(entry)

        return AggregationResult(entries=tuple(entries), warnings=tuple(warnings))

    async def _aggregator_fetch_one(
        self,
        adapter: SourceAdapterPort,
        party_id: str,
        date_from: date | None,
        date_to: date | None,
        deadline: FetchDeadline | None = None,
    ) -> _AdapterOutcome:
        """Run one adapter in a worker thread and isolate its failure.

        Args:
            adapter: Source adapter.
            party_id: Party identifier.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            deadline: Optional deadline shared with every adapter read.

        Returns:
            _AdapterOutcome: Records on success, or a warning on failure.

        Raises:
            asyncio.CancelledError: Raised when the calling task is cancelled.
            FetchCancelledError: Raised when an adapter read was abandoned on the deadline.
        """

        source = adapter.adapter_source_name()
        try:
            records = await asyncio.to_thread(adapter.adapter_fetch, party_id, date_from, date_to, deadline)
        except FetchCancelledError:
            raise
        except SourceUnavailableError as error:
            logger.warning("Source %s unavailable for party %s: %s", source, party_id, error, exc_info=True)
            return _AdapterOutcome(
                source=source,
                records=(),
                warning=StatementWarning(source=source, error=str(error), code="source_unavailable"),
            )
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Source adapter %s failed for party %s", source, party_id)
            return _AdapterOutcome(
                source=source,
                records=(),
                warning=StatementWarning(source=source, error=f"{source} could not be read", code="source_failed"),
            )
        return _AdapterOutcome(source=source, records=tuple(records), warning=None)


__all__ = ["AggregationResult", "StatementAggregator"]
