"""Ledger layer package for normalization, balancing and statement boundaries."""

from .aggregator import AggregationResult, StatementAggregator
from .balance import (
	ledger_compute_running_balances,
	ledger_compute_totals,
	ledger_filter_date_range,
	ledger_sort_chronological,
)
from .interfaces import StatementBuilderPort
from .normalizer import LEDGER_SIGN_TABLE, LedgerEntryNormalizer
from .statement import ledger_assemble_statement
from .statement_service import PartyStatementService

__all__ = [
	"AggregationResult",
	"LEDGER_SIGN_TABLE",
	"LedgerEntryNormalizer",
	"PartyStatementService",
	"StatementAggregator",
	"StatementBuilderPort",
	"ledger_assemble_statement",
	"ledger_compute_running_balances",
	"ledger_compute_totals",
	"ledger_filter_date_range",
	"ledger_sort_chronological",
]
