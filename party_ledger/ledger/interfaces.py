"""Typed interfaces for ledger-layer statement construction."""

from datetime import date
from typing import Protocol

from party_ledger.domain import PartyKind, Statement


class StatementBuilderPort(Protocol):
    """Port definition for building one party statement."""

    def ledger_supported_kinds(self) -> tuple[PartyKind, ...]:
        """Return party kinds this builder can reconstruct statements for.

        Returns:
            tuple[PartyKind, ...]: Supported party kinds.

        Raises:
            RuntimeError: Raised when adapter metadata is unavailable.
        """

    async def ledger_build_statement(
        self,
        party_id: str,
        party_kind: PartyKind | str | None,
        date_from: date | None = None,
        date_to: date | None = None,
        timeout_seconds: float | None = None,
    ) -> Statement:
        """Build one chronological statement for a party.

        Args:
            party_id: Party identifier.
            party_kind: Party kind or its string value.
            date_from: Optional inclusive lower bound.
            date_to: Optional inclusive upper bound.
            timeout_seconds: Optional deadline override.

        Returns:
            Statement: Ordered, balanced statement; may carry warnings.

        Raises:
            LedgerInputError: Raised when inputs are missing or invalid.
            LedgerPartyNotFoundError: Raised when the party does not exist.
            StatementTimeoutError: Raised when the deadline is exceeded.
        """
