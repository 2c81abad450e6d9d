"""Project-native typed exceptions for party ledger reconstruction failures."""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for ledger reconstruction failures."""


class LedgerInputError(LedgerError, ValueError):
    """Request input is missing or invalid; rejected before any fetch."""


class LedgerPartyNotFoundError(LedgerError, LookupError):
    """Party identifier does not resolve in its owning directory."""


class SourceUnavailableError(LedgerError, RuntimeError):
    """One origin store could not be read.

    Attributes:
        source: Source adapter or store name.
    """

    def __init__(self, message: str, source: str):
        super().__init__(message)
        self.source = source


class NormalizationError(LedgerError, ValueError):
    """One raw record cannot be mapped into ledger entries.

    Attributes:
        code: Stable warning code.
        record_id: Originating record identifier.
    """

    def __init__(self, message: str, code: str, record_id: str | None = None):
        super().__init__(message)
        self.code = code
        self.record_id = record_id


class UndatedRecordError(NormalizationError):
    """Raw record carries no document date and cannot be placed chronologically."""

    def __init__(self, message: str, record_id: str | None = None):
        super().__init__(message=message, code="undated_record", record_id=record_id)


class StatementTimeoutError(LedgerError, TimeoutError):
    """Statement build exceeded the caller deadline; no partial result is returned."""


class FetchCancelledError(LedgerError):
    """Origin store read abandoned because its statement build was cancelled or ran out of time."""
