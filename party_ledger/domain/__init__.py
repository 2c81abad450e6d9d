"""Domain models used across application layer boundaries."""

from .deadline import FetchDeadline
from .errors import (
    LedgerError,
    LedgerInputError,
    LedgerPartyNotFoundError,
    FetchCancelledError,
    NormalizationError,
    SourceUnavailableError,
    StatementTimeoutError,
    UndatedRecordError,
)
from .models import (
    EntrySide,
    HealthStatus,
    LedgerEntry,
    Party,
    PartyKind,
    RawSourceLine,
    RawSourceRecord,
    Statement,
    StatementTotals,
    StatementWarning,
    TransactionType,
)
from .parsing import (
    domain_format_amount,
    domain_normalize_optional_text,
    domain_parse_amount,
    domain_parse_document_date,
    domain_parse_request_date,
)

__all__ = [
    "EntrySide",
    "FetchCancelledError",
    "FetchDeadline",
    "HealthStatus",
    "LedgerEntry",
    "LedgerError",
    "LedgerInputError",
    "LedgerPartyNotFoundError",
    "NormalizationError",
    "Party",
    "PartyKind",
    "RawSourceLine",
    "RawSourceRecord",
    "SourceUnavailableError",
    "Statement",
    "StatementTimeoutError",
    "StatementTotals",
    "StatementWarning",
    "TransactionType",
    "UndatedRecordError",
    "domain_format_amount",
    "domain_normalize_optional_text",
    "domain_parse_amount",
    "domain_parse_document_date",
    "domain_parse_request_date",
]
