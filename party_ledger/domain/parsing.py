"""Shared date, amount and text normalization helpers.

This module centralizes value parsing used by source adapters and the request
layer so document dates and money amounts stay deterministic across sources.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import LedgerInputError

_DOMAIN_MINOR_UNIT = Decimal("0.01")

_DOMAIN_NULL_SENTINELS = frozenset({"-", "--", "N/A", "null"})


def domain_normalize_optional_text(value: object | None) -> str | None:
    """Normalize one optional text value using shared null-sentinel policy.

    Args:
        value: Candidate value from a source row.

    Returns:
        str | None: Stripped text, or None when missing/sentinel.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)

    normalized_value = value.strip()
    if not normalized_value:
        return None
    if normalized_value in _DOMAIN_NULL_SENTINELS:
        return None
    return normalized_value


def domain_parse_document_date(value: object | None) -> date | None:
    """Parse one document date value from a source row.

    Args:
        value: `date`, `datetime` or ISO-8601 text from the origin store.

    Returns:
        date | None: Parsed document date, or None when missing or unparseable.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    normalized_value = value.strip()
    if not normalized_value:
        return None

    for candidate in _domain_build_date_candidates(normalized_value):
        try:
            return date.fromisoformat(candidate)
        except ValueError:
            pass

        try:
            return datetime.fromisoformat(candidate).date()
        except ValueError:
            continue

    return None


def domain_parse_request_date(value: str | None, field_name: str) -> date | None:
    """Parse one optional caller-supplied ISO date.

    Args:
        value: Optional ISO date text (`YYYY-MM-DD`).
        field_name: Field label used in error messages.

    Returns:
        date | None: Parsed date, or None when value is absent or blank.

    Raises:
        LedgerInputError: Raised when the value is not a valid ISO date.
    """

    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as error:
        raise LedgerInputError(f"{field_name} must be an ISO date (YYYY-MM-DD): {value}") from error


def domain_parse_amount(value: object | None) -> Decimal:
    """Parse one monetary amount into a minor-unit quantized decimal.

    Args:
        value: Numeric, decimal or text amount; None counts as zero.

    Returns:
        Decimal: Amount rounded half-up to two decimal places.

    Raises:
        ValueError: Raised when the value is not a finite number.
    """

    if value is None:
        return Decimal("0.00")
    if isinstance(value, bool):
        raise ValueError(f"amount must be numeric: {value!r}")
    if isinstance(value, float):
        # Binary floats go through repr to avoid carrying their representation error.
        value = repr(value)

    try:
        parsed_value = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise ValueError(f"amount must be numeric: {value!r}") from error

    if not parsed_value.is_finite():
        raise ValueError(f"amount must be finite: {value!r}")
    return parsed_value.quantize(_DOMAIN_MINOR_UNIT, rounding=ROUND_HALF_UP)


def domain_format_amount(value: Decimal) -> str:
    """Format one amount as a fixed two-place decimal string.

    Args:
        value: Decimal amount.

    Returns:
        str: Amount text such as `5000.00`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return str(value.quantize(_DOMAIN_MINOR_UNIT, rounding=ROUND_HALF_UP))


def _domain_build_date_candidates(normalized_value: str) -> list[str]:
    """Build ordered de-duplicated date parse candidates.

    Args:
        normalized_value: Stripped source date value.

    Returns:
        list[str]: Candidate values, full value first.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    candidate_values: list[str] = [normalized_value]
    if normalized_value.endswith("Z"):
        candidate_values.append(f"{normalized_value[:-1]}+00:00")
    for separator in ("T", " "):
        if separator in normalized_value:
            candidate_values.append(normalized_value.split(separator, maxsplit=1)[0])

    seen_values: set[str] = set()
    unique_candidates: list[str] = []
    for candidate in candidate_values:
        if candidate in seen_values:
            continue
        seen_values.add(candidate)
        unique_candidates.append(candidate)
    return unique_candidates


__all__ = [
    "domain_format_amount",
    "domain_normalize_optional_text",
    "domain_parse_amount",
    "domain_parse_document_date",
    "domain_parse_request_date",
]
