"""Tests for shared date, amount and text parsing helpers."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from party_ledger.domain import (
    LedgerInputError,
    domain_format_amount,
    domain_normalize_optional_text,
    domain_parse_amount,
    domain_parse_document_date,
    domain_parse_request_date,
)


def test_domain_parse_amount_quantizes_half_up_to_minor_unit() -> None:
    """Round amount text half-up to two places."""

    assert domain_parse_amount("10.005") == Decimal("10.01")
    assert domain_parse_amount("10.004") == Decimal("10.00")
    assert domain_parse_amount(5000) == Decimal("5000.00")


def test_domain_parse_amount_treats_missing_as_zero_and_floats_by_repr() -> None:
    """Treat None as zero and avoid float representation error."""

    assert domain_parse_amount(None) == Decimal("0.00")
    assert domain_parse_amount(0.1 + 0.2) == Decimal("0.30")
    assert domain_parse_amount(Decimal("1.5")) == Decimal("1.50")


@pytest.mark.parametrize("value", ["abc", "", True, "NaN", "Infinity"])
def test_domain_parse_amount_rejects_non_numeric_and_non_finite_values(value: object) -> None:
    """Reject values that cannot be booked as money.

    Raises:
        AssertionError: Raised when an invalid amount is accepted.
    """

    with pytest.raises(ValueError):
        domain_parse_amount(value)


def test_domain_format_amount_renders_fixed_two_places() -> None:
    assert domain_format_amount(Decimal("700")) == "700.00"
    assert domain_format_amount(Decimal("-0.5")) == "-0.50"


def test_domain_parse_document_date_accepts_dates_datetimes_and_iso_text() -> None:
    """Parse document dates from all column shapes seen in origin stores."""

    assert domain_parse_document_date(date(2024, 1, 10)) == date(2024, 1, 10)
    assert domain_parse_document_date(datetime(2024, 1, 10, 23, 5, tzinfo=timezone.utc)) == date(2024, 1, 10)
    assert domain_parse_document_date("2024-01-10") == date(2024, 1, 10)
    assert domain_parse_document_date("2024-01-10T08:30:00Z") == date(2024, 1, 10)
    assert domain_parse_document_date("2024-01-10 08:30:00") == date(2024, 1, 10)


def test_domain_parse_document_date_returns_none_for_missing_or_garbage() -> None:
    assert domain_parse_document_date(None) is None
    assert domain_parse_document_date("   ") is None
    assert domain_parse_document_date("not-a-date") is None
    assert domain_parse_document_date(20240110) is None


def test_domain_parse_request_date_rejects_malformed_input() -> None:
    """Raise LedgerInputError with the field label for malformed request dates."""

    assert domain_parse_request_date(None, "date_from") is None
    assert domain_parse_request_date(" ", "date_from") is None
    assert domain_parse_request_date("2024-02-29", "date_to") == date(2024, 2, 29)

    with pytest.raises(LedgerInputError, match="date_to"):
        domain_parse_request_date("2024-13-01", "date_to")


def test_domain_normalize_optional_text_applies_null_sentinels() -> None:
    assert domain_normalize_optional_text("  SO-1 ") == "SO-1"
    assert domain_normalize_optional_text("N/A") is None
    assert domain_normalize_optional_text("") is None
    assert domain_normalize_optional_text(42) == "42"
