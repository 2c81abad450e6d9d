"""Ledger statement API router composition."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from party_ledger.config import AppSettings
from party_ledger.domain import (
    LedgerEntry,
    LedgerInputError,
    LedgerPartyNotFoundError,
    Statement,
    StatementTimeoutError,
    StatementWarning,
    domain_format_amount,
    domain_parse_request_date,
)
from party_ledger.ledger import StatementBuilderPort

logger = logging.getLogger(__name__)


def api_create_ledgers_router(settings: AppSettings, statement_service: StatementBuilderPort) -> APIRouter:
    """Create router exposing party statement reads.

    Args:
        settings: Runtime settings used for the statement deadline.
        statement_service: Ledger-layer statement builder.

    Returns:
        APIRouter: Router exposing `/ledgers/{party_id}`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if statement_service is None:
        raise ValueError("statement_service must not be None")

    router = APIRouter(prefix="/ledgers", tags=["ledgers"])

    @router.get("/{party_id}")
    async def api_ledger_statement_get(
        party_id: str,
        ledger_type: str | None = Query(default=None, alias="type"),
        date_from: str | None = Query(default=None),
        date_to: str | None = Query(default=None),
    ) -> JSONResponse:
        """Return one party statement, newest entry first.

        Args:
            party_id: Party identifier.
            ledger_type: Party kind (`customer`, `supplier`, `employee`).
            date_from: Optional inclusive ISO lower date bound.
            date_to: Optional inclusive ISO upper date bound.

        Returns:
            JSONResponse: Statement envelope, or an error envelope.
        """

        try:
            parsed_date_from = domain_parse_request_date(date_from, "date_from")
            parsed_date_to = domain_parse_request_date(date_to, "date_to")
            statement = await statement_service.ledger_build_statement(
                party_id=party_id,
                party_kind=ledger_type,
                date_from=parsed_date_from,
                date_to=parsed_date_to,
                timeout_seconds=settings.statement_timeout_seconds,
            )
        except LedgerInputError as error:
            return api_error_response(str(error), status.HTTP_400_BAD_REQUEST)
        except LedgerPartyNotFoundError:
            return api_error_response("Ledger party not found", status.HTTP_404_NOT_FOUND)
        except StatementTimeoutError:
            return api_error_response("Ledger statement timed out", status.HTTP_504_GATEWAY_TIMEOUT)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Error fetching ledger transactions for %s %s", ledger_type, party_id)
            return api_error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return JSONResponse(content=api_serialize_statement(statement), status_code=status.HTTP_200_OK)

    return router


def api_error_response(message: str, status_code: int) -> JSONResponse:
    """Build one error envelope response.

    Args:
        message: Caller-safe error message.
        status_code: HTTP status code.

    Returns:
        JSONResponse: `{success: false, error}` payload.
    """

    return JSONResponse(content={"success": False, "error": message}, status_code=status_code)


def api_serialize_statement(statement: Statement) -> dict[str, object]:
    """Serialize one statement to the response envelope.

    Args:
        statement: Balanced statement.

    Returns:
        dict[str, object]: JSON-serializable `{success, data, meta}` payload.
    """

    meta: dict[str, object] = {
        "ledger_id": statement.party.party_id,
        "ledger_type": statement.party.kind.value,
        "party_name": statement.party.name,
        "transaction_count": statement.entry_count,
        "date_range": {
            "from": None if statement.date_from is None else statement.date_from.isoformat(),
            "to": None if statement.date_to is None else statement.date_to.isoformat(),
        },
        "as_of_utc": statement.as_of_utc.isoformat(),
        "totals": {
            "total_debit": domain_format_amount(statement.totals.total_debit),
            "total_credit": domain_format_amount(statement.totals.total_credit),
            "closing_balance": domain_format_amount(statement.totals.closing_balance),
        },
    }
    if statement.warnings:
        meta["warnings"] = [api_serialize_warning(warning) for warning in statement.warnings]

    return {
        "success": True,
        "data": [api_serialize_entry(entry) for entry in statement.entries],
        "meta": meta,
    }


def api_serialize_entry(entry: LedgerEntry) -> dict[str, object]:
    """Serialize one balanced ledger entry.

    Args:
        entry: Ledger entry with balance assigned.

    Returns:
        dict[str, object]: JSON-serializable entry payload.
    """

    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "description": entry.description,
        "reference_number": entry.reference_number,
        "transaction_type": entry.transaction_type.value,
        "debit_amount": domain_format_amount(entry.debit_amount),
        "credit_amount": domain_format_amount(entry.credit_amount),
        "balance": None if entry.balance is None else domain_format_amount(entry.balance),
        "source_document": entry.source_document,
        "status": entry.status,
        "document_id": entry.document_id,
    }


def api_serialize_warning(warning: StatementWarning) -> dict[str, object]:
    """Serialize one statement warning."""

    return {
        "source": warning.source,
        "error": warning.error,
        "code": warning.code,
        "record_id": warning.record_id,
    }


__all__ = [
    "api_create_ledgers_router",
    "api_error_response",
    "api_serialize_entry",
    "api_serialize_statement",
    "api_serialize_warning",
]
