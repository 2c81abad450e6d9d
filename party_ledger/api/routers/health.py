"""Health endpoint router for origin store reachability and ledger capabilities."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from party_ledger.db import DatabaseHealthPort
from party_ledger.ledger import StatementBuilderPort


def api_create_health_router(
    db_health_service: DatabaseHealthPort,
    statement_service: StatementBuilderPort,
) -> APIRouter:
    """Create health-check router reporting store status and supported ledger types.

    Args:
        db_health_service: DB-layer health service interface.
        statement_service: Statement builder used to list supported ledger types.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")
    if statement_service is None:
        raise ValueError("statement_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return origin store reachability and the ledger types that can be served."""

        ledger_types = [kind.value for kind in statement_service.ledger_supported_kinds()]
        target = db_health_service.db_connection_label()
        try:
            store_health = db_health_service.db_check_health()
        except ConnectionError as error:
            return JSONResponse(
                content={
                    "status": "degraded",
                    "origin_store": "down",
                    "detail": str(error),
                    "target": target,
                    "ledger_types": ledger_types,
                },
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )

        return JSONResponse(
            content={
                "status": "ok",
                "origin_store": store_health.status,
                "detail": store_health.detail,
                "target": target,
                "ledger_types": ledger_types,
            },
            status_code=status.HTTP_200_OK,
        )

    return router
