"""FastAPI application factory for the party ledger service."""

from fastapi import FastAPI

from party_ledger.config import AppSettings
from party_ledger.db import DatabaseHealthPort
from party_ledger.ledger import StatementBuilderPort

from .routers import api_create_health_router, api_create_ledgers_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    statement_service: StatementBuilderPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        db_health_service: Origin store health service used by `/health`.
        statement_service: Statement builder used by `/ledgers`.

    Returns:
        FastAPI: Application with health and ledger routers mounted.
    """

    application = FastAPI(title="Party Ledger")

    @application.get("/", tags=["service"])
    def service_index() -> dict[str, str]:
        """Return service identity and runtime environment."""

        return {
            "service": "party-ledger",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(
        api_create_health_router(db_health_service=db_health_service, statement_service=statement_service)
    )
    application.include_router(api_create_ledgers_router(settings=settings, statement_service=statement_service))

    return application
