"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI
from sqlalchemy import Engine

from party_ledger.adapters import adapter_build_default_registry
from party_ledger.api import create_api_application
from party_ledger.config import AppSettings, config_load_settings
from party_ledger.db import SQLAlchemyDatabaseHealthService, SQLAlchemyPartySourceRepository, db_create_engine
from party_ledger.ledger import PartyStatementService, StatementAggregator


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return create_api_application(
        settings=resolved_settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        statement_service=_bootstrap_build_statement_service(resolved_settings, engine),
    )


def bootstrap_create_statement_service(settings: AppSettings | None = None) -> PartyStatementService:
    """Build the statement service for non-HTTP surfaces.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        PartyStatementService: Fully wired statement service.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return _bootstrap_build_statement_service(resolved_settings, engine)


def _bootstrap_build_statement_service(settings: AppSettings, engine: Engine) -> PartyStatementService:
    repository = SQLAlchemyPartySourceRepository(engine=engine)
    return PartyStatementService(
        repository=repository,
        aggregator=StatementAggregator(registry=adapter_build_default_registry(repository)),
        display_order=settings.statement_display_order,
        timeout_seconds=settings.statement_timeout_seconds,
    )
