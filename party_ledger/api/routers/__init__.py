"""API router package for endpoint composition."""

from .health import api_create_health_router
from .ledgers import api_create_ledgers_router, api_serialize_statement

__all__ = ["api_create_health_router", "api_create_ledgers_router", "api_serialize_statement"]
