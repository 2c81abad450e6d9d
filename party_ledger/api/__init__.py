"""API layer package for FastAPI application and route composition."""

from .application import create_api_application
from .routers import api_serialize_statement

__all__ = ["api_serialize_statement", "create_api_application"]
