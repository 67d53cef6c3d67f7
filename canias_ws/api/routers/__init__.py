"""API router package for endpoint composition."""

from .executions import api_create_executions_router
from .health import api_create_health_router

__all__ = ["api_create_executions_router", "api_create_health_router"]
