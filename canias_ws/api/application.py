"""FastAPI application factory for the connector runtime."""

from fastapi import FastAPI

from canias_ws.adapters import CaniasSoapPort
from canias_ws.config import AppSettings
from canias_ws.jobs import NodeExecutorPort

from .routers import api_create_executions_router, api_create_health_router


def create_api_application(
    settings: AppSettings,
    soap_health_service: CaniasSoapPort,
    node_executor: NodeExecutorPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        soap_health_service: Adapter used by the health endpoint.
        node_executor: Node executor used by the execution endpoint.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    application = FastAPI(title="CANIAS Web Service Connector")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service descriptor."""

        return {
            "service": "canias-ws",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(soap_health_service=soap_health_service))
    application.include_router(api_create_executions_router(node_executor=node_executor))

    return application
