"""Health endpoint router composition for app and WSDL reachability checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from canias_ws.adapters import CaniasSoapPort


def api_create_health_router(soap_health_service: CaniasSoapPort) -> APIRouter:
    """Create health-check router with app and WSDL reachability status.

    Args:
        soap_health_service: Adapter used to probe the WSDL document.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when soap_health_service is invalid.
    """

    if soap_health_service is None:
        raise ValueError("soap_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and SOAP service health state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            ConnectionError: Raised when the WSDL health check fails.
        """

        try:
            soap_health = soap_health_service.adapter_check_health()
            payload = {
                "status": "ok",
                "app": "up",
                "soap": soap_health.status,
                "detail": soap_health.detail,
                "target": soap_health_service.adapter_source_name(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        except ConnectionError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "soap": "down",
                "detail": str(error),
                "target": soap_health_service.adapter_source_name(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
