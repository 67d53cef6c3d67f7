"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from canias_ws.adapters import CaniasSoapAdapterPool, SoapClientOptions
from canias_ws.api import create_api_application
from canias_ws.config import AppSettings, config_load_settings
from canias_ws.domain import LoginRequest
from canias_ws.jobs import CaniasNodeExecutor, NodeExecutorConfig
from canias_ws.logging import Log


def bootstrap_build_executor_config(settings: AppSettings) -> NodeExecutorConfig:
    """Build node execution config from validated settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        NodeExecutorConfig: Execution config with login credentials and transport defaults.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return NodeExecutorConfig(
        wsdl_url=settings.canias_wsdl_url,
        login_request=LoginRequest(
            client=settings.canias_client,
            language=settings.canias_language,
            db_name=settings.canias_db_name,
            db_server=settings.canias_db_server,
            app_server=settings.canias_app_server,
            username=settings.canias_username,
            password=settings.canias_password,
        ),
        default_endpoint=settings.canias_endpoint,
        default_timeout_ms=settings.canias_timeout_ms,
        default_disable_ssl_verification=settings.canias_disable_ssl_verification,
        continue_on_fail=settings.canias_continue_on_fail,
    )


def bootstrap_create_node_executor(
    settings: AppSettings | None = None,
    adapter_pool: CaniasSoapAdapterPool | None = None,
) -> CaniasNodeExecutor:
    """Build the node executor for non-HTTP trigger surfaces.

    Returns:
        CaniasNodeExecutor: Fully wired node executor instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    Log.configure(resolved_settings.log_level)
    return CaniasNodeExecutor(
        adapter_provider=adapter_pool or CaniasSoapAdapterPool(),
        config=bootstrap_build_executor_config(resolved_settings),
    )


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    adapter_pool = CaniasSoapAdapterPool()
    soap_health_service = adapter_pool.adapter_for(
        SoapClientOptions(
            wsdl_url=settings.canias_wsdl_url,
            endpoint=settings.canias_endpoint,
            timeout_ms=settings.canias_timeout_ms,
            disable_ssl_verification=settings.canias_disable_ssl_verification,
        )
    )
    node_executor = bootstrap_create_node_executor(settings=settings, adapter_pool=adapter_pool)
    return create_api_application(
        settings=settings,
        soap_health_service=soap_health_service,
        node_executor=node_executor,
    )
