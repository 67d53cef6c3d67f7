"""Job-layer node executor mapping input items to CANIAS SOAP calls."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from canias_ws.adapters import (
    CaniasOperationError,
    CaniasSoapAdapterProvider,
    CaniasSoapPort,
    SoapClientOptions,
    adapter_raise_classified_error,
)
from canias_ws.domain import (
    CallIASServiceRequest,
    ListIASServicesRequest,
    LoginRequest,
    LogoutRequest,
    Operation,
    SoapCallResult,
    domain_normalize_response,
    domain_validate_service_id,
    domain_validate_session_id,
)
from canias_ws.logging import Log

from .interfaces import NodeExecutorPort, NodeOutputItem
from .parameters import NodeParameters, job_parse_node_parameters


@dataclass(frozen=True)
class NodeExecutorConfig:
    """Configuration values for node execution.

    Attributes:
        wsdl_url: WSDL endpoint of the IAS web service.
        login_request: Login credentials sent by the login operation.
        default_endpoint: Endpoint override used when an item sets none.
        default_timeout_ms: Per-call timeout used when an item sets none.
        default_disable_ssl_verification: TLS verification default for items.
        continue_on_fail: Whether failed items are recorded and the batch continues.
    """

    wsdl_url: str
    login_request: LoginRequest
    default_endpoint: str = ""
    default_timeout_ms: int = 120000
    default_disable_ssl_verification: bool = False
    continue_on_fail: bool = True


def job_build_output_record(
    result: Any,
    call_result: SoapCallResult,
    return_full: bool,
) -> dict[str, Any]:
    """Shape a normalized result into the record emitted to the host.

    Args:
        result: Normalized operation result.
        call_result: Transport triple of the call.
        return_full: Whether the raw envelope and headers are included.

    Returns:
        dict[str, Any]: `{result, rawResponse, soapHeaders}` in full mode; the
            result mapping itself, `{data: value}` for other values, or `{}`
            for None otherwise.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if return_full:
        return {
            "result": result,
            "rawResponse": call_result.raw_response,
            "soapHeaders": call_result.soap_headers,
        }
    if result is None:
        return {}
    if isinstance(result, Mapping):
        return dict(result)
    return {"data": result}


class CaniasNodeExecutor(NodeExecutorPort):
    """Sequential executor for the CANIAS web service node.

    Items are processed one at a time in input order. Each failure is
    classified once and either recorded as an error item or, when the batch
    is configured to stop on failure, raised to the caller.
    """

    def __init__(self, adapter_provider: CaniasSoapAdapterProvider, config: NodeExecutorConfig):
        """Initialize node executor dependencies.

        Args:
            adapter_provider: Provider of SOAP adapters per client option set.
            config: Node execution configuration.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if adapter_provider is None:
            raise ValueError("adapter_provider must not be None")
        if not config.wsdl_url.strip():
            raise ValueError("config.wsdl_url must not be blank")
        if config.default_timeout_ms <= 0:
            raise ValueError("config.default_timeout_ms must be > 0")

        self._adapter_provider = adapter_provider
        self._config = config

    def job_execute_items(self, items: Sequence[Mapping[str, Any]]) -> list[NodeOutputItem]:
        """Execute all items sequentially in input order.

        Args:
            items: Per-item node parameters.

        Returns:
            list[NodeOutputItem]: One output item per input item, in order.

        Raises:
            CaniasOperationError: Raised for the first failed item when
                `continue_on_fail` is disabled.
        """

        output_items: list[NodeOutputItem] = []
        for item_index, raw_parameters in enumerate(items):
            try:
                record = self._job_execute_item(item_index=item_index, raw_parameters=raw_parameters)
            except CaniasOperationError as error:
                Log.warning(str(error), item_index=item_index, operation=error.operation)
                if not self._config.continue_on_fail:
                    raise
                output_items.append(
                    NodeOutputItem(json=error.operation_error_record(), item_index=item_index, error=error)
                )
                continue
            output_items.append(NodeOutputItem(json=record, item_index=item_index))
        return output_items

    def _job_execute_item(self, item_index: int, raw_parameters: Mapping[str, Any]) -> dict[str, Any]:
        """Execute one item and return its output record.

        Args:
            item_index: Index of the input item.
            raw_parameters: Raw per-item parameters.

        Returns:
            dict[str, Any]: Output record for the item.

        Raises:
            CaniasOperationError: Raised for any failure of the item.
        """

        operation_label = str(raw_parameters.get("operation") or Operation.LOGIN.value)
        try:
            parameters = job_parse_node_parameters(raw_parameters)
            operation_label = parameters.operation.value
            Log.debug(f"Executing {operation_label} for item {item_index}")
            call_result = self._job_call_operation(parameters)
            result = domain_normalize_response(parameters.operation, call_result.result)
            return job_build_output_record(result, call_result, parameters.return_full)
        except Exception as error:
            adapter_raise_classified_error(error, item_index=item_index, operation=operation_label)

    def _job_call_operation(self, parameters: NodeParameters) -> SoapCallResult:
        """Validate inputs, then dispatch the SOAP call for the item's operation.

        Args:
            parameters: Validated item parameters.

        Returns:
            SoapCallResult: Transport triple of the call.

        Raises:
            CaniasValidationError: Raised before any network call for invalid identifiers.
            SoapTransportError: Raised when the SOAP call fails.
        """

        match parameters.operation:
            case Operation.LOGIN:
                return self._job_adapter(parameters).adapter_login(self._config.login_request)
            case Operation.LIST_IAS_SERVICES:
                request = ListIASServicesRequest(session_id=domain_validate_session_id(parameters.list_session_id))
                return self._job_adapter(parameters).adapter_list_ias_services(request)
            case Operation.CALL_IAS_SERVICE:
                request = CallIASServiceRequest(
                    session_id=domain_validate_session_id(parameters.session_id),
                    service_id=domain_validate_service_id(parameters.service_id),
                    args=parameters.parameters_service_args(),
                    return_type=parameters.return_type,
                    permanent=parameters.permanent,
                )
                return self._job_adapter(parameters).adapter_call_ias_service(request)
            case Operation.LOGOUT:
                request = LogoutRequest(session_id=domain_validate_session_id(parameters.logout_session_id))
                return self._job_adapter(parameters).adapter_logout(request)
        raise ValueError(f"Unsupported operation: {parameters.operation}")

    def _job_adapter(self, parameters: NodeParameters) -> CaniasSoapPort:
        """Return the SOAP adapter for the item's client options."""

        advanced = parameters.advanced
        options = SoapClientOptions(
            wsdl_url=self._config.wsdl_url,
            endpoint=parameters.endpoint.strip() or self._config.default_endpoint,
            timeout_ms=advanced.timeout or self._config.default_timeout_ms,
            disable_ssl_verification=(
                advanced.disable_ssl_verification
                if advanced.disable_ssl_verification is not None
                else self._config.default_disable_ssl_verification
            ),
        )
        return self._adapter_provider.adapter_for(options)
