"""CANIAS IAS web service adapter implementation on top of zeep."""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Callable, Final

from lxml import etree
import requests
from zeep import Client
from zeep.exceptions import Fault, TransportError
from zeep.helpers import serialize_object
from zeep.plugins import HistoryPlugin
from zeep.transports import Transport

from canias_ws.domain import (
    CallIASServiceRequest,
    HealthStatus,
    ListIASServicesRequest,
    LoginRequest,
    LogoutRequest,
    Operation,
    SoapCallResult,
)
from canias_ws.logging import Log

from .canias_errors import SoapTransportError
from .interfaces import CaniasSoapPort, SoapClientOptions

SoapClientFactory = Callable[[str, Transport, list[Any]], Client]
DEFAULT_MAX_ADAPTERS: Final[int] = 32


def _adapter_default_client_factory(wsdl_url: str, transport: Transport, plugins: list[Any]) -> Client:
    return Client(wsdl_url, transport=transport, plugins=plugins)


class CaniasSoapAdapter(CaniasSoapPort):
    """Adapter implementation for the CANIAS IAS rpc/encoded web service.

    The zeep client is created lazily on the first call and reused for all
    later calls of this adapter. Raw response envelopes and HTTP headers are
    captured through a zeep `HistoryPlugin`.
    """

    def __init__(
        self,
        options: SoapClientOptions,
        client_factory: SoapClientFactory | None = None,
    ):
        """Initialize the SOAP adapter.

        Args:
            options: SOAP client options.
            client_factory: Optional factory building the zeep client.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required option values are invalid.
        """

        normalized_wsdl_url = options.wsdl_url.strip()
        if not normalized_wsdl_url:
            raise ValueError("wsdl_url must not be blank")
        if options.timeout_ms <= 0:
            raise ValueError("timeout_ms must be > 0")

        self._options = options
        self._wsdl_url = normalized_wsdl_url
        self._endpoint = options.endpoint.strip()
        self._timeout_seconds = options.timeout_ms / 1000
        self._client_factory = client_factory or _adapter_default_client_factory
        self._history = HistoryPlugin()
        self._session: requests.Session | None = None
        self._service: Any = None

    def adapter_source_name(self) -> str:
        """Return the WSDL URL used as source label."""

        return self._wsdl_url

    def adapter_login(self, request: LoginRequest) -> SoapCallResult:
        """Open a CANIAS session."""

        return self._adapter_invoke(Operation.LOGIN, request.to_soap_parameters())

    def adapter_list_ias_services(self, request: ListIASServicesRequest) -> SoapCallResult:
        """List IAS services available to a session."""

        return self._adapter_invoke(Operation.LIST_IAS_SERVICES, request.to_soap_parameters())

    def adapter_call_ias_service(self, request: CallIASServiceRequest) -> SoapCallResult:
        """Call one IAS service."""

        return self._adapter_invoke(Operation.CALL_IAS_SERVICE, request.to_soap_parameters())

    def adapter_logout(self, request: LogoutRequest) -> SoapCallResult:
        """Terminate a CANIAS session."""

        return self._adapter_invoke(Operation.LOGOUT, request.to_soap_parameters())

    def adapter_check_health(self) -> HealthStatus:
        """Fetch the WSDL document to verify service reachability.

        Returns:
            HealthStatus: Healthy status payload.

        Raises:
            ConnectionError: Raised when the WSDL cannot be fetched.
        """

        try:
            response = self._adapter_session().get(self._wsdl_url, timeout=self._timeout_seconds)
            response.raise_for_status()
        except requests.exceptions.RequestException as error:
            raise ConnectionError(f"WSDL not reachable: {error}") from error
        return HealthStatus(status="ok", detail="wsdl reachable")

    def _adapter_invoke(self, operation: Operation, parameters: dict[str, Any]) -> SoapCallResult:
        """Execute one SOAP operation and capture the transport triple.

        Args:
            operation: Operation to call.
            parameters: Operation keyword arguments with wire names.

        Returns:
            SoapCallResult: Serialized result, raw envelope and response headers.

        Raises:
            SoapTransportError: Raised for SOAP faults, HTTP and network failures.
        """

        try:
            service = self._adapter_service()
            result = getattr(service, operation.value)(**parameters)
        except Fault as error:
            raise SoapTransportError(
                message=error.message or "SOAP Fault",
                root={
                    "Envelope": {
                        "Body": {
                            "Fault": {
                                "faultcode": error.code,
                                "faultstring": error.message,
                                "faultactor": error.actor,
                                "detail": error.detail,
                            }
                        }
                    }
                },
            ) from error
        except TransportError as error:
            raise SoapTransportError(
                message=error.message or f"HTTP {error.status_code}",
                status_code=error.status_code or None,
                body=error.content,
            ) from error
        except requests.exceptions.RequestException as error:
            status_code = error.response.status_code if error.response is not None else None
            raise SoapTransportError(message=str(error), status_code=status_code) from error

        return SoapCallResult(
            result=serialize_object(result, dict),
            raw_response=self._adapter_last_received_envelope(),
            soap_headers=self._adapter_last_received_headers(),
        )

    def _adapter_session(self) -> requests.Session:
        if self._session is None:
            session = requests.Session()
            session.verify = not self._options.disable_ssl_verification
            self._session = session
        return self._session

    def _adapter_service(self) -> Any:
        """Return the zeep service proxy, creating the client on first use.

        Returns:
            Any: zeep service proxy bound to the WSDL or overridden endpoint.

        Raises:
            TransportError: Raised by zeep when the WSDL cannot be loaded.
            requests.exceptions.RequestException: Raised for network failures.
        """

        if self._service is not None:
            return self._service

        transport = Transport(
            session=self._adapter_session(),
            timeout=self._timeout_seconds,
            operation_timeout=self._timeout_seconds,
        )
        client = self._client_factory(self._wsdl_url, transport, [self._history])
        Log.info(f"Created SOAP client for {self._wsdl_url}")
        if self._endpoint:
            self._service = client.create_service(self._adapter_binding_name(client), self._endpoint)
            Log.info(f"Using endpoint override {self._endpoint}")
        else:
            self._service = client.service
        return self._service

    def _adapter_binding_name(self, client: Client) -> str:
        """Return the qualified binding name of the first WSDL service port.

        Raises:
            ValueError: Raised when the WSDL declares no service port.
        """

        for service in client.wsdl.services.values():
            for port in service.ports.values():
                return port.binding.name.text
        raise ValueError("WSDL does not declare any service port")

    def _adapter_last_received_envelope(self) -> str:
        received = self._adapter_last_received()
        envelope = received.get("envelope") if received else None
        if envelope is None:
            return ""
        return etree.tostring(envelope, encoding="unicode")

    def _adapter_last_received_headers(self) -> dict[str, Any]:
        received = self._adapter_last_received()
        headers = received.get("http_headers") if received else None
        return dict(headers) if headers else {}

    def _adapter_last_received(self) -> dict[str, Any] | None:
        try:
            return self._history.last_received
        except IndexError:
            return None


class CaniasSoapAdapterPool:
    """Adapter provider caching one adapter per client option set.

    At most `max_adapters` adapters are kept; the least recently used one is
    dropped when a new option set would exceed the limit.
    """

    def __init__(
        self,
        adapter_factory: Callable[[SoapClientOptions], CaniasSoapPort] | None = None,
        max_adapters: int = DEFAULT_MAX_ADAPTERS,
    ):
        """Initialize the adapter pool.

        Args:
            adapter_factory: Optional factory building adapters, defaults to `CaniasSoapAdapter`.
            max_adapters: Maximum number of cached adapters.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when max_adapters is not positive.
        """

        if max_adapters <= 0:
            raise ValueError("max_adapters must be > 0")

        self._adapter_factory = adapter_factory or CaniasSoapAdapter
        self._max_adapters = max_adapters
        self._adapters: OrderedDict[SoapClientOptions, CaniasSoapPort] = OrderedDict()

    def adapter_for(self, options: SoapClientOptions) -> CaniasSoapPort:
        """Return the cached adapter for an option set, creating it on first use."""

        adapter = self._adapters.get(options)
        if adapter is not None:
            self._adapters.move_to_end(options)
            return adapter

        adapter = self._adapter_factory(options)
        self._adapters[options] = adapter
        if len(self._adapters) > self._max_adapters:
            evicted_options, _ = self._adapters.popitem(last=False)
            Log.debug(f"Dropped cached SOAP adapter for {evicted_options.wsdl_url}")
        return adapter
