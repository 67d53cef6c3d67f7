"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from canias_ws.domain import (
    CallIASServiceRequest,
    HealthStatus,
    ListIASServicesRequest,
    LoginRequest,
    LogoutRequest,
    SoapCallResult,
)


@dataclass(frozen=True)
class SoapClientOptions:
    """Options that identify one reusable SOAP client.

    Attributes:
        wsdl_url: WSDL document URL of the IAS web service.
        endpoint: Optional service address overriding the WSDL binding address.
        timeout_ms: Per-call timeout in milliseconds.
        disable_ssl_verification: Whether TLS certificate verification is skipped.
    """

    wsdl_url: str
    endpoint: str = ""
    timeout_ms: int = 120000
    disable_ssl_verification: bool = False


class CaniasSoapPort(Protocol):
    """Port definition for the four CANIAS IAS web service operations."""

    def adapter_source_name(self) -> str:
        """Return adapter source identifier for diagnostics.

        Returns:
            str: Human-readable upstream source identifier.

        Raises:
            RuntimeError: Raised when source metadata is unavailable.
        """

    def adapter_login(self, request: LoginRequest) -> SoapCallResult:
        """Open a CANIAS session.

        Args:
            request: Login credentials.

        Returns:
            SoapCallResult: Raw login result triple.

        Raises:
            SoapTransportError: Raised when the SOAP call fails.
        """

    def adapter_list_ias_services(self, request: ListIASServicesRequest) -> SoapCallResult:
        """List IAS services available to a session.

        Args:
            request: Session-bound list request.

        Returns:
            SoapCallResult: Raw list result triple.

        Raises:
            SoapTransportError: Raised when the SOAP call fails.
        """

    def adapter_call_ias_service(self, request: CallIASServiceRequest) -> SoapCallResult:
        """Call one IAS service.

        Args:
            request: Service call request.

        Returns:
            SoapCallResult: Raw service result triple.

        Raises:
            SoapTransportError: Raised when the SOAP call fails.
        """

    def adapter_logout(self, request: LogoutRequest) -> SoapCallResult:
        """Terminate a CANIAS session.

        Args:
            request: Session-bound logout request.

        Returns:
            SoapCallResult: Raw logout result triple.

        Raises:
            SoapTransportError: Raised when the SOAP call fails.
        """

    def adapter_check_health(self) -> HealthStatus:
        """Check that the WSDL document is reachable.

        Returns:
            HealthStatus: Healthy status payload.

        Raises:
            ConnectionError: Raised when the WSDL cannot be fetched.
        """


class CaniasSoapAdapterProvider(Protocol):
    """Provider handing out SOAP adapters per client option set."""

    def adapter_for(self, options: SoapClientOptions) -> CaniasSoapPort:
        """Return the adapter bound to an option set.

        Args:
            options: SOAP client options.

        Returns:
            CaniasSoapPort: Adapter reused for identical options.

        Raises:
            ValueError: Raised when options are invalid.
        """
