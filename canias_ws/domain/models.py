"""Typed domain models shared across runtime layers.

This module provides request contracts for the four CANIAS IAS web service
operations together with the SOAP fault and transport result shapes used by
the adapter and job layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Operation(str, Enum):
    """Supported CANIAS IAS web service operations."""

    LOGIN = "login"
    LIST_IAS_SERVICES = "listIASServices"
    CALL_IAS_SERVICE = "callIASService"
    LOGOUT = "logout"


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by health-check surfaces.

    Attributes:
        status: Overall status text for service health.
        detail: Additional message suitable for operational diagnostics.
    """

    status: str
    detail: str


@dataclass(frozen=True)
class LoginRequest:
    """Login request parameters (WSDL `loginRequest` message).

    Attributes:
        client: CANIAS client number.
        language: Language code, e.g. `T` or `E`.
        db_name: Database name.
        db_server: Database server name.
        app_server: Application server address with port.
        username: CANIAS user name.
        password: CANIAS password.
    """

    client: str
    language: str
    db_name: str
    db_server: str
    app_server: str
    username: str
    password: str

    def to_soap_parameters(self) -> dict[str, Any]:
        """Render request fields with their wire names.

        Returns:
            dict[str, Any]: SOAP operation keyword arguments.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "p_strClient": self.client,
            "p_strLanguage": self.language,
            "p_strDBName": self.db_name,
            "p_strDBServer": self.db_server,
            "p_strAppServer": self.app_server,
            "p_strUserName": self.username,
            "p_strPassword": self.password,
        }


@dataclass(frozen=True)
class ListIASServicesRequest:
    """List IAS services request parameters (WSDL `listIASServicesRequest`)."""

    session_id: str

    def to_soap_parameters(self) -> dict[str, Any]:
        """Render request fields with their wire names."""

        return {"p_strSessionId": self.session_id}


@dataclass(frozen=True)
class CallIASServiceRequest:
    """Call IAS service request parameters (WSDL `callIASServiceRequest`).

    Attributes:
        session_id: Session identifier obtained from login.
        service_id: Target IAS service identifier.
        args: Service argument string, raw or JSON-encoded.
        return_type: Return type expected by the service, e.g. `json`.
        permanent: Whether the service treats the call as permanent.
    """

    session_id: str
    service_id: str
    args: str
    return_type: str
    permanent: bool

    def to_soap_parameters(self) -> dict[str, Any]:
        """Render request fields with their wire names."""

        return {
            "sessionid": self.session_id,
            "serviceid": self.service_id,
            "args": self.args,
            "returntype": self.return_type,
            "permanent": self.permanent,
        }


@dataclass(frozen=True)
class LogoutRequest:
    """Logout request parameters (WSDL `logoutRequest` message)."""

    session_id: str

    def to_soap_parameters(self) -> dict[str, Any]:
        """Render request fields with their wire names."""

        return {"p_strSessionId": self.session_id}


@dataclass(frozen=True)
class SoapFault:
    """SOAP 1.1 fault payload.

    Attributes:
        faultcode: Fault code, e.g. `soapenv:Server`.
        faultstring: Human-readable fault text.
        faultactor: Optional fault actor URI.
        detail: Optional opaque detail payload.
    """

    faultcode: str
    faultstring: str
    faultactor: str | None = None
    detail: Any = None


@dataclass(frozen=True)
class SoapCallResult:
    """Transport result of one SOAP operation call.

    Attributes:
        result: Deserialized operation result, wrapped or bare.
        raw_response: Raw SOAP response envelope text.
        soap_headers: HTTP response headers of the SOAP call.
    """

    result: Any
    raw_response: str
    soap_headers: dict[str, Any]
