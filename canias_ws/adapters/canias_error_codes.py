"""Canonical error categories and user-facing texts for SOAP failure routing."""

from __future__ import annotations

from enum import Enum
from typing import Final


class ErrorCategory(str, Enum):
    """Categories assigned by the SOAP error classifier."""

    FAULT = "fault"
    HTTP = "http"
    TIMEOUT = "timeout"
    CONNECTION = "connection"
    TLS = "tls"
    GENERIC = "generic"


HTTP_STATUS_MESSAGES: Final[dict[int, str]] = {
    400: "Bad Request - Invalid SOAP message",
    401: "Unauthorized - Check credentials",
    403: "Forbidden - Access denied",
    404: "Not Found - WSDL endpoint not available",
    500: "Internal Server Error - remote server error",
    502: "Bad Gateway - Cannot reach remote server",
    503: "Service Unavailable - remote server is down",
    504: "Gateway Timeout - remote server not responding",
}
HTTP_STATUS_FALLBACK_MESSAGE: Final[str] = "HTTP Error"

TIMEOUT_MESSAGE_MARKERS: Final[tuple[str, ...]] = ("timeout", "ETIMEDOUT")
CONNECTION_MESSAGE_MARKERS: Final[tuple[str, ...]] = ("ECONNREFUSED", "ENOTFOUND", "ECONNRESET")
TLS_MESSAGE_MARKERS: Final[tuple[str, ...]] = ("CERT_", "certificate", "SSL")

TIMEOUT_MESSAGE: Final[str] = "Request timeout"
TIMEOUT_GUIDANCE: Final[str] = "Try increasing the timeout in Advanced settings or check server availability"
CONNECTION_MESSAGE: Final[str] = "Cannot connect to server"
CONNECTION_GUIDANCE: Final[str] = "Check the WSDL URL in credentials and ensure the CANIAS server is accessible"
TLS_MESSAGE: Final[str] = "SSL/TLS certificate error"
TLS_GUIDANCE: Final[str] = (
    'Enable "Disable SSL Verification" in Advanced settings only for non-production servers '
    "using self-signed certificates"
)
UNKNOWN_ERROR_MESSAGE: Final[str] = "Unknown error occurred"


def canias_http_status_message(status_code: int) -> str:
    """Return the human-readable reason for an HTTP status code.

    Args:
        status_code: HTTP status code reported by the transport.

    Returns:
        str: Known reason text, else the generic `HTTP Error` label.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return HTTP_STATUS_MESSAGES.get(status_code, HTTP_STATUS_FALLBACK_MESSAGE)
