"""Project-native typed exceptions for CANIAS SOAP adapter failures."""

from __future__ import annotations

from typing import Any

from .canias_error_codes import ErrorCategory


class SoapTransportError(Exception):
    """Transport-level failure raised by the SOAP adapter.

    Attributes:
        message: Transport error message.
        status_code: Optional HTTP status code of the failed call.
        body: Optional raw response body.
        root: Optional parsed envelope in `{"Envelope": {"Body": {"Fault": ...}}}` shape.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
        root: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.root = root


class CaniasOperationError(Exception):
    """Structured, user-facing failure of one node item.

    Attributes:
        category: Classifier category of the failure.
        classified_message: Short classified message.
        description: Optional multi-line diagnostic detail.
        item_index: Index of the failed input item.
        operation: Operation name of the failed item.
    """

    category: ErrorCategory = ErrorCategory.GENERIC

    def __init__(
        self,
        message: str,
        operation: str,
        item_index: int,
        description: str | None = None,
    ):
        super().__init__(f"Failed to execute {operation} operation: {message}")
        self.classified_message = message
        self.description = description
        self.item_index = item_index
        self.operation = operation

    def operation_error_record(self) -> dict[str, Any]:
        """Return the error as a JSON-compatible output record.

        Returns:
            dict[str, Any]: Error record for host presentation.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        record: dict[str, Any] = {
            "error": str(self),
            "message": self.classified_message,
            "category": self.category.value,
            "operation": self.operation,
            "itemIndex": self.item_index,
        }
        if self.description is not None:
            record["description"] = self.description
        return record


class CaniasSoapFaultError(CaniasOperationError):
    """Server-reported SOAP fault."""

    category = ErrorCategory.FAULT


class CaniasHttpError(CaniasOperationError):
    """Transport failure carrying an HTTP status code."""

    category = ErrorCategory.HTTP


class CaniasTimeoutError(CaniasOperationError, TimeoutError):
    """SOAP call exceeded the configured timeout."""

    category = ErrorCategory.TIMEOUT


class CaniasConnectionError(CaniasOperationError, ConnectionError):
    """SOAP endpoint could not be reached."""

    category = ErrorCategory.CONNECTION


class CaniasTlsError(CaniasOperationError):
    """TLS handshake or certificate verification failure."""

    category = ErrorCategory.TLS


class CaniasGenericError(CaniasOperationError):
    """Failure not matched by any specific classification rule."""


OPERATION_ERROR_TYPES: dict[ErrorCategory, type[CaniasOperationError]] = {
    ErrorCategory.FAULT: CaniasSoapFaultError,
    ErrorCategory.HTTP: CaniasHttpError,
    ErrorCategory.TIMEOUT: CaniasTimeoutError,
    ErrorCategory.CONNECTION: CaniasConnectionError,
    ErrorCategory.TLS: CaniasTlsError,
    ErrorCategory.GENERIC: CaniasGenericError,
}
