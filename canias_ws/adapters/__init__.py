"""Adapter layer package for the CANIAS SOAP integration boundary."""

from .canias_error_codes import ErrorCategory, canias_http_status_message
from .canias_errors import (
	CaniasConnectionError,
	CaniasGenericError,
	CaniasHttpError,
	CaniasOperationError,
	CaniasSoapFaultError,
	CaniasTimeoutError,
	CaniasTlsError,
	SoapTransportError,
)
from .canias_soap import CaniasSoapAdapter, CaniasSoapAdapterPool
from .error_classification import (
	ClassifiedError,
	adapter_build_operation_error,
	adapter_classify_error,
	adapter_extract_soap_fault,
	adapter_raise_classified_error,
)
from .interfaces import CaniasSoapAdapterProvider, CaniasSoapPort, SoapClientOptions

__all__ = [
	"CaniasConnectionError",
	"CaniasGenericError",
	"CaniasHttpError",
	"CaniasOperationError",
	"CaniasSoapAdapter",
	"CaniasSoapAdapterPool",
	"CaniasSoapAdapterProvider",
	"CaniasSoapFaultError",
	"CaniasSoapPort",
	"CaniasTimeoutError",
	"CaniasTlsError",
	"ClassifiedError",
	"ErrorCategory",
	"SoapClientOptions",
	"SoapTransportError",
	"adapter_build_operation_error",
	"adapter_classify_error",
	"adapter_extract_soap_fault",
	"adapter_raise_classified_error",
	"canias_http_status_message",
]
