"""Domain models, validation and response normalization for CANIAS calls."""

from .errors import CaniasLoginFailedError, CaniasValidationError
from .models import (
	CallIASServiceRequest,
	HealthStatus,
	ListIASServicesRequest,
	LoginRequest,
	LogoutRequest,
	Operation,
	SoapCallResult,
	SoapFault,
)
from .responses import (
	BareResponse,
	RawResponseVariant,
	WrappedResponse,
	domain_decode_response,
	domain_normalize_response,
	domain_return_field_name,
)
from .validation import domain_validate_service_id, domain_validate_session_id

__all__ = [
	"BareResponse",
	"CallIASServiceRequest",
	"CaniasLoginFailedError",
	"CaniasValidationError",
	"HealthStatus",
	"ListIASServicesRequest",
	"LoginRequest",
	"LogoutRequest",
	"Operation",
	"RawResponseVariant",
	"SoapCallResult",
	"SoapFault",
	"WrappedResponse",
	"domain_decode_response",
	"domain_normalize_response",
	"domain_return_field_name",
	"domain_validate_service_id",
	"domain_validate_session_id",
]
