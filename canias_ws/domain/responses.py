"""Response normalization for Axis 1.4 rpc/encoded CANIAS responses.

The rpc/encoded style wraps each return value in a field named
`<operation>Return`. Some transports unwrap that field and hand back the bare
value, so every raw response is first decoded into one of two variants and
the canonical result is produced by matching on the variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .errors import CaniasLoginFailedError
from .models import Operation


@dataclass(frozen=True)
class WrappedResponse:
    """Raw response carrying the `<operation>Return` wrapper field.

    Attributes:
        value: Value of the wrapper field, possibly None.
    """

    value: Any


@dataclass(frozen=True)
class BareResponse:
    """Raw response already unwrapped by the transport.

    Attributes:
        value: The raw value as returned by the transport.
    """

    value: Any


RawResponseVariant = Union[WrappedResponse, BareResponse]


def domain_return_field_name(operation: Operation) -> str:
    """Return the rpc/encoded wrapper field name for an operation."""

    return f"{operation.value}Return"


def domain_decode_response(operation: Operation, raw_response: Any) -> RawResponseVariant:
    """Decode a raw transport response into its wrapped or bare variant.

    Args:
        operation: Operation that produced the response.
        raw_response: Untyped transport response.

    Returns:
        RawResponseVariant: `WrappedResponse` when the wrapper field is present,
            otherwise `BareResponse`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return_field = domain_return_field_name(operation)
    if isinstance(raw_response, Mapping) and return_field in raw_response:
        return WrappedResponse(value=raw_response[return_field])
    return BareResponse(value=raw_response)


def domain_normalize_response(operation: Operation | str, raw_response: Any) -> Any:
    """Map a raw SOAP response into the canonical result for an operation.

    Args:
        operation: Operation that produced the response.
        raw_response: Untyped transport response, wrapped or bare.

    Returns:
        Any: `{"sessionId"}` for login, `{"services"}` for listIASServices, the
            service return value for callIASService and `{"success", "response"}`
            for logout.

    Raises:
        CaniasLoginFailedError: Raised when a login response carries no session id.
    """

    operation = Operation(operation)
    variant = domain_decode_response(operation, raw_response)

    match (operation, variant):
        case (Operation.LOGIN, WrappedResponse(value=session_id)) if session_id:
            return {"sessionId": session_id}
        case (Operation.LOGIN, BareResponse(value=str() as session_id)) if session_id:
            return {"sessionId": session_id}
        case (Operation.LOGIN, _):
            raise CaniasLoginFailedError("Login failed: No session ID returned from server")

        case (Operation.LIST_IAS_SERVICES, WrappedResponse(value=services)):
            return {"services": services if services is not None else []}
        case (Operation.LIST_IAS_SERVICES, BareResponse(value=list() as services)):
            return {"services": services}
        case (Operation.LIST_IAS_SERVICES, _):
            return {"services": []}

        case (Operation.CALL_IAS_SERVICE, WrappedResponse(value=value) | BareResponse(value=value)):
            return value

        case (Operation.LOGOUT, _):
            return {"success": True, "response": raw_response}

    raise ValueError(f"Unsupported operation: {operation}")
