"""SOAP-fault-aware classification of failed CANIAS operation calls.

Classification is an ordered list of predicate/builder rules evaluated top to
bottom; the first matching rule decides the category. Local validation and
login failures match first and stay generic. The SOAP fault rule searches the
parsed envelope attached to the error first and then makes a best-effort
attempt to parse the raw response body.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import json
import ssl
from typing import Any, Callable, Final, NoReturn

from lxml import etree
import requests

from canias_ws.domain import CaniasLoginFailedError, CaniasValidationError, SoapFault

from .canias_error_codes import (
    CONNECTION_GUIDANCE,
    CONNECTION_MESSAGE,
    CONNECTION_MESSAGE_MARKERS,
    TIMEOUT_GUIDANCE,
    TIMEOUT_MESSAGE,
    TIMEOUT_MESSAGE_MARKERS,
    TLS_GUIDANCE,
    TLS_MESSAGE,
    TLS_MESSAGE_MARKERS,
    UNKNOWN_ERROR_MESSAGE,
    ErrorCategory,
    canias_http_status_message,
)
from .canias_errors import OPERATION_ERROR_TYPES, CaniasOperationError

_FAULT_FIELDS: Final[tuple[str, ...]] = ("faultcode", "faultstring", "faultactor", "detail")
_LOCAL_ERROR_TYPES: Final[tuple[type[Exception], ...]] = (CaniasValidationError, CaniasLoginFailedError)


@dataclass(frozen=True)
class ClassifiedError:
    """Result of classifying one failed operation call.

    Attributes:
        category: Matched error category.
        message: Short user-facing message.
        description: Optional multi-line diagnostic detail.
    """

    category: ErrorCategory
    message: str
    description: str | None = None


def adapter_error_message(error: BaseException) -> str:
    """Return the message carried by an error, or an empty string."""

    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def adapter_error_status_code(error: BaseException) -> int | None:
    """Return the HTTP status code attached to an error, if any."""

    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int) and not isinstance(status_code, bool) and status_code:
        return status_code
    return None


def adapter_extract_soap_fault(error: BaseException) -> SoapFault | None:
    """Extract a SOAP 1.1 fault from an error.

    The parsed envelope attached as `root` is searched first. When absent, the
    raw `body` is parsed as JSON or as a SOAP XML envelope. Body parse failures
    are ignored because the body search is best-effort only.

    Args:
        error: Error raised by the SOAP transport.

    Returns:
        SoapFault | None: Extracted fault, or None when no fault is present.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    fault = _adapter_fault_from_envelope(getattr(error, "root", None))
    if fault is not None:
        return fault

    body = getattr(error, "body", None)
    if body is None or body == "" or body == b"":
        return None
    return _adapter_fault_from_envelope(_adapter_try_parse_body(body))


def adapter_format_fault_message(fault: SoapFault) -> str:
    """Return `SOAP Fault [<faultcode>] <faultstring>` for a fault."""

    parts = ["SOAP Fault"]
    if fault.faultcode:
        parts.append(f"[{fault.faultcode}]")
    if fault.faultstring:
        parts.append(fault.faultstring)
    return " ".join(parts)


def adapter_describe_fault(fault: SoapFault, status_code: int | None) -> str | None:
    """Build the multi-line fault description.

    Args:
        fault: Extracted SOAP fault.
        status_code: Optional HTTP status code carried by the error.

    Returns:
        str | None: Actor, detail and status lines, or None when none apply.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    details: list[str] = []
    if fault.faultactor:
        details.append(f"Actor: {fault.faultactor}")
    if _adapter_has_detail(fault.detail):
        details.append(f"Detail: {adapter_stringify_fault_detail(fault.detail)}")
    if status_code:
        details.append(f"HTTP Status: {status_code}")
    return "\n".join(details) if details else None


def adapter_stringify_fault_detail(detail: Any) -> str:
    """Render an opaque fault detail payload as text.

    Strings are kept as-is, XML elements are serialized, JSON-compatible data
    is pretty-printed and anything else falls back to `str()`.
    """

    if isinstance(detail, str):
        return detail
    if isinstance(detail, etree._Element):
        return etree.tostring(detail, encoding="unicode")
    try:
        return json.dumps(detail, indent=2)
    except (TypeError, ValueError):
        return str(detail)


def _adapter_has_detail(detail: Any) -> bool:
    # lxml elements are falsy when they have no children
    if isinstance(detail, etree._Element):
        return True
    return bool(detail)


def adapter_classify_error(error: BaseException) -> ClassifiedError:
    """Classify a failed operation call.

    Args:
        error: Error raised while executing one operation.

    Returns:
        ClassifiedError: Category, message and optional description of the first matching rule.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    for matches, build in CLASSIFICATION_RULES:
        if matches(error):
            return build(error)
    return _adapter_build_generic(error)


def adapter_build_operation_error(
    error: BaseException,
    item_index: int,
    operation: str,
) -> CaniasOperationError:
    """Classify an error and wrap it in the matching structured exception.

    Args:
        error: Error raised while executing one operation.
        item_index: Index of the failed input item.
        operation: Operation name of the failed item.

    Returns:
        CaniasOperationError: Category-specific structured exception.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    classified = adapter_classify_error(error)
    error_type = OPERATION_ERROR_TYPES[classified.category]
    return error_type(
        classified.message,
        operation=operation,
        item_index=item_index,
        description=classified.description,
    )


def adapter_raise_classified_error(error: BaseException, item_index: int, operation: str) -> NoReturn:
    """Classify an error and raise it as a structured operation error.

    Args:
        error: Error raised while executing one operation.
        item_index: Index of the failed input item.
        operation: Operation name of the failed item.

    Returns:
        NoReturn: This function always raises.

    Raises:
        CaniasOperationError: Always raised, chained to the original error.
    """

    raise adapter_build_operation_error(error, item_index=item_index, operation=operation) from error


def _adapter_error_chain(error: BaseException) -> tuple[BaseException, ...]:
    if error.__cause__ is not None:
        return (error, error.__cause__)
    return (error,)


def _adapter_message_contains(error: BaseException, markers: tuple[str, ...]) -> bool:
    message = adapter_error_message(error)
    return any(marker in message for marker in markers)


def _adapter_is_local(error: BaseException) -> bool:
    return isinstance(error, _LOCAL_ERROR_TYPES)


def _adapter_is_fault(error: BaseException) -> bool:
    return adapter_extract_soap_fault(error) is not None


def _adapter_is_http(error: BaseException) -> bool:
    return adapter_error_status_code(error) is not None


def _adapter_is_timeout(error: BaseException) -> bool:
    if _adapter_message_contains(error, TIMEOUT_MESSAGE_MARKERS):
        return True
    return any(
        isinstance(candidate, (requests.exceptions.Timeout, TimeoutError))
        for candidate in _adapter_error_chain(error)
    )


def _adapter_is_tls_exception(candidate: BaseException) -> bool:
    return isinstance(candidate, (requests.exceptions.SSLError, ssl.SSLError))


def _adapter_is_connection(error: BaseException) -> bool:
    if _adapter_message_contains(error, CONNECTION_MESSAGE_MARKERS):
        return True
    return any(
        isinstance(candidate, (requests.exceptions.ConnectionError, ConnectionError))
        and not _adapter_is_tls_exception(candidate)
        for candidate in _adapter_error_chain(error)
    )


def _adapter_is_tls(error: BaseException) -> bool:
    if _adapter_message_contains(error, TLS_MESSAGE_MARKERS):
        return True
    return any(_adapter_is_tls_exception(candidate) for candidate in _adapter_error_chain(error))


def _adapter_build_fault(error: BaseException) -> ClassifiedError:
    fault = adapter_extract_soap_fault(error)
    if fault is None:
        return _adapter_build_generic(error)
    return ClassifiedError(
        category=ErrorCategory.FAULT,
        message=adapter_format_fault_message(fault),
        description=adapter_describe_fault(fault, adapter_error_status_code(error)),
    )


def _adapter_build_http(error: BaseException) -> ClassifiedError:
    status_code = adapter_error_status_code(error) or 0
    message = adapter_error_message(error)
    return ClassifiedError(
        category=ErrorCategory.HTTP,
        message=f"{canias_http_status_message(status_code)} ({status_code})",
        description=message or None,
    )


def _adapter_build_timeout(_error: BaseException) -> ClassifiedError:
    return ClassifiedError(category=ErrorCategory.TIMEOUT, message=TIMEOUT_MESSAGE, description=TIMEOUT_GUIDANCE)


def _adapter_build_connection(_error: BaseException) -> ClassifiedError:
    return ClassifiedError(
        category=ErrorCategory.CONNECTION,
        message=CONNECTION_MESSAGE,
        description=CONNECTION_GUIDANCE,
    )


def _adapter_build_tls(_error: BaseException) -> ClassifiedError:
    return ClassifiedError(category=ErrorCategory.TLS, message=TLS_MESSAGE, description=TLS_GUIDANCE)


def _adapter_build_generic(error: BaseException) -> ClassifiedError:
    return ClassifiedError(
        category=ErrorCategory.GENERIC,
        message=adapter_error_message(error) or UNKNOWN_ERROR_MESSAGE,
    )


CLASSIFICATION_RULES: Final[
    tuple[tuple[Callable[[BaseException], bool], Callable[[BaseException], ClassifiedError]], ...]
] = (
    (_adapter_is_local, _adapter_build_generic),
    (_adapter_is_fault, _adapter_build_fault),
    (_adapter_is_http, _adapter_build_http),
    (_adapter_is_timeout, _adapter_build_timeout),
    (_adapter_is_connection, _adapter_build_connection),
    (_adapter_is_tls, _adapter_build_tls),
)


def _adapter_fault_from_envelope(envelope: Any) -> SoapFault | None:
    if not isinstance(envelope, Mapping):
        return None
    body = envelope.get("Envelope")
    body = body.get("Body") if isinstance(body, Mapping) else None
    fault = body.get("Fault") if isinstance(body, Mapping) else None
    if not isinstance(fault, Mapping):
        return None

    return SoapFault(
        faultcode=str(fault.get("faultcode") or ""),
        faultstring=str(fault.get("faultstring") or ""),
        faultactor=fault.get("faultactor") or None,
        detail=fault.get("detail"),
    )


def _adapter_try_parse_body(body: Any) -> Any:
    if isinstance(body, Mapping):
        return body
    if not isinstance(body, (str, bytes)):
        return None

    parsed_json = _adapter_try_parse_json(body)
    if parsed_json is not None:
        return parsed_json

    try:
        document = etree.fromstring(body.encode("utf-8") if isinstance(body, str) else body)
    except (etree.XMLSyntaxError, ValueError):
        return None
    return _adapter_xml_envelope_to_mapping(document)


def _adapter_try_parse_json(body: str | bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        return None


def _adapter_xml_envelope_to_mapping(document: etree._Element) -> dict[str, Any] | None:
    for element in document.iter():
        if not isinstance(element.tag, str) or etree.QName(element).localname != "Fault":
            continue

        fault: dict[str, Any] = {}
        for child in element:
            if not isinstance(child.tag, str):
                continue
            name = etree.QName(child).localname
            if name not in _FAULT_FIELDS:
                continue
            if name == "detail":
                fault[name] = child if len(child) else (child.text or "").strip() or None
            else:
                fault[name] = (child.text or "").strip()
        return {"Envelope": {"Body": {"Fault": fault}}}
    return None
