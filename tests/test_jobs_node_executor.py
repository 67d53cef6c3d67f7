"""Regression tests for sequential node execution and output shaping."""

from __future__ import annotations

from typing import Any

import pytest

from canias_ws.adapters import (
    CaniasHttpError,
    CaniasOperationError,
    SoapClientOptions,
    SoapTransportError,
)
from canias_ws.domain import HealthStatus, LoginRequest, SoapCallResult
from canias_ws.jobs import CaniasNodeExecutor, NodeExecutorConfig, job_build_output_record


class _AdapterStub:
    """SOAP adapter stub returning queued results per operation."""

    def __init__(self, results: dict[str, list[Any]]):
        """Initialize adapter stub.

        Args:
            results: Queued results or exceptions per adapter method name.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.calls: list[tuple[str, object]] = []
        self._results = results

    def _next(self, method_name: str, request: object) -> SoapCallResult:
        self.calls.append((method_name, request))
        outcome = self._results[method_name].pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return SoapCallResult(result=outcome, raw_response="<envelope/>", soap_headers={"content-type": "text/xml"})

    def adapter_source_name(self) -> str:
        """Return deterministic source label."""

        return "http://canias.test/ws?wsdl"

    def adapter_login(self, request: LoginRequest) -> SoapCallResult:
        """Return queued login result."""

        return self._next("adapter_login", request)

    def adapter_list_ias_services(self, request: object) -> SoapCallResult:
        """Return queued list result."""

        return self._next("adapter_list_ias_services", request)

    def adapter_call_ias_service(self, request: object) -> SoapCallResult:
        """Return queued call result."""

        return self._next("adapter_call_ias_service", request)

    def adapter_logout(self, request: object) -> SoapCallResult:
        """Return queued logout result."""

        return self._next("adapter_logout", request)

    def adapter_check_health(self) -> HealthStatus:
        """Return healthy status."""

        return HealthStatus(status="ok", detail="wsdl reachable")


class _ProviderStub:
    """Adapter provider stub recording requested client options."""

    def __init__(self, adapter: _AdapterStub):
        """Initialize provider stub.

        Args:
            adapter: Adapter returned for every option set.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.adapter = adapter
        self.requested_options: list[SoapClientOptions] = []

    def adapter_for(self, options: SoapClientOptions) -> _AdapterStub:
        """Record options and return the shared adapter."""

        self.requested_options.append(options)
        return self.adapter


def _build_executor(
    results: dict[str, list[Any]],
    continue_on_fail: bool = True,
) -> tuple[CaniasNodeExecutor, _ProviderStub]:
    """Build executor wired to stub adapter.

    Args:
        results: Queued adapter results.
        continue_on_fail: Batch failure policy.

    Returns:
        tuple[CaniasNodeExecutor, _ProviderStub]: Executor and provider stub.

    Raises:
        ValueError: Raised by executor when config is invalid.
    """

    provider = _ProviderStub(_AdapterStub(results))
    config = NodeExecutorConfig(
        wsdl_url="http://canias.test/ws?wsdl",
        login_request=LoginRequest(
            client="00",
            language="T",
            db_name="IAS803RDB",
            db_server="CANIAS",
            app_server="canias.test:27499",
            username="IASSETUP",
            password="secret",
        ),
        default_timeout_ms=120000,
        continue_on_fail=continue_on_fail,
    )
    return CaniasNodeExecutor(adapter_provider=provider, config=config), provider


def test_jobs_node_login_emits_session_record() -> None:
    """Emit the normalized login result as the item record.

    Returns:
        None: Assertions validate login output.

    Raises:
        AssertionError: Raised when login output is incorrect.
    """

    executor, provider = _build_executor({"adapter_login": [{"loginReturn": "S1"}]})

    output_items = executor.job_execute_items([{"operation": "login"}])

    assert [item.json for item in output_items] == [{"sessionId": "S1"}]
    assert output_items[0].error is None
    assert provider.adapter.calls[0][1].username == "IASSETUP"


def test_jobs_node_return_full_includes_raw_response_and_headers() -> None:
    """Emit result, raw envelope and headers when full response is requested."""

    executor, _provider = _build_executor({"adapter_logout": [None]})

    output_items = executor.job_execute_items([{"operation": "logout", "p_strSessionId": "S1", "returnFull": True}])

    assert output_items[0].json == {
        "result": {"success": True, "response": None},
        "rawResponse": "<envelope/>",
        "soapHeaders": {"content-type": "text/xml"},
    }


@pytest.mark.parametrize(
    ("service_result", "expected_record"),
    [
        ({"callIASServiceReturn": "plain text"}, {"data": "plain text"}),
        ({"callIASServiceReturn": 7}, {"data": 7}),
        ({"callIASServiceReturn": False}, {"data": False}),
        ({"callIASServiceReturn": {"x": 1}}, {"x": 1}),
        ({"callIASServiceReturn": None}, {}),
        ({"callIASServiceReturn": ["a", "b"]}, {"data": ["a", "b"]}),
    ],
)
def test_jobs_node_call_service_shapes_primitive_and_object_results(
    service_result: dict[str, Any],
    expected_record: dict[str, Any],
) -> None:
    """Wrap primitive results, emit mappings directly and map None to an empty record.

    Args:
        service_result: Raw callIASService result.
        expected_record: Expected output record.

    Returns:
        None: Assertions validate output shaping.

    Raises:
        AssertionError: Raised when output shaping is incorrect.
    """

    executor, _provider = _build_executor({"adapter_call_ias_service": [service_result]})

    output_items = executor.job_execute_items(
        [{"operation": "callIASService", "sessionid": "S1", "serviceid": "SRV"}]
    )

    assert output_items[0].json == expected_record


def test_jobs_node_call_service_json_args_are_serialized() -> None:
    """Serialize JSON-mode args and pass return type and permanence through.

    Returns:
        None: Assertions validate callIASService request building.

    Raises:
        AssertionError: Raised when request building is incorrect.
    """

    executor, provider = _build_executor({"adapter_call_ias_service": [{"callIASServiceReturn": "ok"}]})

    executor.job_execute_items(
        [
            {
                "operation": "callIASService",
                "sessionid": "S1",
                "serviceid": "SRV",
                "argsMode": "jsonString",
                "argsJson": {"customer": "C1"},
                "returntype": "xml",
                "permanent": True,
            }
        ]
    )

    request = provider.adapter.calls[0][1]
    assert request.args == '{"customer": "C1"}'
    assert request.return_type == "xml"
    assert request.permanent is True


def test_jobs_node_call_service_raw_args_default_to_empty_string() -> None:
    """Send the raw args string, empty by default."""

    executor, provider = _build_executor({"adapter_call_ias_service": [{"callIASServiceReturn": "ok"}]})

    executor.job_execute_items([{"operation": "callIASService", "sessionid": "S1", "serviceid": "SRV"}])

    assert provider.adapter.calls[0][1].args == ""


def test_jobs_node_invalid_session_id_fails_before_any_network_call() -> None:
    """Reject a malformed session id without requesting an adapter.

    Returns:
        None: Assertions validate validation-first behavior.

    Raises:
        AssertionError: Raised when the adapter is reached.
    """

    executor, provider = _build_executor({})

    output_items = executor.job_execute_items([{"operation": "listIASServices", "listSessionId": "bad id"}])

    assert provider.requested_options == []
    assert output_items[0].error is not None
    assert output_items[0].json["category"] == "generic"
    assert output_items[0].json["error"].startswith("Failed to execute listIASServices operation: Invalid session ID")


def test_jobs_node_unsupported_operation_is_reported_per_item() -> None:
    """Report an unknown operation as a failed item under its raw name."""

    executor, _provider = _build_executor({})

    output_items = executor.job_execute_items([{"operation": "dropDatabase"}])

    assert output_items[0].json["operation"] == "dropDatabase"
    assert "Invalid node parameters" in output_items[0].json["message"]


def test_jobs_node_preserves_order_and_continues_after_failures() -> None:
    """Keep input order and process later items after a failed item.

    Returns:
        None: Assertions validate per-item isolation.

    Raises:
        AssertionError: Raised when ordering or isolation is incorrect.
    """

    executor, _provider = _build_executor(
        {
            "adapter_login": [{"loginReturn": "S1"}],
            "adapter_list_ias_services": [SoapTransportError("HTTP 503", status_code=503)],
            "adapter_logout": [None],
        }
    )

    output_items = executor.job_execute_items(
        [
            {"operation": "login"},
            {"operation": "listIASServices", "listSessionId": "S1"},
            {"operation": "logout", "p_strSessionId": "S1"},
        ]
    )

    assert [item.item_index for item in output_items] == [0, 1, 2]
    assert output_items[0].json == {"sessionId": "S1"}
    assert isinstance(output_items[1].error, CaniasHttpError)
    assert output_items[1].json["message"] == "Service Unavailable - remote server is down (503)"
    assert output_items[1].json["itemIndex"] == 1
    assert output_items[2].json == {"success": True, "response": None}


def test_jobs_node_stops_on_first_failure_when_continue_on_fail_is_disabled() -> None:
    """Raise the first classified error and skip remaining items."""

    executor, provider = _build_executor(
        {
            "adapter_login": [Exception("connect ECONNREFUSED 10.0.0.1:8080"), {"loginReturn": "S2"}],
        },
        continue_on_fail=False,
    )

    with pytest.raises(CaniasOperationError, match="Failed to execute login operation: Cannot connect to server"):
        executor.job_execute_items([{"operation": "login"}, {"operation": "login"}])

    assert len(provider.adapter.calls) == 1


def test_jobs_node_login_without_session_id_is_reported() -> None:
    """Report an empty login response as a failed item."""

    executor, _provider = _build_executor({"adapter_login": [{}]})

    output_items = executor.job_execute_items([{"operation": "login"}])

    assert output_items[0].json["message"] == "Login failed: No session ID returned from server"


def test_jobs_node_client_options_use_item_overrides_then_defaults() -> None:
    """Build client options from item overrides with config fallbacks.

    Returns:
        None: Assertions validate client option resolution.

    Raises:
        AssertionError: Raised when option resolution is incorrect.
    """

    executor, provider = _build_executor({"adapter_login": [{"loginReturn": "S1"}, {"loginReturn": "S2"}]})

    executor.job_execute_items(
        [
            {"operation": "login"},
            {
                "operation": "login",
                "endpoint": "https://proxy.test/ws",
                "advanced": {"timeout": 5000, "disableSslVerification": True},
            },
        ]
    )

    assert provider.requested_options == [
        SoapClientOptions(wsdl_url="http://canias.test/ws?wsdl", endpoint="", timeout_ms=120000),
        SoapClientOptions(
            wsdl_url="http://canias.test/ws?wsdl",
            endpoint="https://proxy.test/ws",
            timeout_ms=5000,
            disable_ssl_verification=True,
        ),
    ]


def test_jobs_build_output_record_wraps_non_mapping_results() -> None:
    """Wrap primitives as `data` and return mappings as plain dicts."""

    call_result = SoapCallResult(result=None, raw_response="", soap_headers={})

    assert job_build_output_record("S1", call_result, return_full=False) == {"data": "S1"}
    assert job_build_output_record({"a": 1}, call_result, return_full=False) == {"a": 1}
    assert job_build_output_record(None, call_result, return_full=False) == {}


@pytest.mark.parametrize("timeout", [0, -5, "soon"])
def test_jobs_node_invalid_advanced_timeout_is_reported_as_validation_failure(timeout: object) -> None:
    """Report an invalid per-item timeout as a generic validation failure.

    Args:
        timeout: Invalid `advanced.timeout` value.

    Returns:
        None: Assertions validate validation-first classification.

    Raises:
        AssertionError: Raised when the item is classified as a network timeout.
    """

    executor, provider = _build_executor({})

    output_items = executor.job_execute_items([{"operation": "login", "advanced": {"timeout": timeout}}])

    record = output_items[0].json
    assert provider.requested_options == []
    assert record["category"] == "generic"
    assert record["message"].startswith("Invalid node parameters: advanced.timeout:")
    assert "description" not in record


def test_jobs_node_login_failure_is_generic() -> None:
    """Classify a login response without session id as a generic failure."""

    executor, _provider = _build_executor({"adapter_login": [{"loginReturn": ""}]})

    output_items = executor.job_execute_items([{"operation": "login"}])

    assert output_items[0].json["category"] == "generic"
