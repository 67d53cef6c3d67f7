"""Tests for the batch execution API endpoint."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from fastapi.testclient import TestClient

from canias_ws.adapters import CaniasConnectionError, CaniasGenericError
from canias_ws.api.application import create_api_application
from canias_ws.config import AppSettings
from canias_ws.domain import HealthStatus
from canias_ws.jobs import NodeOutputItem


class _SoapServiceStub:
    """Minimal SOAP adapter stub for API factory dependency injection."""

    def adapter_source_name(self) -> str:
        """Return deterministic target label."""

        return "http://canias.test/ws?wsdl"

    def adapter_check_health(self) -> HealthStatus:
        """Return healthy SOAP result."""

        return HealthStatus(status="ok", detail="wsdl reachable")


class _NodeExecutorStub:
    """Executor stub returning fixed output items or raising a fixed error."""

    def __init__(self, output_items: list[NodeOutputItem] | None = None, error: Exception | None = None):
        """Initialize executor stub.

        Args:
            output_items: Items returned by `job_execute_items`.
            error: Optional error raised instead of returning items.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self.received_items: list[Mapping[str, Any]] = []
        self._output_items = output_items or []
        self._error = error

    def job_execute_items(self, items: Sequence[Mapping[str, Any]]) -> list[NodeOutputItem]:
        """Record items and return configured outcome.

        Args:
            items: Raw item parameters.

        Returns:
            list[NodeOutputItem]: Configured output items.

        Raises:
            Exception: Configured error when present.
        """

        self.received_items = list(items)
        if self._error is not None:
            raise self._error
        return self._output_items


def _build_client(node_executor: _NodeExecutorStub) -> TestClient:
    """Create test client for the API application.

    Args:
        node_executor: Executor stub.

    Returns:
        TestClient: Client bound to the application.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    settings = AppSettings(
        environment_name="test",
        canias_wsdl_url="http://canias.test/ws?wsdl",
        canias_app_server="canias.test:27499",
    )
    return TestClient(create_api_application(settings, _SoapServiceStub(), node_executor))


def test_api_executions_returns_records_in_input_order() -> None:
    """Return one record per item and pass the raw items to the executor.

    Returns:
        None: Assertions validate response behavior.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    node_executor = _NodeExecutorStub(
        output_items=[
            NodeOutputItem(json={"sessionId": "S1"}, item_index=0),
            NodeOutputItem(json={"services": ["A", "B"]}, item_index=1),
        ]
    )
    client = _build_client(node_executor)

    response = client.post(
        "/executions",
        json={"items": [{"operation": "login"}, {"operation": "listIASServices", "listSessionId": "S1"}]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "items": [
            {"json": {"sessionId": "S1"}, "itemIndex": 0, "failed": False},
            {"json": {"services": ["A", "B"]}, "itemIndex": 1, "failed": False},
        ],
    }
    assert node_executor.received_items[1] == {"operation": "listIASServices", "listSessionId": "S1"}


def test_api_executions_reports_partial_status_for_recorded_failures() -> None:
    """Mark the batch partial when an item carries an error record."""

    error = CaniasConnectionError("Cannot connect to server", operation="logout", item_index=1)
    node_executor = _NodeExecutorStub(
        output_items=[
            NodeOutputItem(json={"sessionId": "S1"}, item_index=0),
            NodeOutputItem(json=error.operation_error_record(), item_index=1, error=error),
        ]
    )
    client = _build_client(node_executor)

    response = client.post("/executions", json={"items": [{}, {}]})

    assert response.status_code == 200
    assert response.json()["status"] == "partial"
    assert response.json()["items"][1]["failed"] is True
    assert response.json()["items"][1]["json"]["category"] == "connection"


def test_api_executions_maps_stopped_batch_errors_to_status_codes() -> None:
    """Return 400 for generic failures and 502 for remote failures.

    Returns:
        None: Assertions validate error status mapping.

    Raises:
        AssertionError: Raised when status mapping is incorrect.
    """

    generic_client = _build_client(
        _NodeExecutorStub(error=CaniasGenericError("Session ID is required and cannot be empty", "logout", 0))
    )
    remote_client = _build_client(
        _NodeExecutorStub(error=CaniasConnectionError("Cannot connect to server", "login", 0))
    )

    generic_response = generic_client.post("/executions", json={"items": [{"operation": "logout"}]})
    remote_response = remote_client.post("/executions", json={"items": [{"operation": "login"}]})

    assert generic_response.status_code == 400
    assert generic_response.json()["status"] == "error"
    assert generic_response.json()["error"] == (
        "Failed to execute logout operation: Session ID is required and cannot be empty"
    )
    assert remote_response.status_code == 502
    assert remote_response.json()["category"] == "connection"


def test_api_executions_rejects_non_object_items() -> None:
    """Reject request bodies whose items are not objects."""

    client = _build_client(_NodeExecutorStub())

    response = client.post("/executions", json={"items": ["login"]})

    assert response.status_code == 422
