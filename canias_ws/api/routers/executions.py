"""Execution API router running one batch of node items per request."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from canias_ws.adapters import CaniasOperationError, ErrorCategory
from canias_ws.jobs import NodeExecutorPort

_CLIENT_ERROR_CATEGORIES = frozenset({ErrorCategory.GENERIC})


class ExecutionRequest(BaseModel):
    """Request body carrying the per-item node parameters.

    Attributes:
        items: Raw node parameters, one mapping per input item.
    """

    items: list[dict[str, Any]] = Field(default_factory=list)


def api_create_executions_router(node_executor: NodeExecutorPort) -> APIRouter:
    """Create execution router for batch node runs.

    Args:
        node_executor: Job-layer node executor.

    Returns:
        APIRouter: Router exposing `/executions` endpoint.

    Raises:
        ValueError: Raised when node_executor is invalid.
    """

    if node_executor is None:
        raise ValueError("node_executor must not be None")

    router = APIRouter(tags=["executions"])

    @router.post("/executions")
    def api_execute_items(request: ExecutionRequest) -> JSONResponse:
        """Execute all items and return one record per item in input order.

        Returns:
            JSONResponse: Output records, or the first error when the batch stops on failure.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        try:
            output_items = node_executor.job_execute_items(request.items)
        except CaniasOperationError as error:
            status_code = (
                status.HTTP_400_BAD_REQUEST
                if error.category in _CLIENT_ERROR_CATEGORIES
                else status.HTTP_502_BAD_GATEWAY
            )
            payload = {"status": "error", **error.operation_error_record()}
            return JSONResponse(content=payload, status_code=status_code)

        payload = {
            "status": "success" if all(item.error is None for item in output_items) else "partial",
            "items": [
                {"json": item.json, "itemIndex": item.item_index, "failed": item.error is not None}
                for item in output_items
            ],
        }
        return JSONResponse(content=jsonable_encoder(payload), status_code=status.HTTP_200_OK)

    return router
