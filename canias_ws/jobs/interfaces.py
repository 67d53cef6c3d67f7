"""Typed interfaces for job-layer node execution responsibilities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from canias_ws.adapters import CaniasOperationError


@dataclass(frozen=True)
class NodeOutputItem:
    """Output contract for one processed input item.

    Attributes:
        json: Record emitted to the host.
        item_index: Index of the originating input item.
        error: Structured error when the item failed, else None.
    """

    json: dict[str, Any]
    item_index: int
    error: CaniasOperationError | None = None


class NodeExecutorPort(Protocol):
    """Port definition for executing one batch of node input items."""

    def job_execute_items(self, items: Sequence[Mapping[str, Any]]) -> list[NodeOutputItem]:
        """Execute all items sequentially in input order.

        Args:
            items: Per-item node parameters.

        Returns:
            list[NodeOutputItem]: One output item per input item, in order.

        Raises:
            CaniasOperationError: Raised for the first failed item when the
                batch is configured to stop on failure.
        """
