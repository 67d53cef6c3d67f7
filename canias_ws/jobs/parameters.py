"""Typed per-item node parameters using the host's parameter names."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from canias_ws.domain import CaniasValidationError, Operation


class AdvancedOptions(BaseModel):
    """Per-item transport overrides from the `advanced` parameter collection.

    Attributes:
        timeout: Optional per-call timeout in milliseconds.
        disable_ssl_verification: Optional TLS verification override.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timeout: int | None = Field(default=None, gt=0)
    disable_ssl_verification: bool | None = Field(default=None, alias="disableSslVerification")


class NodeParameters(BaseModel):
    """Parameters of one node input item.

    Field aliases match the host parameter names so raw item parameters can be
    validated directly.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    operation: Operation = Field(default=Operation.LOGIN)
    endpoint: str = Field(default="")
    list_session_id: str = Field(default="", alias="listSessionId")
    session_id: str = Field(default="", alias="sessionid")
    service_id: str = Field(default="", alias="serviceid")
    args_mode: Literal["rawString", "jsonString"] = Field(default="rawString", alias="argsMode")
    args_raw: str = Field(default="", alias="argsRaw")
    args_json: Any = Field(default=None, alias="argsJson")
    return_type: str = Field(default="json", alias="returntype")
    permanent: bool = Field(default=False)
    logout_session_id: str = Field(default="", alias="p_strSessionId")
    return_full: bool = Field(default=False, alias="returnFull")
    advanced: AdvancedOptions = Field(default_factory=AdvancedOptions)

    def parameters_service_args(self) -> str:
        """Return the `args` string sent to callIASService.

        JSON mode serializes `argsJson`, falling back to `{}`; text that is
        already a string is sent unchanged.

        Returns:
            str: Service argument string.

        Raises:
            TypeError: Raised when `argsJson` is not JSON-serializable.
        """

        if self.args_mode == "jsonString":
            if isinstance(self.args_json, str):
                return self.args_json
            return json.dumps(self.args_json if self.args_json is not None else {})
        return self.args_raw


def job_parse_node_parameters(raw_parameters: Mapping[str, Any]) -> NodeParameters:
    """Validate raw item parameters.

    Args:
        raw_parameters: Raw per-item parameter mapping.

    Returns:
        NodeParameters: Validated parameters.

    Raises:
        CaniasValidationError: Raised when parameters are malformed or the operation is unsupported.
    """

    try:
        return NodeParameters.model_validate(dict(raw_parameters))
    except ValidationError as error:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}" for detail in error.errors()
        )
        raise CaniasValidationError(f"Invalid node parameters: {problems}") from error
