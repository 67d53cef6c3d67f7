"""Domain exceptions raised before or after the SOAP round trip."""

from __future__ import annotations


class CaniasValidationError(ValueError):
    """Invalid node input detected before any network call."""


class CaniasLoginFailedError(RuntimeError):
    """Login response did not carry a session identifier."""
