"""Input validation for identifiers passed to session-bound operations."""

from __future__ import annotations

import re
from typing import Final

from .errors import CaniasValidationError

SESSION_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_-]+$")


def domain_validate_session_id(session_id: str | None) -> str:
    """Validate a session identifier returned by a previous login.

    Args:
        session_id: Candidate session identifier.

    Returns:
        str: The unchanged session identifier.

    Raises:
        CaniasValidationError: Raised when the identifier is blank or malformed.
    """

    if not session_id or not session_id.strip():
        raise CaniasValidationError("Session ID is required and cannot be empty")
    if SESSION_ID_PATTERN.fullmatch(session_id) is None:
        raise CaniasValidationError(
            "Invalid session ID format. Session ID should contain only letters, numbers, dashes, and underscores"
        )
    return session_id


def domain_validate_service_id(service_id: str | None) -> str:
    """Validate an IAS service identifier.

    Args:
        service_id: Candidate service identifier.

    Returns:
        str: The unchanged service identifier.

    Raises:
        CaniasValidationError: Raised when the identifier is blank.
    """

    if not service_id or not service_id.strip():
        raise CaniasValidationError("Service ID is required and cannot be empty")
    return service_id
