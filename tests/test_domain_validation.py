"""Regression tests for session and service identifier validation."""

from __future__ import annotations

import pytest

from canias_ws.domain import CaniasValidationError, domain_validate_service_id, domain_validate_session_id


@pytest.mark.parametrize("session_id", ["", " ", "abc 123", "abc.123", "abc;drop", None])
def test_domain_validate_session_id_rejects_blank_and_malformed_values(session_id: str | None) -> None:
    """Reject blank identifiers and characters outside `[A-Za-z0-9_-]`.

    Args:
        session_id: Invalid candidate session id.

    Returns:
        None: Assertions validate rejection behavior.

    Raises:
        AssertionError: Raised when an invalid id is accepted.
    """

    with pytest.raises(CaniasValidationError):
        domain_validate_session_id(session_id)


def test_domain_validate_session_id_accepts_letters_digits_dashes_underscores() -> None:
    """Accept a well-formed session id unchanged."""

    assert domain_validate_session_id("abc-123_XY") == "abc-123_XY"


def test_domain_validate_session_id_blank_message() -> None:
    """Use the required-field message for blank session ids."""

    with pytest.raises(CaniasValidationError, match="Session ID is required"):
        domain_validate_session_id("   ")


def test_domain_validate_service_id_rejects_blank_and_accepts_any_text() -> None:
    """Reject blank service ids and accept any non-blank value.

    Returns:
        None: Assertions validate service id validation.

    Raises:
        AssertionError: Raised when service id validation is incorrect.
    """

    with pytest.raises(CaniasValidationError, match="Service ID is required"):
        domain_validate_service_id(" ")
    assert domain_validate_service_id("SRV.GetOrders") == "SRV.GetOrders"
