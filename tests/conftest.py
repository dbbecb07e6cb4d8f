"""
Global test fixtures for TradeAgent UI.

This module provides shared fixtures for all tests including:
- Import path setup for the Streamlit app modules
- Fake HTTP responses for the requests-based API client
- Backend payload factories
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# The app is run with `streamlit run frontend/main.py`, so its modules import
# each other as top-level `utils.*`, `views.*` and `config`.
sys.path.insert(0, str(Path(__file__).parent.parent / "frontend"))


# =============================================================================
# HTTP Fixtures
# =============================================================================

def make_response(status_code: int, payload=None, text: str | None = None) -> MagicMock:
    """
    Build a stand-in for requests.Response.

    Args:
        status_code: HTTP status
        payload: JSON body (None for an empty body)
        text: Raw body; overrides payload and makes .json() fail

    Returns:
        MagicMock with status_code, text and json()
    """
    resp = MagicMock()
    resp.status_code = status_code
    if text is not None:
        resp.text = text
        resp.json.side_effect = ValueError("not json")
    elif payload is None:
        resp.text = ""
    else:
        resp.text = "{}"
        resp.json.return_value = payload
    return resp


@pytest.fixture
def response_factory():
    """Expose make_response to tests."""
    return make_response


# =============================================================================
# Backend Payload Fixtures
# =============================================================================

@pytest.fixture
def user_payload() -> dict:
    """A trader as returned by /auth/me."""
    return {
        "id": 1,
        "username": "jdoe",
        "email": "jdoe@example.com",
        "firstName": "John",
        "lastName": "Doe",
        "balance": 10000.0,
        "roles": ["TRADER"],
        "enabled": True,
        "createdAt": "2025-01-15T10:30:00",
        "updatedAt": [2025, 2, 1, 9, 0, 0],
    }


@pytest.fixture
def admin_payload(user_payload) -> dict:
    """An administrator as returned by /auth/me."""
    return {
        **user_payload,
        "id": 2,
        "username": "admin",
        "email": "admin@example.com",
        "roles": ["ROLE_ADMIN"],
    }


@pytest.fixture
def login_payload(user_payload) -> dict:
    """Successful /auth/login body."""
    return {**user_payload, "token": "jwt-token-abc123", "type": "Bearer"}
