"""
Exceptions raised by the UI layers.
"""
from typing import Optional


class TradeAgentError(Exception):
    """Base class for UI-side errors."""


class SessionExpired(TradeAgentError):
    """The backend answered 401: the stored token is no longer valid."""

    def __init__(self, result=None, message: str = "Your session has expired. Please log in again."):
        super().__init__(message)
        self.result = result


class InvalidCredentials(TradeAgentError):
    """Login rejected by the backend."""


class InputValidationError(TradeAgentError):
    """User input rejected, either client-side or by the backend."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateUser(InputValidationError):
    """Username or email already registered."""


class RequestFailed(TradeAgentError):
    """A backend call failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.status = status
