"""
Authenticated session of one browser.

The session is created once per browser session by the app shell and passed
to every screen. It owns the cached identity and the token slot; the API
client reads the token through ``Session.token``.
"""
import logging
from enum import Enum
from typing import Optional

from pydantic import ValidationError

from utils.api import APIClient
from utils.errors import (
    DuplicateUser,
    InputValidationError,
    InvalidCredentials,
    RequestFailed,
    SessionExpired,
)
from utils.models import Identity, SignupForm
from utils.token_store import TokenStore

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    """Session lifecycle."""
    UNINITIALIZED = "uninitialized"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


_DUPLICATE_MARKERS = ("already taken", "already in use", "already exists")


class Session:
    """Current identity plus login/logout/signup operations."""

    def __init__(self, api_url: str, token_store: TokenStore, timeout: float = 30):
        self.token_store = token_store
        self.api = APIClient(api_url, token_provider=self.token, timeout=timeout)
        self.status = SessionStatus.UNINITIALIZED
        self._identity: Optional[Identity] = None

    def token(self) -> Optional[str]:
        return self.token_store.get()

    # ==================== Lifecycle ====================

    @property
    def resolved(self) -> bool:
        return self.status == SessionStatus.RESOLVED

    def initialize(self) -> Optional[Identity]:
        """Resolve a persisted token to an identity, once."""
        if self.status != SessionStatus.UNINITIALIZED:
            return self._identity
        self.status = SessionStatus.RESOLVING
        token = self.token()
        try:
            if token:
                self._identity = self._fetch_identity(token)
                logger.info(f"Session restored for {self._identity.username}")
        except (SessionExpired, RequestFailed) as e:
            logger.info(f"Discarding stored token: {e}")
            self.token_store.clear()
            self._identity = None
        finally:
            self.status = SessionStatus.RESOLVED
        return self._identity

    def _fetch_identity(self, token: str) -> Identity:
        result = self.api.get_me()
        if not result.ok or not isinstance(result.data, dict):
            raise RequestFailed(result.message("Failed to get user info"), result.status)
        try:
            return Identity.model_validate({**result.data, "token": token})
        except ValidationError as e:
            raise RequestFailed(f"Invalid user info: {e.error_count()} field error(s)", result.status)

    # ==================== Queries ====================

    def current_identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def is_admin(self) -> bool:
        return self._identity is not None and self._identity.is_admin

    # ==================== Operations ====================

    def login(self, username: str, password: str) -> Identity:
        """Authenticate and persist the token. Raises InvalidCredentials."""
        if not username or not password:
            raise InvalidCredentials("Please enter username and password")
        try:
            result = self.api.login(username, password)
        except SessionExpired:
            raise InvalidCredentials("Invalid username or password")
        if result.status == 0:
            raise RequestFailed(result.message("Login failed"))
        if not result.ok or not isinstance(result.data, dict) or not result.data.get("token"):
            raise InvalidCredentials(result.message("Invalid username or password"))

        identity = Identity.model_validate(result.data)
        self.token_store.set(identity.token)
        self._identity = identity
        self.status = SessionStatus.RESOLVED
        logger.info(f"User {identity.username} logged in")
        return identity

    def signup(self, form_data: dict) -> dict:
        """Create an account. Raises InputValidationError or DuplicateUser."""
        confirm = form_data.get("confirmPassword")
        if confirm is not None and confirm != form_data.get("password"):
            raise InputValidationError("Passwords do not match", field="confirmPassword")
        try:
            form = SignupForm.model_validate(form_data)
        except ValidationError as e:
            first = e.errors()[0]
            field = str(first["loc"][0]) if first.get("loc") else None
            raise InputValidationError(_signup_message(field, first.get("msg", "")), field=field)

        try:
            result = self.api.signup(form.to_payload())
        except SessionExpired:
            raise InputValidationError("Signup was rejected by the server")
        if result.ok:
            logger.info(f"Account {form.username} created")
            return result.data if isinstance(result.data, dict) else {}
        if result.status == 0:
            raise RequestFailed(result.message("Signup failed"))

        message = result.message("Signup failed")
        if any(marker in message.lower() for marker in _DUPLICATE_MARKERS):
            raise DuplicateUser(message)
        raise InputValidationError(message)

    def logout(self) -> None:
        """Forget the identity and token; tell the backend best-effort."""
        if self.token():
            try:
                result = self.api.logout()
                if not result.ok:
                    logger.warning(f"Logout call failed: {result.message()}")
            except SessionExpired:
                pass
        username = self._identity.username if self._identity else None
        self.token_store.clear()
        self._identity = None
        self.status = SessionStatus.RESOLVED
        logger.info(f"User {username} logged out")

    def expire(self) -> None:
        """Drop the session after the backend rejected the token."""
        self.token_store.clear()
        self._identity = None
        self.status = SessionStatus.RESOLVED
        logger.info("Session expired")

    def refresh_identity(self) -> Optional[Identity]:
        """Re-read /auth/me so the cached balance follows server-side changes."""
        token = self.token()
        if not token or self._identity is None:
            return self._identity
        try:
            self._identity = self._fetch_identity(token)
        except RequestFailed as e:
            logger.warning(f"Could not refresh identity: {e}")
        return self._identity


def _signup_message(field: Optional[str], fallback: str) -> str:
    labels = {
        "username": "Username is required",
        "email": "Please enter a valid email address",
        "password": "Password is required",
        "firstName": "First name is required",
        "first_name": "First name is required",
        "lastName": "Last name is required",
        "last_name": "Last name is required",
    }
    return labels.get(field or "", fallback or "Invalid signup data")
