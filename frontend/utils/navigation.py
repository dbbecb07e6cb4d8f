"""
Navigation state and the top-level reaction to expired sessions.

Kept free of Streamlit imports: the app shell hands in ``st.session_state``
and ``st.query_params``; tests hand in plain dicts.
"""
import logging
from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

from utils.errors import SessionExpired
from utils.router import LOGIN_PATH, normalize_path

logger = logging.getLogger(__name__)

ROUTE_KEY = "route"
NOTICES_KEY = "_notices"


class Navigator:
    """Current path plus one-shot notices shown after the next rerun."""

    def __init__(self, state: MutableMapping, query_params: Optional[MutableMapping] = None):
        self.state = state
        self.query_params = query_params
        if ROUTE_KEY not in self.state:
            initial = query_params.get("page") if query_params is not None else None
            self.state[ROUTE_KEY] = normalize_path(initial)

    @property
    def current(self) -> str:
        return self.state[ROUTE_KEY]

    def go(self, path: str) -> bool:
        """Set the current path. True if it changed."""
        path = normalize_path(path)
        changed = path != self.state.get(ROUTE_KEY)
        self.state[ROUTE_KEY] = path
        if self.query_params is not None and self.query_params.get("page") != path.strip("/"):
            self.query_params["page"] = path.strip("/")
        return changed

    def notify(self, kind: str, message: str) -> None:
        self.state.setdefault(NOTICES_KEY, []).append((kind, message))

    def pop_notices(self) -> list:
        return self.state.pop(NOTICES_KEY, None) or []


def handle_session_expired(error: SessionExpired, session, navigator: Navigator) -> None:
    """Clear the token and route to login; called once per 401 response."""
    logger.info(f"Handling expired session: {error}")
    session.expire()
    navigator.notify("warning", str(error))
    navigator.go(LOGIN_PATH)


@dataclass
class AppContext:
    """Everything a screen needs, passed explicitly."""
    session: Any
    navigator: Navigator
    lifecycle: Any
    settings: Any

    @property
    def api(self):
        return self.session.api
